"""
Pytest fixtures for n15 tests.
"""

import asyncio
import random

import pytest

from ..engine_core import NumberSet
from ..session import GameSession, GarbledInput, ConnectionClosed, Player


class ScriptedReader:
    """
    LineReader that replays a fixed list of client lines.

    Entries may be str (a decoded line), bytes (decoded like a real
    stream, so invalid UTF-8 raises GarbledInput) or an exception
    instance to raise. Running out of lines closes the connection.
    """

    def __init__(self, lines):
        self.lines = list(lines)
        self.reads = 0

    async def readline(self) -> str:
        self.reads += 1
        if not self.lines:
            raise ConnectionClosed("script exhausted")
        line = self.lines.pop(0)
        if isinstance(line, BaseException):
            raise line
        if isinstance(line, bytes):
            try:
                return line.decode("utf-8").rstrip("\r\n")
            except UnicodeDecodeError as e:
                raise GarbledInput(str(e)) from e
        return line


class RecordingWriter:
    """LineWriter that keeps everything written, CRLF terminated."""

    newline = "\r\n"

    def __init__(self, fail_after_flushes=None):
        self.chunks: list[str] = []
        self.flushes = 0
        self.fail_after_flushes = fail_after_flushes

    def write(self, text: str) -> None:
        self.chunks.append(text)

    async def flush(self) -> None:
        if self.fail_after_flushes is not None and self.flushes >= self.fail_after_flushes:
            raise BrokenPipeError("client went away")
        self.flushes += 1

    @property
    def text(self) -> str:
        return "".join(self.chunks)

    @property
    def lines(self) -> list[str]:
        return self.text.split("\r\n")


class IdleMachine(Player):
    """Machine stand-in that never claims anything."""

    async def make_move(self, game, reader, writer) -> int:
        return 0


def run(coro):
    return asyncio.run(coro)


def human_session(lines, idle_machine=True, **kwargs):
    """A session where the human moves first, optionally against an idle machine."""
    reader = ScriptedReader(lines)
    writer = RecordingWriter()
    kwargs.setdefault("rng", random.Random(0))
    session = GameSession(reader, writer, human_first=True, **kwargs)
    if idle_machine:
        session.machine = IdleMachine(session.state.machine)
    return session, reader, writer


@pytest.fixture
def full_board() -> NumberSet:
    return NumberSet.full()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
