"""
Line Transport - The text stream a game session talks over.

A session only needs two capabilities:
- LineReader.readline(): await one line of client input
- LineWriter.write()/flush(): send text to the client

Adapters are provided for asyncio streams (TCP clients) and for the
local console. Reading is the only place a session suspends.
"""

from __future__ import annotations
import asyncio
import logging
import sys
from typing import BinaryIO, Protocol, TextIO


CRLF = "\r\n"
ENCODING = "utf-8"

logger = logging.getLogger(__name__)


class GarbledInput(ValueError):
    """A line arrived but its bytes are not valid text."""


class ConnectionClosed(ConnectionError):
    """The client went away while a line was awaited."""


class LineReader(Protocol):
    async def readline(self) -> str:
        """
        Read one line, without its terminator.

        Raises:
            GarbledInput: the line could not be decoded
            ConnectionClosed: end of stream
            OSError: transport failure
        """
        ...


class LineWriter(Protocol):
    newline: str

    def write(self, text: str) -> None:
        ...

    async def flush(self) -> None:
        ...


def writeln(writer: LineWriter, text: str = ""):
    """Write text followed by the writer's line terminator."""
    writer.write(text + writer.newline)


def decode_line(raw: bytes) -> str:
    """Decode a raw line and strip its terminator."""
    try:
        text = raw.decode(ENCODING)
    except UnicodeDecodeError as e:
        raise GarbledInput(f"undecodable input: {raw[:32]!r}") from e
    return text.rstrip("\r\n")


class StreamLineReader:
    """LineReader over an asyncio.StreamReader."""

    def __init__(self, reader: asyncio.StreamReader):
        self._reader = reader

    async def readline(self) -> str:
        try:
            raw = await self._reader.readline()
        except ValueError as e:
            # Line longer than the stream limit; the buffer was discarded.
            raise GarbledInput(str(e)) from e
        if not raw:
            raise ConnectionClosed("client closed the connection")
        return decode_line(raw)


class StreamLineWriter:
    """LineWriter over an asyncio.StreamWriter, CRLF terminated."""

    newline = CRLF

    def __init__(self, writer: asyncio.StreamWriter):
        self._writer = writer

    def write(self, text: str) -> None:
        self._writer.write(text.encode(ENCODING))

    async def flush(self) -> None:
        await self._writer.drain()

    async def close(self):
        self._writer.close()
        try:
            await self._writer.wait_closed()
        except (ConnectionError, OSError) as e:
            logger.debug("error while closing connection: %s", e)


class ConsoleLineReader:
    """LineReader over a blocking binary stream (stdin), read off-loop."""

    def __init__(self, stream: BinaryIO | None = None):
        self._stream = stream or sys.stdin.buffer

    async def readline(self) -> str:
        loop = asyncio.get_running_loop()
        raw = await loop.run_in_executor(None, self._stream.readline)
        if not raw:
            raise ConnectionClosed("end of input")
        return decode_line(raw)


class ConsoleLineWriter:
    """LineWriter over a text stream (stdout)."""

    newline = "\n"

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream or sys.stdout

    def write(self, text: str) -> None:
        self._stream.write(text)

    async def flush(self) -> None:
        self._stream.flush()
