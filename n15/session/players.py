"""
Players - The two ways a move gets made.

HumanPlayer: prompts the remote client and validates its answer.
MachinePlayer: asks a MovePolicy, never reads input.

The game loop calls make_move() on whichever player is up; both
mutate the shared GameState through claim().
"""

from __future__ import annotations
from abc import ABC, abstractmethod
import logging
import re

from ..bots import MovePolicy, HeuristicPolicy
from ..engine_core import GameState, PlayerState, InvariantViolation
from .transport import LineReader, LineWriter, GarbledInput, writeln


logger = logging.getLogger(__name__)

# Non-negative decimal integer, optionally with a leading plus sign.
_MOVE_PATTERN = re.compile(r"\+?[0-9]+")

# Answers must fit an unsigned 64-bit integer.
_MOVE_LIMIT = 2 ** 64

PROMPT = "move: "
GARBLED = "garbled input"
BAD_CHOICE = "bad choice try again"
UNAVAILABLE_CHOICE = "unavailable choice try again"


def parse_move(answer: str) -> int | None:
    """Parse a client answer into a number, or None if it isn't one."""
    answer = answer.strip()
    if not _MOVE_PATTERN.fullmatch(answer):
        return None
    digits = answer.lstrip("+").lstrip("0")
    if len(digits) > len(str(_MOVE_LIMIT)):
        return None
    n = int(digits or "0")
    return n if n < _MOVE_LIMIT else None


class Player(ABC):
    """Interface used by the game loop for interacting with either player."""

    def __init__(self, state: PlayerState):
        self.state = state

    @property
    def name(self) -> str:
        return self.state.name

    @abstractmethod
    async def make_move(
        self,
        game: GameState,
        reader: LineReader,
        writer: LineWriter,
    ) -> int:
        """
        Make a move in the current game, altering it.

        Returns:
            The digit that was claimed
        """
        pass


class HumanPlayer(Player):
    """This player asks the remote client for each move."""

    async def make_move(
        self,
        game: GameState,
        reader: LineReader,
        writer: LineWriter,
    ) -> int:
        opponent = game.opponent_of(self.state)
        while True:
            writeln(writer, f"{opponent.name}: {opponent.numbers}")
            writeln(writer, f"{self.name}: {self.state.numbers}")
            writeln(writer, f"available: {game.board}")
            writer.write(PROMPT)
            await writer.flush()

            try:
                answer = await reader.readline()
            except GarbledInput as e:
                writeln(writer)
                writeln(writer, GARBLED)
                logger.warning("garbled input: %s", e)
                continue

            n = parse_move(answer)
            if n is None:
                writeln(writer, BAD_CHOICE)
                continue

            if game.claim(self.state, n):
                return n
            writeln(writer, UNAVAILABLE_CHOICE)


class MachinePlayer(Player):
    """This player picks its moves with a MovePolicy."""

    def __init__(self, state: PlayerState, policy: MovePolicy | None = None):
        super().__init__(state)
        self.policy = policy or HeuristicPolicy()

    async def make_move(
        self,
        game: GameState,
        reader: LineReader,
        writer: LineWriter,
    ) -> int:
        opponent = game.opponent_of(self.state)
        decision = self.policy.select_move(
            game.board.copy(),
            self.state.numbers.copy(),
            opponent.numbers.copy(),
        )
        writeln(writer, f"{self.name} choose {decision.digit}")
        if not game.claim(self.state, decision.digit):
            raise InvariantViolation(
                f"{self.policy.get_name()} chose unavailable digit {decision.digit}"
            )
        logger.debug("%s chose %d (%s)", self.name, decision.digit, decision.explanation)
        return decision.digit
