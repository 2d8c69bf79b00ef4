"""
Game Loop - Runs one game of 15 against one remote client.

The loop:
1. Send the version banner
2. Current player makes a move (human prompt or machine policy)
3. Mover holds three digits summing to 15 -> announce win, stop
4. Board empty -> announce draw, stop
5. Otherwise switch players and repeat

Transport failures abort the game and propagate to the caller.
Bad client input never does: the human is simply asked again.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import random

from ..bots import MovePolicy, HeuristicPolicy
from ..engine_core import GameState, GamePhase, NumberSet
from .players import Player, HumanPlayer, MachinePlayer
from .transport import LineReader, LineWriter, writeln


logger = logging.getLogger(__name__)

BANNER = "n15 v0.0.0.1"


class LoopState(Enum):
    """State of the game loop."""
    CREATED = "created"
    AWAITING_MOVE = "awaiting_move"
    MOVE_APPLIED = "move_applied"
    WON = "won"
    DRAW = "draw"
    FAILED = "failed"


class Outcome(Enum):
    WIN = "win"
    DRAW = "draw"


@dataclass
class GameResult:
    """
    How a finished game ended.

    winner and line are only set for a win.
    """
    outcome: Outcome
    winner: str | None = None
    line: NumberSet | None = None
    moves: list[tuple[str, int]] = field(default_factory=list)


class GameSession:
    """
    The game driver for a single connection.

    Usage:
        session = GameSession(reader, writer, rng=random.Random(seed))
        result = await session.run()
    """

    def __init__(
        self,
        reader: LineReader,
        writer: LineWriter,
        rng: random.Random | None = None,
        policy: MovePolicy | None = None,
        human_first: bool | None = None,
        banner: str | None = BANNER,
    ):
        self.reader = reader
        self.writer = writer
        self.rng = rng or random.Random()
        self.banner = banner

        if human_first is None:
            human_first = self.rng.random() < 0.5
        self.state = GameState.create(human_first=human_first)

        self.human: Player = HumanPlayer(self.state.human)
        self.machine: Player = MachinePlayer(
            self.state.machine,
            policy or HeuristicPolicy(rng=self.rng),
        )

        self.loop_state = LoopState.CREATED
        self.moves: list[tuple[str, int]] = []

    @property
    def current_player(self) -> Player:
        return self.human if self.state.human_to_move else self.machine

    async def run(self) -> GameResult:
        """Play the game to the end."""
        try:
            return await self._play()
        except Exception:
            self.loop_state = LoopState.FAILED
            raise

    async def _play(self) -> GameResult:
        if self.banner:
            writeln(self.writer, self.banner)

        while True:
            writeln(self.writer)
            player = self.current_player

            self.loop_state = LoopState.AWAITING_MOVE
            digit = await player.make_move(self.state, self.reader, self.writer)
            self.moves.append((player.name, digit))
            self.loop_state = LoopState.MOVE_APPLIED
            self.state.check_partition()
            logger.debug("%s took %d, board now [%s]", player.name, digit, self.state.board)

            line = self.state.winning_line(player.state)
            if line is not None:
                writeln(self.writer)
                writeln(self.writer, str(line))
                writeln(self.writer, f"{player.name} win")
                await self.writer.flush()
                self.state.phase = GamePhase.WON
                self.loop_state = LoopState.WON
                return GameResult(
                    outcome=Outcome.WIN,
                    winner=player.name,
                    line=line,
                    moves=list(self.moves),
                )

            if self.state.board.is_empty():
                writeln(self.writer)
                writeln(self.writer, "draw")
                await self.writer.flush()
                self.state.phase = GamePhase.DRAW
                self.loop_state = LoopState.DRAW
                return GameResult(outcome=Outcome.DRAW, moves=list(self.moves))

            self.state.advance_turn()
