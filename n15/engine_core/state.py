"""
Game State - Board and player bookkeeping for one game of 15.

Design principles:
- Partitioned: every digit 1-9 is in exactly one of the board,
  the human's hand or the machine's hand
- Owned: a GameState belongs to a single session and is never shared
- Moves only go through claim(), which is the validation gate
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .numbers import NumberSet, InvariantViolation, DIGITS


HUMAN_NAME = "you"
MACHINE_NAME = "I"


class GamePhase(Enum):
    """High-level game phases."""
    PLAYING = "playing"
    WON = "won"
    DRAW = "draw"


@dataclass
class PlayerState:
    """
    State for a single player.

    Both the computer and the human carry the same state: a display
    name and the digits claimed so far.
    """
    name: str
    is_human: bool = True
    numbers: NumberSet = field(default_factory=NumberSet)


@dataclass
class GameState:
    """
    Complete state of one game.

    Usage:
        state = GameState.create(human_first=True)
        if state.claim(state.current_player, 5):
            ...
        state.advance_turn()
    """
    board: NumberSet = field(default_factory=NumberSet.full)
    human: PlayerState = field(default_factory=lambda: PlayerState(HUMAN_NAME, is_human=True))
    machine: PlayerState = field(default_factory=lambda: PlayerState(MACHINE_NAME, is_human=False))
    human_to_move: bool = True
    phase: GamePhase = GamePhase.PLAYING

    @classmethod
    def create(cls, human_first: bool = True) -> GameState:
        """Create the initial state: full board, empty hands."""
        return cls(human_to_move=human_first)

    @property
    def players(self) -> tuple[PlayerState, PlayerState]:
        return (self.human, self.machine)

    @property
    def current_player(self) -> PlayerState:
        return self.human if self.human_to_move else self.machine

    @property
    def waiting_player(self) -> PlayerState:
        return self.machine if self.human_to_move else self.human

    def opponent_of(self, player: PlayerState) -> PlayerState:
        return self.machine if player is self.human else self.human

    def claim(self, player: PlayerState, n: int) -> bool:
        """
        Move a digit from the board to a player's hand.

        Returns False (and changes nothing) when n is not available.
        """
        if not self.board.remove(n):
            return False
        player.numbers.insert(n)
        return True

    def advance_turn(self):
        self.human_to_move = not self.human_to_move

    def winning_line(self, player: PlayerState) -> NumberSet | None:
        return player.numbers.won()

    def check_partition(self):
        """Raise InvariantViolation unless board and hands partition 1-9."""
        seen: list[int] = []
        for numbers in (self.board, self.human.numbers, self.machine.numbers):
            seen.extend(numbers)
        if sorted(seen) != list(DIGITS):
            raise InvariantViolation(
                f"board [{self.board}], {self.human.name} [{self.human.numbers}], "
                f"{self.machine.name} [{self.machine.numbers}] do not partition 1-9"
            )

    @property
    def is_over(self) -> bool:
        return self.phase != GamePhase.PLAYING
