"""
Bot Policy - Interface for automated move selection.

A MovePolicy looks at the board and both hands and returns a
decision. Decisions include:
- Which digit to claim
- Explanation (for logs/debugging)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
import random
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..engine_core.numbers import NumberSet


@dataclass
class MoveDecision:
    """A digit chosen by a bot, with the reason it was chosen."""
    digit: int
    explanation: str = ""


class MovePolicy(ABC):
    """
    Abstract base class for move policies.

    Implementations only ever pick from the digits on the board,
    so applying their decision cannot fail.
    """

    @abstractmethod
    def select_move(
        self,
        board: NumberSet,
        own: NumberSet,
        opponent: NumberSet,
    ) -> MoveDecision:
        """
        Select a digit from the board.

        Args:
            board: Digits still available
            own: Digits this bot has claimed
            opponent: Digits the opponent has claimed

        Returns:
            MoveDecision with the selected digit
        """
        pass

    def get_name(self) -> str:
        """Get the policy's name/identifier."""
        return self.__class__.__name__


class HeuristicPolicy(MovePolicy):
    """
    Center first, then corners, then anything.

    Not an optimal solver: a careful opponent can still beat it.
    """

    def __init__(self, seed: int | None = None, rng: random.Random | None = None):
        self.rng = rng or random.Random(seed)

    def select_move(
        self,
        board: NumberSet,
        own: NumberSet,
        opponent: NumberSet,
    ) -> MoveDecision:
        digit = board.heuristic_choice(self.rng)
        return MoveDecision(digit=digit, explanation="Center/corner heuristic")


class RandomPolicy(MovePolicy):
    """
    Random policy - picks any available digit uniformly.

    Used for:
    - Testing
    - Baseline comparison
    """

    def __init__(self, seed: int | None = None, rng: random.Random | None = None):
        self.rng = rng or random.Random(seed)

    def select_move(
        self,
        board: NumberSet,
        own: NumberSet,
        opponent: NumberSet,
    ) -> MoveDecision:
        if board.is_empty():
            raise ValueError("No digits available")

        digit = self.rng.choice(list(board))
        return MoveDecision(digit=digit, explanation="Selected randomly")


POLICIES: dict[str, type[MovePolicy]] = {
    "heuristic": HeuristicPolicy,
    "random": RandomPolicy,
}


def create_policy(
    name: str,
    seed: int | None = None,
    rng: random.Random | None = None,
) -> MovePolicy:
    """Build a policy by registry name."""
    try:
        policy_cls = POLICIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown policy {name!r}, expected one of: {', '.join(sorted(POLICIES))}"
        ) from None
    return policy_cls(seed=seed, rng=rng)
