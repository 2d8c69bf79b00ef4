"""
NumberSet - The digit pool and claimed-digit sets of the 15 game.

The same abstraction serves both roles:
- The board: digits still available, starts as {1..9}
- A player's hand: digits claimed so far, starts empty

Iteration is always in ascending numeric order, so subset
enumeration and the reported winning line are deterministic.
"""

from __future__ import annotations
import random
from typing import Iterable, Iterator


DIGITS = range(1, 10)
TARGET = 15
LINE_SIZE = 3
CENTER = 5
CORNERS = frozenset({2, 4, 6, 8})


class InvariantViolation(AssertionError):
    """
    Raised when game bookkeeping is inconsistent.

    Only a logic error can cause this (e.g. inserting a digit that
    is already present). Move validation goes through remove(),
    so untrusted input never reaches here.
    """


class NumberSet:
    """
    A set of small non-negative integers.

    Usage:
        board = NumberSet.full()
        if board.remove(7):
            hand.insert(7)

        line = hand.won()
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[int] = ()):
        self._items: set[int] = set()
        for n in items:
            self.insert(n)

    @classmethod
    def full(cls) -> NumberSet:
        """The starting board: every digit 1 through 9."""
        return cls(DIGITS)

    def insert(self, n: int):
        """Add a number. Adding one that is already present is a bug."""
        if n in self._items:
            raise InvariantViolation(f"{n} is already in {{{self}}}")
        self._items.add(n)

    def remove(self, n: int) -> bool:
        """Remove a number, returning whether it was present."""
        if n in self._items:
            self._items.remove(n)
            return True
        return False

    def is_empty(self) -> bool:
        return not self._items

    def copy(self) -> NumberSet:
        clone = NumberSet()
        clone._items = set(self._items)
        return clone

    def choose(self, n: int) -> list[NumberSet]:
        """
        List every way in which n numbers can be chosen from this set.

        Each subset appears exactly once, in lexicographic order of
        its ascending elements.
        """
        size = len(self._items)
        if n <= 0 or size < n:
            return []
        if size == n:
            return [self.copy()]

        first = min(self._items)
        rest = self.copy()
        rest.remove(first)

        result: list[NumberSet] = []
        for subset in rest.choose(n - 1):
            subset.insert(first)
            result.append(subset)
        result.extend(rest.choose(n))
        return result

    def won(self) -> NumberSet | None:
        """Return the first three numbers summing to 15, if any."""
        for line in self.choose(LINE_SIZE):
            if sum(line) == TARGET:
                return line
        return None

    def heuristic_choice(self, rng: random.Random | None = None) -> int:
        """
        Pick a number using the center-then-corners heuristic.

        5 is the center of the magic square and always wins the pick.
        Otherwise a random corner (2, 4, 6, 8), otherwise any number.

        >>> NumberSet([3, 4, 7]).heuristic_choice()
        4
        """
        if not self._items:
            raise ValueError("No numbers left to choose from")
        if CENTER in self._items:
            return CENTER

        choices = self._items & CORNERS
        if not choices:
            choices = self._items

        rng = rng or random.Random()
        return rng.choice(sorted(choices))

    def __contains__(self, n: object) -> bool:
        return n in self._items

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, NumberSet):
            return self._items == other._items
        if isinstance(other, (set, frozenset)):
            return self._items == other
        return NotImplemented

    def __str__(self) -> str:
        return " ".join(str(n) for n in self)

    def __repr__(self) -> str:
        return f"NumberSet([{', '.join(str(n) for n in self)}])"
