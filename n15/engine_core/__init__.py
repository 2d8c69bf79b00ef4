"""
Engine Core - Game bookkeeping for 15.

The engine provides:
1. NumberSet: the board and the players' claimed digits
2. Win detection (three digits summing to 15)
3. The center/corner move heuristic
4. GameState: the board/hands partition and turn order
"""

from .numbers import NumberSet, InvariantViolation, CENTER, CORNERS, DIGITS, TARGET
from .state import GameState, GamePhase, PlayerState, HUMAN_NAME, MACHINE_NAME

__all__ = [
    "NumberSet",
    "InvariantViolation",
    "CENTER",
    "CORNERS",
    "DIGITS",
    "TARGET",
    "GameState",
    "GamePhase",
    "PlayerState",
    "HUMAN_NAME",
    "MACHINE_NAME",
]
