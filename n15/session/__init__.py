"""
Session Module - One game per client connection.

A session represents one play-through of 15:
- Created when a client connects
- Holds the board and both players' digits
- Talks to the client over a line-oriented text stream
- Destroyed when the game ends

Sessions are EPHEMERAL and never share state with each other.
"""

from .transport import (
    LineReader,
    LineWriter,
    StreamLineReader,
    StreamLineWriter,
    ConsoleLineReader,
    ConsoleLineWriter,
    GarbledInput,
    ConnectionClosed,
)
from .players import Player, HumanPlayer, MachinePlayer
from .game_loop import GameSession, GameResult, LoopState, Outcome, BANNER
from .manager import SessionManager, Session

__all__ = [
    "LineReader",
    "LineWriter",
    "StreamLineReader",
    "StreamLineWriter",
    "ConsoleLineReader",
    "ConsoleLineWriter",
    "GarbledInput",
    "ConnectionClosed",
    "Player",
    "HumanPlayer",
    "MachinePlayer",
    "GameSession",
    "GameResult",
    "LoopState",
    "Outcome",
    "BANNER",
    "SessionManager",
    "Session",
]
