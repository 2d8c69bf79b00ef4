"""
API Module - HTTP status interface.

Exposes the live session registry for monitoring:
1. Health check
2. List of games in progress
3. Board and hands of one game

All state is session-scoped and in-memory.
"""

from .schemas import (
    SessionResponse,
    SessionListResponse,
    SessionStatus,
    PlayerInfo,
    MoveInfo,
    ErrorResponse,
    ErrorCode,
    HealthResponse,
)
from .service import APIService
from .app import create_app

__all__ = [
    "SessionResponse",
    "SessionListResponse",
    "SessionStatus",
    "PlayerInfo",
    "MoveInfo",
    "ErrorResponse",
    "ErrorCode",
    "HealthResponse",
    "APIService",
    "create_app",
]
