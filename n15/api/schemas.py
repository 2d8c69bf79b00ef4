"""
Pydantic Schemas - Response models for the status API.

The API is read-only: it reports live games, it never plays them.
All responses are JSON with explicit schemas.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SessionStatus(str, Enum):
    """Session status values."""
    YOUR_TURN = "your_turn"
    MACHINE_TURN = "machine_turn"
    GAME_OVER = "game_over"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"


class PlayerInfo(BaseModel):
    """One player's claimed digits."""
    name: str
    is_human: bool
    is_current_turn: bool = False
    numbers: list[int] = Field(default_factory=list)


class MoveInfo(BaseModel):
    """A completed move."""
    player: str
    digit: int = Field(ge=1, le=9)


class SessionResponse(BaseModel):
    """A live game as seen from the outside."""
    session_id: str
    peer: str
    status: SessionStatus
    created_at: float
    board: list[int] = Field(default_factory=list, description="Digits still available")
    players: list[PlayerInfo] = Field(default_factory=list)
    moves: list[MoveInfo] = Field(default_factory=list)


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class ErrorResponse(BaseModel):
    """Error body returned with non-2xx responses."""
    error: str
    error_code: ErrorCode
    details: Optional[dict] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
    active_sessions: int = 0
