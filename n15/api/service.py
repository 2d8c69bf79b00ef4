"""
API Service - Read-only view of the session registry.

The service:
1. Lists live games
2. Converts a Session into its response schema
3. Reports unknown session IDs as structured errors

This layer is framework-agnostic (the FastAPI app is a thin wrapper).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Union

from .. import __version__
from ..session import SessionManager, Session, LoopState
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


SERVICE_NAME = "n15-server"


@dataclass
class APIService:
    """
    Status service over a SessionManager.

    Usage:
        service = APIService(session_manager=server.manager)
        response = service.get_session(session_id)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def health(self) -> HealthResponse:
        return HealthResponse(
            status="healthy",
            service=SERVICE_NAME,
            version=__version__,
            active_sessions=len(self.session_manager.list_active_sessions()),
        )

    def list_sessions(self) -> SessionListResponse:
        sessions = self.session_manager.list_active_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    def get_session(self, session_id: str) -> Union[SessionResponse, ErrorResponse]:
        """Get one live game, or an error if it doesn't exist."""
        session = self.session_manager.get_session(session_id)
        if session is None:
            return ErrorResponse(
                error=f"Session {session_id} not found",
                error_code=ErrorCode.SESSION_NOT_FOUND,
            )
        return self._session_response(session)

    def _session_response(self, session: Session) -> SessionResponse:
        game = session.game
        state = game.state
        return SessionResponse(
            session_id=session.session_id,
            peer=session.peer,
            status=self._status(session),
            created_at=session.created_at,
            board=list(state.board),
            players=[
                PlayerInfo(
                    name=player.name,
                    is_human=player.is_human,
                    is_current_turn=(
                        not state.is_over and player is state.current_player
                    ),
                    numbers=list(player.numbers),
                )
                for player in state.players
            ],
            moves=[MoveInfo(player=name, digit=digit) for name, digit in game.moves],
        )

    @staticmethod
    def _status(session: Session) -> SessionStatus:
        loop_state = session.game.loop_state
        if loop_state in (LoopState.WON, LoopState.DRAW, LoopState.FAILED):
            return SessionStatus.GAME_OVER
        if session.game.state.human_to_move:
            return SessionStatus.YOUR_TURN
        return SessionStatus.MACHINE_TURN
