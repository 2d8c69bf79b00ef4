"""
Session Manager - Tracks the games currently being played.

LIFECYCLE:
1. Client connects -> session registered with its GameSession
2. Game runs to a win, a draw, or a dropped connection
3. Session ended -> removed from the registry, ALL state dropped

PERSISTENCE RULES:
- NO database, sessions are in-memory only
- Nothing survives a restart
- Sessions never share game state with each other

The registry exists so the status API can show what is going on.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import uuid
import time

from .game_loop import GameSession


logger = logging.getLogger(__name__)


@dataclass
class Session:
    """
    A live game and the connection it belongs to.

    The session is dropped when the game ends.
    """
    session_id: str
    game: GameSession
    created_at: float
    peer: str = "unknown"


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Register a session per connection
    - Look sessions up for the status API
    - Drop sessions when their game ends
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create_session(self, game: GameSession, peer: str = "unknown") -> Session:
        """
        Register a new game session.

        Args:
            game: The game being played on this connection
            peer: Client address, for display

        Returns:
            The registered Session
        """
        session = Session(
            session_id=str(uuid.uuid4()),
            game=game,
            created_at=time.time(),
            peer=peer,
        )
        self._sessions[session.session_id] = session
        logger.debug("session %s registered for %s", session.session_id, peer)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and forget it.

        Returns whether the session existed.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False

        logger.debug("session %s ended: %s", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return list(self._sessions)

    def __len__(self) -> int:
        return len(self._sessions)
