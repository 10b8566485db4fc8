"""Session repository protocol for persistence abstraction.

This module defines the port (interface) for session persistence.
Infrastructure layer implements the adapters (SQLAlchemy, in-memory).

Ordering:
    - find_by_user_id returns newest first (created_at descending)
    - find_by_status and find_all return newest first
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.domain.entities.session import Session
from src.domain.enums.session_status import SessionStatus


class SessionRepository(Protocol):
    """Session repository protocol (port) for persistence.

    Defines the interface for session storage operations. Implementations
    raise on storage failures; callers decide whether to propagate or
    convert them into Result values.

    Example:
        >>> class SQLAlchemySessionRepository:
        ...     async def save(self, session: Session) -> None:
        ...         ...
        >>> # SQLAlchemySessionRepository implements SessionRepository
        >>> # via structural typing (no inheritance needed)
    """

    async def save(self, session: Session) -> None:
        """Save or update a session.

        Creates the session if it doesn't exist, updates it if it does.

        Args:
            session: Session entity to persist.
        """
        ...

    async def find_by_id(self, session_id: UUID) -> Session | None:
        """Find session by ID.

        Args:
            session_id: Session identifier.

        Returns:
            Session if found, None otherwise.
        """
        ...

    async def find_by_token(self, session_token: str) -> Session | None:
        """Find session by its external session token.

        Args:
            session_token: Token issued by the authentication layer.

        Returns:
            Session if found, None otherwise.
        """
        ...

    async def find_by_user_id(
        self,
        user_id: UUID,
        *,
        status: SessionStatus | None = None,
    ) -> list[Session]:
        """Find all sessions for a user, newest first.

        Args:
            user_id: User identifier.
            status: Optional status filter.

        Returns:
            List of sessions, empty if none found.
        """
        ...

    async def find_by_status(self, status: SessionStatus) -> list[Session]:
        """Find all sessions with the given status, newest first."""
        ...

    async def find_all(
        self,
        *,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Session]:
        """Page through all sessions, newest first."""
        ...

    async def count_all(self) -> int:
        """Total number of stored sessions."""
        ...

    async def update_activity(self, session_token: str, at: datetime) -> bool:
        """Set last_activity for the session with the given token.

        Args:
            session_token: Token of the session to touch.
            at: Activity timestamp (UTC).

        Returns:
            True if a session was updated, False if the token is unknown.
        """
        ...
