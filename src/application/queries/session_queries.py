"""Session queries (CQRS read operations).

Queries represent requests for session information. They are immutable
dataclasses with question-like names. Queries NEVER change state.
"""

from dataclasses import dataclass
from uuid import UUID

from src.domain.enums.session_status import SessionStatus


@dataclass(frozen=True, kw_only=True)
class GetSession:
    """Get a single session by ID.

    Attributes:
        session_id: Session identifier.
    """

    session_id: UUID


@dataclass(frozen=True, kw_only=True)
class GetSessionByToken:
    """Get a single session by its external token.

    Attributes:
        session_token: External session token.
    """

    session_token: str


@dataclass(frozen=True, kw_only=True)
class ListActiveSessions:
    """List a user's active sessions.

    Attributes:
        user_id: User identifier.
        current_session_token: Caller's token, marked is_current in the result.

    Example:
        >>> query = ListActiveSessions(
        ...     user_id=user_id,
        ...     current_session_token="sess-abc",
        ... )
        >>> result = await handler.handle(query)
    """

    user_id: UUID
    current_session_token: str | None = None


@dataclass(frozen=True, kw_only=True)
class ListSuspiciousSessions:
    """List every session flagged as suspicious."""


@dataclass(frozen=True, kw_only=True)
class ListAllSessions:
    """Operator listing of sessions with optional filters.

    Attributes:
        user_id: Restrict to one user.
        status: Restrict to one status.
        limit: Page size.
        offset: Page offset.
    """

    user_id: UUID | None = None
    status: SessionStatus | None = None
    limit: int = 100
    offset: int = 0
