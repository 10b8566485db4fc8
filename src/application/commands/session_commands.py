"""Session management commands (CQRS write operations).

Commands represent intent to change session state.
All commands are immutable (frozen=True) and use keyword-only arguments (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- Handlers execute business logic
- Commands don't return values (handlers return Result types)
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

DEFAULT_REVOCATION_REASON = "Manual revocation"
REVOKE_ALL_REASON = "Revoked as part of revoking all sessions"


@dataclass(frozen=True, kw_only=True)
class CreateSession:
    """Record a new login session and run suspicious activity detection.

    Called by the login flow once credentials have been verified and a
    transport session token has been issued.

    Attributes:
        user_id: User who logged in.
        session_token: External session token (must be unique).
        device_info: Raw user agent string.
        ip_address: Client IP address.
        location: Location label, if the caller already knows it.
        expires_at: When the session expires, if bounded.

    Example:
        >>> command = CreateSession(
        ...     user_id=user_id,
        ...     session_token="sess-abc",
        ...     device_info="Mozilla/5.0...",
        ...     ip_address="41.90.12.7",
        ...     location="Nairobi",
        ... )
        >>> result = await handler.handle(command)
    """

    user_id: UUID
    session_token: str
    device_info: str | None = None
    ip_address: str | None = None
    location: str | None = None
    expires_at: datetime | None = None


@dataclass(frozen=True, kw_only=True)
class TouchSessionActivity:
    """Bump last_activity for the session with this token.

    Attributes:
        session_token: External session token.
    """

    session_token: str


@dataclass(frozen=True, kw_only=True)
class EndSession:
    """End a session on logout (status becomes inactive).

    Attributes:
        session_token: External session token of the session to end.
    """

    session_token: str


@dataclass(frozen=True, kw_only=True)
class RevokeSession:
    """Revoke a specific session.

    When requested_by is set the revoke is self-service: the session must
    belong to that user and must not be the caller's current session.
    Operators revoke without requested_by.

    Attributes:
        session_id: Session to revoke.
        reason: Revocation reason for audit.
        requested_by: User performing a self-service revoke.
        current_session_token: Caller's own session token.

    Example:
        >>> command = RevokeSession(
        ...     session_id=session_id,
        ...     reason="Revoked by user",
        ...     requested_by=user_id,
        ...     current_session_token="sess-abc",
        ... )
        >>> result = await handler.handle(command)
    """

    session_id: UUID
    reason: str | None = None
    requested_by: UUID | None = None
    current_session_token: str | None = None


@dataclass(frozen=True, kw_only=True)
class RevokeAllUserSessions:
    """Revoke all sessions for a user, optionally keeping one.

    Attributes:
        user_id: User whose sessions are revoked.
        except_session_token: Token of a session to leave untouched.
        reason: Revocation reason for audit.
    """

    user_id: UUID
    except_session_token: str | None = None
    reason: str = REVOKE_ALL_REASON


@dataclass(frozen=True, kw_only=True)
class MarkSessionSuspicious:
    """Operator flag of a session as suspicious.

    Attributes:
        session_id: Session to flag.
    """

    session_id: UUID


@dataclass(frozen=True, kw_only=True)
class AnalyzeSessionHistory:
    """Run the history correlation sweep for a user.

    Attributes:
        user_id: User to analyse.
    """

    user_id: UUID
