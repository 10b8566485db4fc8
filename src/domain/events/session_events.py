"""Session domain events.

Lifecycle events:
    - SessionCreated, SessionEnded, SessionRevoked, UserSessionsRevoked
    - Emitted after the session store has been updated

Detection events:
    - SuspiciousSessionDetected: a login or an operator flagged a session
    - SessionHistoryAnalyzed: a history correlation sweep completed

Handlers must be lightweight; the bus runs them inline with the request.
"""

from dataclasses import dataclass, field
from uuid import UUID

from src.domain.events.base_event import DomainEvent


@dataclass(frozen=True, kw_only=True, slots=True)
class SessionCreated(DomainEvent):
    """Emitted when a new session is recorded at login.

    Attributes:
        session_id: The new session's ID.
        user_id: User who logged in.
        ip_address: Client IP address.
        location: Location label, if known.
        browser_name: Parsed browser family.
        os_name: Parsed OS family.
        status: Status after detection ran ("active" or "suspicious").
    """

    session_id: UUID
    user_id: UUID
    ip_address: str | None = None
    location: str | None = None
    browser_name: str | None = None
    os_name: str | None = None
    status: str = "active"


@dataclass(frozen=True, kw_only=True, slots=True)
class SessionEnded(DomainEvent):
    """Emitted when a session is ended by logout.

    Attributes:
        session_id: The ended session's ID.
        user_id: User who logged out.
    """

    session_id: UUID
    user_id: UUID


@dataclass(frozen=True, kw_only=True, slots=True)
class SessionRevoked(DomainEvent):
    """Emitted when a single session is revoked.

    Attributes:
        session_id: The revoked session's ID.
        user_id: User who owned the session.
        reason: Revocation reason.
        revoked_by_user: Whether the owner revoked it (vs operator/system).
    """

    session_id: UUID
    user_id: UUID
    reason: str
    revoked_by_user: bool = False


@dataclass(frozen=True, kw_only=True, slots=True)
class UserSessionsRevoked(DomainEvent):
    """Emitted after a bulk revoke of a user's sessions.

    Attributes:
        user_id: User whose sessions were revoked.
        reason: Revocation reason.
        revoked_count: Number of sessions newly revoked.
        failed_count: Number of sessions that could not be revoked.
    """

    user_id: UUID
    reason: str
    revoked_count: int
    failed_count: int = 0


@dataclass(frozen=True, kw_only=True, slots=True)
class SuspiciousSessionDetected(DomainEvent):
    """Emitted when a session is flagged as suspicious.

    Attributes:
        session_id: The flagged session's ID.
        user_id: Owner of the session.
        reason: Why the session was flagged.
        ip_address: Client IP of the session.
        location: Location label of the session.
        flagged_by: "detector" or "admin".
    """

    session_id: UUID
    user_id: UUID
    reason: str
    ip_address: str | None = None
    location: str | None = None
    flagged_by: str = "detector"


@dataclass(frozen=True, kw_only=True, slots=True)
class SessionHistoryAnalyzed(DomainEvent):
    """Emitted when a history correlation sweep completes.

    Attributes:
        user_id: User whose history was analysed.
        sessions_examined: Number of sessions considered.
        flagged_session_ids: Sessions newly flagged by the sweep.
    """

    user_id: UUID
    sessions_examined: int
    flagged_session_ids: list[UUID] = field(default_factory=list)
