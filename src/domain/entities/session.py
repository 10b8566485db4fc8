"""Session domain entity for login session tracking.

Pure business logic, no framework dependencies.

A Session is one authenticated login context of a user, tracked
independently of the transport-level cookie. It carries the signals the
suspicious activity detector correlates: device fingerprint, IP address,
approximate location and activity timestamps.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID

from src.domain.enums.session_status import SessionStatus


@dataclass(slots=True, kw_only=True)
class Session:
    """Session domain entity.

    Business Rules:
        - session_token is unique across all sessions
        - revocation_reason is set only while status is REVOKED
        - REVOKED is terminal; every other status may move to REVOKED
        - SUSPICIOUS does not clear automatically

    Attributes:
        id: Unique session identifier.
        user_id: User who owns this session.
        session_token: Transport-layer session token issued by the auth flow.

        Device Information:
            device_info: Raw user agent string.
            is_mobile: Whether the device is a phone or tablet.
            browser_name: Browser family parsed from device_info.
            browser_version: Browser version parsed from device_info.
            os_name: Operating system family parsed from device_info.
            os_version: Operating system version parsed from device_info.

        Network Information:
            ip_address: Client IP at login.
            location: Free-text geographic label, often unknown.

        Lifecycle:
            status: Current lifecycle status.
            last_activity: Last authenticated request touching the session.
            created_at: When the session was created (immutable).
            expires_at: When the session expires, if bounded.
            revocation_reason: Why the session was revoked.

    Example:
        >>> session = Session(
        ...     id=uuid7(),
        ...     user_id=user_id,
        ...     session_token="sess-abc",
        ...     device_info="Mozilla/5.0 ...",
        ...     location="Nairobi",
        ... )
        >>> session.is_active
        True
        >>> session.revoke("Revoked by user")
        >>> session.status
        <SessionStatus.REVOKED: 'revoked'>
    """

    id: UUID
    user_id: UUID
    session_token: str

    device_info: str | None = None
    is_mobile: bool = False
    browser_name: str | None = None
    browser_version: str | None = None
    os_name: str | None = None
    os_version: str | None = None

    ip_address: str | None = None
    location: str | None = None

    status: SessionStatus = SessionStatus.ACTIVE
    last_activity: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    expires_at: datetime | None = None
    revocation_reason: str | None = None

    @property
    def is_active(self) -> bool:
        """Whether the session is in the ACTIVE status."""
        return self.status == SessionStatus.ACTIVE

    @property
    def is_revoked(self) -> bool:
        """Whether the session has been revoked (terminal)."""
        return self.status == SessionStatus.REVOKED

    @property
    def is_suspicious(self) -> bool:
        """Whether the session has been flagged as suspicious."""
        return self.status == SessionStatus.SUSPICIOUS

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check whether the session is past its expiry.

        Args:
            now: Reference time. Defaults to the current UTC time.

        Returns:
            True if expires_at is set and in the past.
        """
        if self.expires_at is None:
            return False
        return self.expires_at <= (now or datetime.now(UTC))

    def touch(self, at: datetime | None = None) -> None:
        """Record activity on this session.

        Args:
            at: Activity time. Defaults to the current UTC time.
        """
        self.last_activity = at or datetime.now(UTC)

    def revoke(self, reason: str) -> None:
        """Revoke this session.

        Revocation is idempotent: revoking an already revoked session keeps
        it revoked and records the latest reason.

        Args:
            reason: Why the session is revoked. Common reasons:
                - "Manual revocation": default for programmatic revokes
                - "Revoked by user": self-service revoke
                - "Revoked by admin": operator action
                - "Revoked as part of revoking all sessions": bulk revoke

        Example:
            >>> session.revoke("Revoked by admin")
            >>> session.revoke("Revoked by admin")
            >>> session.is_revoked
            True
        """
        self.status = SessionStatus.REVOKED
        self.revocation_reason = reason

    def mark_suspicious(self) -> bool:
        """Flag this session as suspicious.

        Revoked sessions keep their terminal status.

        Returns:
            True if the status changed, False if already suspicious or revoked.
        """
        if self.status in (SessionStatus.REVOKED, SessionStatus.SUSPICIOUS):
            return False
        self.status = SessionStatus.SUSPICIOUS
        return True

    def end(self, at: datetime | None = None) -> bool:
        """End this session on logout.

        Moves a non-revoked session to INACTIVE and records the logout as
        the last activity.

        Args:
            at: Logout time. Defaults to the current UTC time.

        Returns:
            True if the session was ended, False if it was already revoked.
        """
        if self.is_revoked:
            return False
        self.status = SessionStatus.INACTIVE
        self.touch(at)
        return True

    def activity_window(self, fallback: timedelta) -> tuple[datetime, datetime]:
        """Return the period during which this session was in use.

        Args:
            fallback: Assumed session length when last_activity is unknown.

        Returns:
            (start, end) where start is created_at and end is last_activity,
            or created_at + fallback when no activity was recorded.
        """
        end = self.last_activity or self.created_at + fallback
        return self.created_at, end
