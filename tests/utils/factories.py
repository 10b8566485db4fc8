"""Entity builders and sample user agents for tests."""

from datetime import UTC, datetime, timedelta
from uuid import UUID

from uuid_extensions import uuid7

from src.domain.entities.location_observation import LocationObservation
from src.domain.entities.session import Session
from src.domain.enums.session_status import SessionStatus

CHROME_MAC = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
FIREFOX_WINDOWS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0"
)
SAFARI_IPHONE = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_1 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.1 Mobile/15E148 Safari/604.1"
)
EDGE_WINDOWS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36 Edg/120.0.2210.91"
)


def make_session(
    *,
    user_id: UUID | None = None,
    session_token: str | None = None,
    device_info: str | None = CHROME_MAC,
    ip_address: str | None = "102.89.1.10",
    location: str | None = None,
    status: SessionStatus = SessionStatus.ACTIVE,
    created_at: datetime | None = None,
    last_activity: datetime | None = None,
    **overrides,
) -> Session:
    """Build a Session with sensible defaults.

    Usage:
        session = make_session(user_id=user_id, location="Nairobi")
    """
    return Session(
        id=overrides.pop("id", None) or uuid7(),
        user_id=user_id or uuid7(),
        session_token=session_token or f"sess-{uuid7().hex}",
        device_info=device_info,
        ip_address=ip_address,
        location=location,
        status=status,
        created_at=created_at or datetime.now(UTC),
        last_activity=last_activity,
        **overrides,
    )


def make_observation(
    session: Session,
    *,
    ip_address: str | None = None,
    created_at: datetime | None = None,
    **overrides,
) -> LocationObservation:
    """Build a LocationObservation owned by the given session."""
    return LocationObservation(
        id=uuid7(),
        user_id=session.user_id,
        session_id=session.id,
        ip_address=ip_address or session.ip_address or "102.89.1.10",
        created_at=created_at or session.created_at,
        **overrides,
    )


def minutes_ago(minutes: float) -> datetime:
    return datetime.now(UTC) - timedelta(minutes=minutes)
