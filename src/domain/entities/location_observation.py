"""LocationObservation domain entity.

One IP-derived geolocation sample tied to exactly one session. Geographic
fields are optional because resolution is best-effort.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID


@dataclass(slots=True, kw_only=True)
class LocationObservation:
    """IP/geolocation sample owned by a session.

    Business Rules:
        - Every observation belongs to exactly one session
        - Flagging an observation flags its owning session too (the
          repository performs both writes in one transaction)
        - Flags are never cleared

    Attributes:
        id: Unique observation identifier.
        user_id: User who owns the session.
        session_id: Owning session.
        ip_address: Observed client IP.
        country_code: ISO country code, if resolved.
        country_name: Country name, if resolved.
        region_name: Region/subdivision name, if resolved.
        city: City name, if resolved.
        latitude: Latitude, if resolved.
        longitude: Longitude, if resolved.
        is_suspicious: Whether this observation has been flagged.
        created_at: When the observation was recorded (immutable).
    """

    id: UUID
    user_id: UUID
    session_id: UUID
    ip_address: str
    country_code: str | None = None
    country_name: str | None = None
    region_name: str | None = None
    city: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    is_suspicious: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def mark_suspicious(self) -> None:
        """Flag this observation. The owning session must be flagged alongside."""
        self.is_suspicious = True
