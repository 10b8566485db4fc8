"""Ports for enriching a login with device and location data.

A login arrives with a raw user agent and an IP address. The device
enricher splits the user agent into browser/OS/form-factor columns; the
location enricher turns the IP into a place. Neither may block a login:
implementations swallow their own failures and return an empty result.
"""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True, kw_only=True)
class DeviceEnrichmentResult:
    """Parsed user agent.

    ``device_type`` is one of "desktop", "mobile", "tablet", "bot",
    "other". Fields the parser could not identify stay None.
    """

    browser_name: str | None = None
    browser_version: str | None = None
    os_name: str | None = None
    os_version: str | None = None
    device_type: str | None = None
    is_mobile: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class LocationEnrichmentResult:
    """Place an IP address resolved to.

    Stored twice: ``location`` on the session (compared by the detector)
    and the structured fields on the location observation.
    """

    city: str | None = None
    region: str | None = None
    country: str | None = None
    country_code: str | None = None
    latitude: float | None = None
    longitude: float | None = None

    @property
    def location(self) -> str | None:
        """Session label, "City, Country" or whichever part is known."""
        return ", ".join(part for part in (self.city, self.country) if part) or None


class DeviceEnricher(Protocol):
    def enrich(self, user_agent: str) -> DeviceEnrichmentResult:
        """Parse a raw user agent; empty result for blank or unparseable input."""
        ...


class LocationEnricher(Protocol):
    async def enrich(self, ip_address: str) -> LocationEnrichmentResult:
        """Geolocate an IP; empty result for private, unknown or failed lookups."""
        ...
