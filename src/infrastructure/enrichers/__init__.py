"""Session enrichers infrastructure package.

Enrichers:
    - UserAgentDeviceEnricher: Parses user agent strings (user-agents)
    - IPLocationEnricher: IP geolocation (geoip2, optional database)
"""

from src.infrastructure.enrichers.device_enricher import UserAgentDeviceEnricher
from src.infrastructure.enrichers.location_enricher import IPLocationEnricher

__all__ = [
    "IPLocationEnricher",
    "UserAgentDeviceEnricher",
]
