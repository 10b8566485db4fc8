"""Domain protocols (ports) package.

Infrastructure adapters implement these protocols without inheritance.

Usage:
    from src.domain.protocols import SessionRepository, LocationRepository
"""

from src.domain.protocols.event_bus_protocol import EventBusProtocol, EventHandler
from src.domain.protocols.location_repository import LocationRepository
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.session_enricher_protocol import (
    DeviceEnricher,
    DeviceEnrichmentResult,
    LocationEnricher,
    LocationEnrichmentResult,
)
from src.domain.protocols.session_repository import SessionRepository
from src.domain.protocols.token_validation_protocol import TokenValidationProtocol

__all__ = [
    "DeviceEnricher",
    "DeviceEnrichmentResult",
    "EventBusProtocol",
    "EventHandler",
    "LocationEnricher",
    "LocationEnrichmentResult",
    "LocationRepository",
    "LoggerProtocol",
    "SessionRepository",
    "TokenValidationProtocol",
]
