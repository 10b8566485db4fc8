"""Domain entities for business logic.

Pure business logic entities with no framework dependencies.
"""

from src.domain.entities.location_observation import LocationObservation
from src.domain.entities.session import Session

__all__ = [
    "LocationObservation",
    "Session",
]
