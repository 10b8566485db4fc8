"""Database models for persistence layer.

Models Organization:
    - user_session.py: Login session model (user_sessions)
    - location_observation.py: Location history model (user_location_history)

Note:
    Domain entities (dataclasses) live in src/domain/entities/
    Database models live here and are mapped via the repository layer.
"""

from src.infrastructure.persistence.models.location_observation import (
    LocationObservationModel,
)
from src.infrastructure.persistence.models.user_session import UserSessionModel

__all__ = [
    "LocationObservationModel",
    "UserSessionModel",
]
