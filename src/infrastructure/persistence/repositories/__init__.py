"""SQLAlchemy repository adapters.

Usage:
    from src.infrastructure.persistence.repositories import (
        LocationRepository,
        SessionRepository,
    )
"""

from src.infrastructure.persistence.repositories.location_repository import (
    LocationRepository,
)
from src.infrastructure.persistence.repositories.session_repository import (
    SessionRepository,
)

__all__ = [
    "LocationRepository",
    "SessionRepository",
]
