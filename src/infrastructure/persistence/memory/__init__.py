"""In-memory persistence adapters.

Usage:
    store = MemorySessionStore()
    session_repo = MemorySessionRepository(store)
    location_repo = MemoryLocationRepository(store)
"""

from src.infrastructure.persistence.memory.location_repository import (
    MemoryLocationRepository,
)
from src.infrastructure.persistence.memory.session_repository import (
    MemorySessionRepository,
)
from src.infrastructure.persistence.memory.store import MemorySessionStore

__all__ = [
    "MemoryLocationRepository",
    "MemorySessionRepository",
    "MemorySessionStore",
]
