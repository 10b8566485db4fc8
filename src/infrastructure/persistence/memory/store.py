"""In-memory session store.

Dict-backed storage shared by the in-memory repositories. No external
dependencies; useful for tests, local development and single-process
deployments. Data is lost on restart.

Entities are copied on the way in and out so callers never hold a live
reference to stored state, matching how rows come back from a database.
"""

import asyncio
from dataclasses import replace
from uuid import UUID

from src.domain.entities.location_observation import LocationObservation
from src.domain.entities.session import Session


class MemorySessionStore:
    """Shared storage for sessions and location observations.

    One asyncio.Lock guards both maps, so multi-row writes (flagging an
    observation together with its session) are atomic for every coroutine
    in the process.

    Usage:
        store = MemorySessionStore()
        session_repo = MemorySessionRepository(store)
        location_repo = MemoryLocationRepository(store)
    """

    def __init__(self) -> None:
        self.lock = asyncio.Lock()
        self.sessions: dict[UUID, Session] = {}
        self.observations: dict[UUID, LocationObservation] = {}

    def put_session(self, session: Session) -> None:
        """Store a copy of the session. Caller must hold the lock."""
        self.sessions[session.id] = replace(session)

    def get_session(self, session_id: UUID) -> Session | None:
        """Return a copy of the stored session. Caller must hold the lock."""
        stored = self.sessions.get(session_id)
        return replace(stored) if stored is not None else None

    def clear(self) -> None:
        """Drop all data. Useful for testing."""
        self.sessions.clear()
        self.observations.clear()
