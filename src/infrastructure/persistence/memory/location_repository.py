"""In-memory implementation of the LocationRepository protocol."""

from dataclasses import replace
from uuid import UUID

from src.domain.entities.location_observation import LocationObservation
from src.infrastructure.persistence.memory.store import MemorySessionStore


class MemoryLocationRepository:
    """Dict-backed location observation repository.

    Raises:
        KeyError: On save, if the owning session does not exist (mirrors
            the foreign key on user_location_history).
    """

    def __init__(self, store: MemorySessionStore) -> None:
        self._store = store

    async def save(self, observation: LocationObservation) -> None:
        async with self._store.lock:
            if observation.session_id not in self._store.sessions:
                raise KeyError(f"session {observation.session_id} does not exist")
            self._store.observations[observation.id] = replace(observation)

    async def find_by_id(self, observation_id: UUID) -> LocationObservation | None:
        async with self._store.lock:
            stored = self._store.observations.get(observation_id)
            return replace(stored) if stored is not None else None

    async def find_by_session_id(self, session_id: UUID) -> list[LocationObservation]:
        async with self._store.lock:
            found = [
                replace(o)
                for o in self._store.observations.values()
                if o.session_id == session_id
            ]
        found.sort(key=lambda o: o.created_at)
        return found

    async def find_by_user_id(self, user_id: UUID) -> list[LocationObservation]:
        async with self._store.lock:
            found = [
                replace(o)
                for o in self._store.observations.values()
                if o.user_id == user_id
            ]
        found.sort(key=lambda o: o.created_at)
        return found

    async def mark_suspicious(self, observation_id: UUID) -> bool:
        """Flag an observation and its session under the store lock."""
        async with self._store.lock:
            observation = self._store.observations.get(observation_id)
            if observation is None:
                return False
            observation.mark_suspicious()
            session = self._store.sessions.get(observation.session_id)
            if session is not None:
                session.mark_suspicious()
            return True
