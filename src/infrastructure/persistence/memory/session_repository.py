"""In-memory implementation of the SessionRepository protocol."""

from dataclasses import replace
from datetime import datetime
from uuid import UUID

from src.domain.entities.session import Session
from src.domain.enums.session_status import SessionStatus
from src.infrastructure.persistence.memory.store import MemorySessionStore


class MemorySessionRepository:
    """Dict-backed session repository.

    Enforces the same session_token uniqueness as the user_sessions table.

    Raises:
        ValueError: On save, if another session already uses the token.
    """

    def __init__(self, store: MemorySessionStore) -> None:
        self._store = store

    async def save(self, session: Session) -> None:
        async with self._store.lock:
            for other in self._store.sessions.values():
                if other.session_token == session.session_token and other.id != session.id:
                    raise ValueError(
                        f"session_token already in use by session {other.id}"
                    )
            self._store.put_session(session)

    async def find_by_id(self, session_id: UUID) -> Session | None:
        async with self._store.lock:
            return self._store.get_session(session_id)

    async def find_by_token(self, session_token: str) -> Session | None:
        async with self._store.lock:
            for session in self._store.sessions.values():
                if session.session_token == session_token:
                    return replace(session)
            return None

    async def find_by_user_id(
        self,
        user_id: UUID,
        *,
        status: SessionStatus | None = None,
    ) -> list[Session]:
        async with self._store.lock:
            sessions = [
                replace(s)
                for s in self._store.sessions.values()
                if s.user_id == user_id and (status is None or s.status == status)
            ]
        sessions.sort(key=lambda s: s.created_at, reverse=True)
        return sessions

    async def find_by_status(self, status: SessionStatus) -> list[Session]:
        async with self._store.lock:
            sessions = [
                replace(s) for s in self._store.sessions.values() if s.status == status
            ]
        sessions.sort(key=lambda s: s.created_at, reverse=True)
        return sessions

    async def find_all(
        self,
        *,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Session]:
        async with self._store.lock:
            sessions = [replace(s) for s in self._store.sessions.values()]
        sessions.sort(key=lambda s: s.created_at, reverse=True)
        return sessions[offset : offset + limit]

    async def count_all(self) -> int:
        async with self._store.lock:
            return len(self._store.sessions)

    async def update_activity(self, session_token: str, at: datetime) -> bool:
        async with self._store.lock:
            for session in self._store.sessions.values():
                if session.session_token == session_token:
                    session.touch(at)
                    return True
            return False
