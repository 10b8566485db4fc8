"""List sessions query handlers.

- ListActiveSessionsHandler: a user's active sessions, with is_current
- ListSuspiciousSessionsHandler: every suspicious session (operators)
- ListAllSessionsHandler: filtered/paged listing with total (operators)
"""

from dataclasses import dataclass

from src.application.queries.session_queries import (
    ListActiveSessions,
    ListAllSessions,
    ListSuspiciousSessions,
)
from src.core.result import Result, Success
from src.domain.entities.session import Session
from src.domain.enums.session_status import SessionStatus
from src.domain.protocols.session_repository import SessionRepository


@dataclass
class SessionListItem:
    """Individual session in list result."""

    session: Session
    is_current: bool


@dataclass
class SessionListResult:
    """Session list query result."""

    sessions: list[SessionListItem]
    total_count: int


class ListActiveSessionsHandler:
    """Handler for listing a user's active sessions."""

    def __init__(self, session_repo: SessionRepository) -> None:
        """Initialize handler with dependencies.

        Args:
            session_repo: Session repository for persistence.
        """
        self._session_repo = session_repo

    async def handle(self, query: ListActiveSessions) -> Result[SessionListResult, str]:
        """Handle list active sessions query.

        Args:
            query: ListActiveSessions query.

        Returns:
            Success(SessionListResult), newest first.
        """
        sessions = await self._session_repo.find_by_user_id(
            query.user_id,
            status=SessionStatus.ACTIVE,
        )
        items = [
            SessionListItem(
                session=session,
                is_current=(
                    query.current_session_token is not None
                    and session.session_token == query.current_session_token
                ),
            )
            for session in sessions
        ]
        return Success(value=SessionListResult(sessions=items, total_count=len(items)))


class ListSuspiciousSessionsHandler:
    """Handler for listing suspicious sessions across all users."""

    def __init__(self, session_repo: SessionRepository) -> None:
        self._session_repo = session_repo

    async def handle(self, query: ListSuspiciousSessions) -> Result[list[Session], str]:
        sessions = await self._session_repo.find_by_status(SessionStatus.SUSPICIOUS)
        return Success(value=sessions)


@dataclass
class SessionPage:
    """One page of an operator listing.

    ``total_count`` counts every session matching the filters, not just
    the ones on this page.
    """

    sessions: list[Session]
    total_count: int


class ListAllSessionsHandler:
    """Handler for operator session listing.

    With a user or status filter the matching sessions are paged in
    memory; otherwise the repository pages and counts the whole table.
    """

    def __init__(self, session_repo: SessionRepository) -> None:
        self._session_repo = session_repo

    async def handle(self, query: ListAllSessions) -> Result[SessionPage, str]:
        if query.user_id is not None:
            matching = await self._session_repo.find_by_user_id(
                query.user_id,
                status=query.status,
            )
            return Success(value=self._page(matching, query))

        if query.status is not None:
            matching = await self._session_repo.find_by_status(query.status)
            return Success(value=self._page(matching, query))

        sessions = await self._session_repo.find_all(
            limit=query.limit,
            offset=query.offset,
        )
        total = await self._session_repo.count_all()
        return Success(value=SessionPage(sessions=sessions, total_count=total))

    @staticmethod
    def _page(matching: list[Session], query: ListAllSessions) -> SessionPage:
        return SessionPage(
            sessions=matching[query.offset : query.offset + query.limit],
            total_count=len(matching),
        )
