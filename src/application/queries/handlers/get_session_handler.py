"""Get session query handlers.

Look up a single session by ID or by its external token.
"""

from src.application.queries.session_queries import GetSession, GetSessionByToken
from src.core.result import Failure, Result, Success
from src.domain.entities.session import Session
from src.domain.protocols.session_repository import SessionRepository


class GetSessionError:
    """Get session error reasons."""

    SESSION_NOT_FOUND = "session_not_found"


class GetSessionHandler:
    """Handler for getting a session by ID."""

    def __init__(self, session_repo: SessionRepository) -> None:
        self._session_repo = session_repo

    async def handle(self, query: GetSession) -> Result[Session, str]:
        """Handle get session query.

        Returns:
            Success(Session) if found.
            Failure(GetSessionError.SESSION_NOT_FOUND) otherwise.
        """
        session = await self._session_repo.find_by_id(query.session_id)
        if session is None:
            return Failure(error=GetSessionError.SESSION_NOT_FOUND)
        return Success(value=session)


class GetSessionByTokenHandler:
    """Handler for getting a session by external token.

    Used by the auth dependency to resolve the session a request belongs to.
    """

    def __init__(self, session_repo: SessionRepository) -> None:
        self._session_repo = session_repo

    async def handle(self, query: GetSessionByToken) -> Result[Session, str]:
        session = await self._session_repo.find_by_token(query.session_token)
        if session is None:
            return Failure(error=GetSessionError.SESSION_NOT_FOUND)
        return Success(value=session)
