"""Revoke session handler.

Flow:
1. Find session by ID
2. For self-service revokes, verify ownership and that the target is not
   the caller's current session
3. Mark session as revoked (idempotent)
4. Save
5. Publish SessionRevoked event

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols, events)
- NO infrastructure imports (repositories are injected via protocols)
"""

from src.application.commands.session_commands import (
    DEFAULT_REVOCATION_REASON,
    RevokeSession,
)
from src.core.result import Failure, Result, Success
from src.domain.events.session_events import SessionRevoked
from src.domain.protocols.event_bus_protocol import EventBusProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.session_repository import SessionRepository


class RevokeSessionError:
    """Revoke session error reasons."""

    SESSION_NOT_FOUND = "session_not_found"
    NOT_OWNER = "not_session_owner"
    CURRENT_SESSION = "current_session"


class RevokeSessionHandler:
    """Handler for session revocation command.

    Revoking an already revoked session succeeds again and records the
    latest reason.
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize revoke session handler with dependencies.

        Args:
            session_repo: Session repository for persistence.
            event_bus: Event bus for publishing domain events.
            logger: Structured logger.
        """
        self._session_repo = session_repo
        self._event_bus = event_bus
        self._logger = logger

    async def handle(self, cmd: RevokeSession) -> Result[bool, str]:
        """Handle revoke session command.

        Args:
            cmd: RevokeSession command.

        Returns:
            Success(True) once the session is revoked.
            Failure(RevokeSessionError.*) when the session is unknown, owned
            by someone else, or is the caller's current session.
        """
        session = await self._session_repo.find_by_id(cmd.session_id)
        if session is None:
            return Failure(error=RevokeSessionError.SESSION_NOT_FOUND)

        if cmd.requested_by is not None:
            if session.user_id != cmd.requested_by:
                return Failure(error=RevokeSessionError.NOT_OWNER)
            if (
                cmd.current_session_token is not None
                and session.session_token == cmd.current_session_token
            ):
                return Failure(error=RevokeSessionError.CURRENT_SESSION)

        reason = cmd.reason or DEFAULT_REVOCATION_REASON
        session.revoke(reason)
        await self._session_repo.save(session)

        self._logger.info(
            "session_revoked",
            session_id=str(session.id),
            user_id=str(session.user_id),
            reason=reason,
        )
        await self._event_bus.publish(
            SessionRevoked(
                session_id=session.id,
                user_id=session.user_id,
                reason=reason,
                revoked_by_user=cmd.requested_by is not None,
            )
        )

        return Success(value=True)
