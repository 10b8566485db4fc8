"""Mark session suspicious handler (operator action).

Flags a session directly, without running the detector. Revoked sessions
cannot be flagged.
"""

from src.application.commands.session_commands import MarkSessionSuspicious
from src.core.result import Failure, Result, Success
from src.domain.entities.session import Session
from src.domain.events.session_events import SuspiciousSessionDetected
from src.domain.protocols.event_bus_protocol import EventBusProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.session_repository import SessionRepository

ADMIN_FLAG_REASON = "Marked suspicious by admin"


class MarkSessionSuspiciousError:
    """Mark session suspicious error reasons."""

    SESSION_NOT_FOUND = "session_not_found"
    SESSION_REVOKED = "session_revoked"


class MarkSessionSuspiciousHandler:
    """Handler for operator flagging."""

    def __init__(
        self,
        session_repo: SessionRepository,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._session_repo = session_repo
        self._event_bus = event_bus
        self._logger = logger

    async def handle(self, cmd: MarkSessionSuspicious) -> Result[Session, str]:
        """Handle mark suspicious command.

        Flagging an already suspicious session succeeds without publishing
        another event.

        Returns:
            Success(Session) with status SUSPICIOUS.
            Failure(MarkSessionSuspiciousError.*) if unknown or revoked.
        """
        session = await self._session_repo.find_by_id(cmd.session_id)
        if session is None:
            return Failure(error=MarkSessionSuspiciousError.SESSION_NOT_FOUND)
        if session.is_revoked:
            return Failure(error=MarkSessionSuspiciousError.SESSION_REVOKED)

        if session.mark_suspicious():
            await self._session_repo.save(session)
            self._logger.warning(
                "session_marked_suspicious",
                session_id=str(session.id),
                user_id=str(session.user_id),
            )
            await self._event_bus.publish(
                SuspiciousSessionDetected(
                    session_id=session.id,
                    user_id=session.user_id,
                    reason=ADMIN_FLAG_REASON,
                    ip_address=session.ip_address,
                    location=session.location,
                    flagged_by="admin",
                )
            )

        return Success(value=session)
