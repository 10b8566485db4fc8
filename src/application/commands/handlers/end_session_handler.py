"""End session handler (logout).

Flow:
1. Find session by token
2. Move it to INACTIVE (revoked sessions stay revoked)
3. Save and publish SessionEnded
"""

from datetime import UTC, datetime

from src.application.commands.session_commands import EndSession
from src.core.result import Result, Success
from src.domain.events.session_events import SessionEnded
from src.domain.protocols.event_bus_protocol import EventBusProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.session_repository import SessionRepository


class EndSessionHandler:
    """Handler for logout."""

    def __init__(
        self,
        session_repo: SessionRepository,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._session_repo = session_repo
        self._event_bus = event_bus
        self._logger = logger

    async def handle(self, cmd: EndSession) -> Result[bool, str]:
        """Handle end session command.

        Returns:
            Success(True) if the session was ended, Success(False) if the
            token is unknown or the session is revoked.
        """
        session = await self._session_repo.find_by_token(cmd.session_token)
        if session is None:
            return Success(value=False)

        if not session.end(datetime.now(UTC)):
            return Success(value=False)

        await self._session_repo.save(session)
        self._logger.info(
            "session_ended",
            session_id=str(session.id),
            user_id=str(session.user_id),
        )
        await self._event_bus.publish(
            SessionEnded(session_id=session.id, user_id=session.user_id)
        )
        return Success(value=True)
