"""Revoke all sessions handler.

Flow:
1. Load every session of the user
2. Revoke each non-revoked session except the excluded token
3. Publish UserSessionsRevoked event
4. Return count of newly revoked sessions

Revocation is best-effort: a failure on one session is logged and the
remaining sessions are still revoked.

Used for:
- Operator "revoke all" on a compromised account
- User-initiated "logout everywhere else"
"""

from src.application.commands.session_commands import RevokeAllUserSessions
from src.core.result import Failure, Result, Success
from src.domain.events.session_events import UserSessionsRevoked
from src.domain.protocols.event_bus_protocol import EventBusProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.session_repository import SessionRepository


class RevokeAllSessionsError:
    """Revoke all sessions error reasons."""

    NO_SESSIONS = "no_sessions"


class RevokeAllSessionsHandler:
    """Handler for revoking all user sessions."""

    def __init__(
        self,
        session_repo: SessionRepository,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._session_repo = session_repo
        self._event_bus = event_bus
        self._logger = logger

    async def handle(self, cmd: RevokeAllUserSessions) -> Result[int, str]:
        """Handle revoke all sessions command.

        Args:
            cmd: RevokeAllUserSessions command.

        Returns:
            Success(count) with number of sessions newly revoked.
            Failure(RevokeAllSessionsError.NO_SESSIONS) if the user has none.
        """
        sessions = await self._session_repo.find_by_user_id(cmd.user_id)
        if not sessions:
            return Failure(error=RevokeAllSessionsError.NO_SESSIONS)

        revoked_count = 0
        failed_count = 0
        for session in sessions:
            if session.is_revoked:
                continue
            if (
                cmd.except_session_token is not None
                and session.session_token == cmd.except_session_token
            ):
                continue
            session.revoke(cmd.reason)
            try:
                await self._session_repo.save(session)
            except Exception as e:
                failed_count += 1
                self._logger.error(
                    "session_revoke_failed",
                    error=e,
                    session_id=str(session.id),
                    user_id=str(cmd.user_id),
                )
                continue
            revoked_count += 1

        self._logger.info(
            "user_sessions_revoked",
            user_id=str(cmd.user_id),
            revoked_count=revoked_count,
            failed_count=failed_count,
        )
        await self._event_bus.publish(
            UserSessionsRevoked(
                user_id=cmd.user_id,
                reason=cmd.reason,
                revoked_count=revoked_count,
                failed_count=failed_count,
            )
        )

        return Success(value=revoked_count)
