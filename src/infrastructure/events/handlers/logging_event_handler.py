"""Logging event handler for session domain events.

Log Levels:
    - INFO: lifecycle events (created, ended, revoked, history analysed)
    - WARNING: suspicious session detected

Usage:
    >>> handler = SessionLoggingEventHandler(logger=get_logger())
    >>> handler.register(event_bus)
"""

from src.domain.events.session_events import (
    SessionCreated,
    SessionEnded,
    SessionHistoryAnalyzed,
    SessionRevoked,
    SuspiciousSessionDetected,
    UserSessionsRevoked,
)
from src.domain.protocols.event_bus_protocol import EventBusProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol


class SessionLoggingEventHandler:
    """Structured logging of session events."""

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    def register(self, event_bus: EventBusProtocol) -> None:
        """Subscribe every handler method to its event."""
        event_bus.subscribe(SessionCreated, self.handle_session_created)
        event_bus.subscribe(SessionEnded, self.handle_session_ended)
        event_bus.subscribe(SessionRevoked, self.handle_session_revoked)
        event_bus.subscribe(UserSessionsRevoked, self.handle_user_sessions_revoked)
        event_bus.subscribe(
            SuspiciousSessionDetected, self.handle_suspicious_session_detected
        )
        event_bus.subscribe(SessionHistoryAnalyzed, self.handle_session_history_analyzed)

    async def handle_session_created(self, event: SessionCreated) -> None:
        self._logger.info(
            "session_created_event",
            event_id=str(event.event_id),
            session_id=str(event.session_id),
            user_id=str(event.user_id),
            location=event.location,
            browser_name=event.browser_name,
            os_name=event.os_name,
            status=event.status,
        )

    async def handle_session_ended(self, event: SessionEnded) -> None:
        self._logger.info(
            "session_ended_event",
            event_id=str(event.event_id),
            session_id=str(event.session_id),
            user_id=str(event.user_id),
        )

    async def handle_session_revoked(self, event: SessionRevoked) -> None:
        self._logger.info(
            "session_revoked_event",
            event_id=str(event.event_id),
            session_id=str(event.session_id),
            user_id=str(event.user_id),
            reason=event.reason,
            revoked_by_user=event.revoked_by_user,
        )

    async def handle_user_sessions_revoked(self, event: UserSessionsRevoked) -> None:
        self._logger.info(
            "user_sessions_revoked_event",
            event_id=str(event.event_id),
            user_id=str(event.user_id),
            reason=event.reason,
            revoked_count=event.revoked_count,
            failed_count=event.failed_count,
        )

    async def handle_suspicious_session_detected(
        self, event: SuspiciousSessionDetected
    ) -> None:
        """Suspicious sessions are logged at warning level for alerting."""
        self._logger.warning(
            "suspicious_session_detected",
            event_id=str(event.event_id),
            session_id=str(event.session_id),
            user_id=str(event.user_id),
            reason=event.reason,
            ip_address=event.ip_address,
            location=event.location,
            flagged_by=event.flagged_by,
        )

    async def handle_session_history_analyzed(
        self, event: SessionHistoryAnalyzed
    ) -> None:
        self._logger.info(
            "session_history_analyzed_event",
            event_id=str(event.event_id),
            user_id=str(event.user_id),
            sessions_examined=event.sessions_examined,
            flagged_count=len(event.flagged_session_ids),
        )
