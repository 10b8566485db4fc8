"""Analyze session history handler (operator action).

Runs the detector's history correlation sweep on demand. Unlike session
creation, a detection failure is reported to the caller.
"""

from src.application.commands.session_commands import AnalyzeSessionHistory
from src.application.services.suspicious_activity_detector import (
    SuspiciousActivityDetector,
)
from src.core.result import Failure, Result, Success
from src.domain.events.session_events import SessionHistoryAnalyzed
from src.domain.protocols.event_bus_protocol import EventBusProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.value_objects.suspicion_verdict import HistoryAnalysis


class AnalyzeSessionHistoryError:
    """Analyze session history error reasons."""

    DETECTION_FAILED = "detection_failed"


class AnalyzeSessionHistoryHandler:
    """Handler for on-demand history analysis."""

    def __init__(
        self,
        detector: SuspiciousActivityDetector,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._detector = detector
        self._event_bus = event_bus
        self._logger = logger

    async def handle(self, cmd: AnalyzeSessionHistory) -> Result[HistoryAnalysis, str]:
        """Handle analyze history command.

        Returns:
            Success(HistoryAnalysis) or
            Failure(AnalyzeSessionHistoryError.DETECTION_FAILED).
        """
        match await self._detector.analyze_history(cmd.user_id):
            case Failure(error=error):
                self._logger.error(
                    "session_history_analysis_failed",
                    user_id=str(cmd.user_id),
                    **error.log_context(),
                )
                return Failure(error=AnalyzeSessionHistoryError.DETECTION_FAILED)
            case Success(value=analysis):
                await self._event_bus.publish(
                    SessionHistoryAnalyzed(
                        user_id=cmd.user_id,
                        sessions_examined=analysis.sessions_examined,
                        flagged_session_ids=analysis.flagged_session_ids,
                    )
                )
                return Success(value=analysis)
