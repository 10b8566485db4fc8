"""Create session handler.

Flow:
1. Reject a token that is already in use
2. Parse device details from the user agent
3. Resolve location (explicit value wins, else IP geolocation)
4. Persist the session (active) and a location observation
5. Evaluate the login with the suspicious activity detector
6. On a suspicious verdict, flag the login and sweep the user's history
7. Publish SessionCreated (and SuspiciousSessionDetected when flagged)
8. Return the session with its final status

Detection is fail-open: a detector Failure is logged and treated as "not
suspicious". Persistence errors while recording the session itself
propagate to the caller.

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols, events)
- NO infrastructure imports (repositories are injected via protocols)
"""

from datetime import UTC, datetime

from uuid_extensions import uuid7

from src.application.commands.session_commands import CreateSession
from src.application.services.suspicious_activity_detector import (
    SuspiciousActivityDetector,
)
from src.core.result import Failure, Result, Success
from src.domain.entities.location_observation import LocationObservation
from src.domain.entities.session import Session
from src.domain.events.session_events import (
    SessionCreated,
    SuspiciousSessionDetected,
)
from src.domain.protocols.event_bus_protocol import EventBusProtocol
from src.domain.protocols.location_repository import LocationRepository
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.session_enricher_protocol import (
    DeviceEnricher,
    LocationEnricher,
    LocationEnrichmentResult,
)
from src.domain.protocols.session_repository import SessionRepository
from src.domain.value_objects.suspicion_verdict import SuspicionVerdict


class CreateSessionError:
    """Create session error reasons."""

    SESSION_TOKEN_IN_USE = "session_token_in_use"


class CreateSessionHandler:
    """Handler for session creation command.

    Orchestrates:
    - Device and location enrichment
    - Session and location observation persistence
    - Suspicious activity detection (fail-open)
    - Domain event publishing
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        location_repo: LocationRepository,
        detector: SuspiciousActivityDetector,
        device_enricher: DeviceEnricher,
        location_enricher: LocationEnricher,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize create session handler with dependencies.

        Args:
            session_repo: Session repository for persistence.
            location_repo: Location observation repository.
            detector: Suspicious activity detector.
            device_enricher: User agent parser.
            location_enricher: IP geolocation lookup.
            event_bus: Event bus for publishing domain events.
            logger: Structured logger.
        """
        self._session_repo = session_repo
        self._location_repo = location_repo
        self._detector = detector
        self._device_enricher = device_enricher
        self._location_enricher = location_enricher
        self._event_bus = event_bus
        self._logger = logger

    async def handle(self, cmd: CreateSession) -> Result[Session, str]:
        """Handle create session command.

        Args:
            cmd: CreateSession command.

        Returns:
            Success(Session) with status ACTIVE or SUSPICIOUS.
            Failure(CreateSessionError.SESSION_TOKEN_IN_USE) for a duplicate token.

        Raises:
            Exception: Repository errors while persisting the session or its
                location observation.
        """
        # Step 1: Token uniqueness
        if await self._session_repo.find_by_token(cmd.session_token) is not None:
            return Failure(error=CreateSessionError.SESSION_TOKEN_IN_USE)

        # Step 2: Device details
        device = self._device_enricher.enrich(cmd.device_info or "")

        # Step 3: Location
        geo = LocationEnrichmentResult()
        if cmd.ip_address:
            geo = await self._location_enricher.enrich(cmd.ip_address)
        location = cmd.location or geo.location

        # Step 4: Persist session
        now = datetime.now(UTC)
        session = Session(
            id=uuid7(),
            user_id=cmd.user_id,
            session_token=cmd.session_token,
            device_info=cmd.device_info,
            is_mobile=device.is_mobile,
            browser_name=device.browser_name,
            browser_version=device.browser_version,
            os_name=device.os_name,
            os_version=device.os_version,
            ip_address=cmd.ip_address,
            location=location,
            last_activity=now,
            created_at=now,
            expires_at=cmd.expires_at,
        )
        await self._session_repo.save(session)

        observation: LocationObservation | None = None
        if cmd.ip_address:
            observation = LocationObservation(
                id=uuid7(),
                user_id=cmd.user_id,
                session_id=session.id,
                ip_address=cmd.ip_address,
                country_code=geo.country_code,
                country_name=geo.country,
                region_name=geo.region,
                city=geo.city,
                latitude=geo.latitude,
                longitude=geo.longitude,
                created_at=now,
            )
            await self._location_repo.save(observation)

        self._logger.info(
            "session_created",
            session_id=str(session.id),
            user_id=str(cmd.user_id),
            ip_address=cmd.ip_address,
            location=location,
        )

        # Step 5: Detection (fail-open)
        verdict = await self._evaluate(session)

        # Step 6: Flag and sweep
        if verdict.is_suspicious:
            await self._flag(session, observation)

        # Step 7: Events
        await self._event_bus.publish(
            SessionCreated(
                session_id=session.id,
                user_id=session.user_id,
                ip_address=session.ip_address,
                location=session.location,
                browser_name=session.browser_name,
                os_name=session.os_name,
                status=session.status.value,
            )
        )
        if verdict.is_suspicious and session.is_suspicious:
            await self._event_bus.publish(
                SuspiciousSessionDetected(
                    session_id=session.id,
                    user_id=session.user_id,
                    reason=verdict.reason or "",
                    ip_address=session.ip_address,
                    location=session.location,
                )
            )

        # Step 8: Return session
        return Success(value=session)

    async def _evaluate(self, session: Session) -> SuspicionVerdict:
        """Run the detector, treating a detection failure as not suspicious."""
        match await self._detector.evaluate(
            user_id=session.user_id,
            session_token=session.session_token,
            ip_address=session.ip_address,
            location=session.location,
            device_info=session.device_info,
        ):
            case Success(value=verdict):
                return verdict
            case Failure(error=error):
                self._logger.error(
                    "suspicious_activity_detection_failed",
                    session_id=str(session.id),
                    user_id=str(session.user_id),
                    **error.log_context(),
                )
                return SuspicionVerdict.clear()

    async def _flag(
        self,
        session: Session,
        observation: LocationObservation | None,
    ) -> None:
        """Flag a suspicious login, then sweep the user's history."""
        match await self._detector.flag_login(session, observation):
            case Failure(error=error):
                self._logger.error(
                    "suspicious_session_flag_failed",
                    session_id=str(session.id),
                    **error.log_context(),
                )
                return

        match await self._detector.analyze_history(session.user_id):
            case Failure(error=error):
                self._logger.error(
                    "session_history_analysis_failed",
                    user_id=str(session.user_id),
                    **error.log_context(),
                )
