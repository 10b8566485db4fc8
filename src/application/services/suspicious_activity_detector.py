"""Suspicious activity detector.

Correlates login metadata (IP, approximate location, device fingerprint,
timestamps) across a user's session history to flag likely account sharing.

Two entry points:
    - evaluate: per-login verdict, run right after a session is created
    - analyze_history: correlation sweep over all of a user's sessions,
      run after a flagged login or on operator request

Failure handling:
    Every repository call goes through a boundary wrapper that converts
    exceptions into Failure(SessionDetectionError). The detector never
    raises; callers decide how to degrade.

Usage:
    detector = SuspiciousActivityDetector(
        session_repo=session_repo,
        location_repo=location_repo,
        policy=DetectionPolicy(),
        logger=logger,
    )

    match await detector.evaluate(user_id=..., session_token=..., ...):
        case Success(value=verdict) if verdict.is_suspicious:
            ...
        case Failure(error=error):
            ...
"""

from collections.abc import Awaitable
from datetime import UTC, datetime, timedelta
from itertools import combinations
from typing import TypeVar
from uuid import UUID

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.entities.location_observation import LocationObservation
from src.domain.entities.session import Session
from src.domain.enums.session_status import SessionStatus
from src.domain.errors.session_detection_error import SessionDetectionError
from src.domain.protocols.location_repository import LocationRepository
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.session_repository import SessionRepository
from src.domain.value_objects.detection_policy import DetectionPolicy
from src.domain.value_objects.suspicion_verdict import (
    HistoryAnalysis,
    SuspicionVerdict,
)

_T = TypeVar("_T")

# Reasons used by the history sweep
TOO_MANY_LOCATIONS_REASON = "Activity from too many distinct locations"
CONCURRENT_USE_REASON = "Concurrent use from different location and device"
IP_CHANGE_REASON = "Rapid IP address change between logins"


def _minutes(delta: timedelta) -> int:
    """Round a duration to whole minutes."""
    return round(delta.total_seconds() / 60)


def _last_seen(session: Session) -> datetime:
    return session.last_activity or session.created_at


class SuspiciousActivityDetector:
    """Account sharing detector over abstract repositories.

    Dependencies (injected via constructor):
        - SessionRepository: reads session history, writes flags
        - LocationRepository: location observations and the atomic cascade
        - DetectionPolicy: thresholds
        - LoggerProtocol: structured logging
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        location_repo: LocationRepository,
        policy: DetectionPolicy,
        logger: LoggerProtocol,
    ) -> None:
        self._session_repo = session_repo
        self._location_repo = location_repo
        self._policy = policy
        self._logger = logger

    async def evaluate(
        self,
        *,
        user_id: UUID,
        session_token: str,
        ip_address: str | None = None,
        location: str | None = None,
        device_info: str | None = None,
    ) -> Result[SuspicionVerdict, SessionDetectionError]:
        """Decide whether a fresh login looks like account sharing.

        Checks run in order and stop at the first match: impossible travel,
        unusual device, device churn, too many active sessions, then the
        optional platform variety check.

        Args:
            user_id: User who logged in.
            session_token: Token of the session being evaluated. Must already
                be persisted; it is excluded from comparisons.
            ip_address: Client IP of the login.
            location: Location label of the login.
            device_info: Raw user agent of the login.

        Returns:
            Success(SuspicionVerdict) or Failure(SessionDetectionError) if the
            session history could not be read.
        """
        loaded = await self._guard(
            "find_by_user_id",
            ErrorCode.SESSION_DETECTION_READ_FAILED,
            self._session_repo.find_by_user_id(user_id),
        )
        if isinstance(loaded, Failure):
            return loaded
        sessions = loaded.value

        # First login is never suspicious
        if len(sessions) <= 1:
            return Success(value=SuspicionVerdict.clear())

        now = datetime.now(UTC)
        current = next((s for s in sessions if s.session_token == session_token), None)
        others = [s for s in sessions if s.session_token != session_token]
        window_start = now - self._policy.comparison_window
        recent = sorted(
            (s for s in others if s.created_at >= window_start),
            key=_last_seen,
            reverse=True,
        )

        for check in (
            self._check_impossible_travel(recent, location, now),
            self._check_unusual_device(others, device_info),
            self._check_device_churn(recent, device_info, now),
            self._check_active_sessions(others),
            self._check_platform_variety(current, recent),
        ):
            if check is not None:
                self._logger.warning(
                    "suspicious_login_detected",
                    user_id=str(user_id),
                    ip_address=ip_address,
                    reason=check,
                )
                return Success(value=SuspicionVerdict.flagged(check))

        return Success(value=SuspicionVerdict.clear())

    def _check_impossible_travel(
        self,
        recent: list[Session],
        location: str | None,
        now: datetime,
    ) -> str | None:
        if location is None:
            return None
        previous = next(
            (s for s in recent if s.location is not None and s.location != location),
            None,
        )
        if previous is None:
            return None
        elapsed = now - _last_seen(previous)
        if elapsed >= self._policy.impossible_travel_window:
            return None
        return (
            f"Rapid login from different location "
            f"({previous.location} → {location}) within {_minutes(elapsed)} minutes"
        )

    def _check_unusual_device(
        self,
        others: list[Session],
        device_info: str | None,
    ) -> str | None:
        if device_info is None:
            return None
        known = {s.device_info for s in others if s.device_info is not None}
        if device_info in known or len(known) < self._policy.unusual_device_min_known:
            return None
        return f"Login from unusual device: {device_info}"

    def _check_device_churn(
        self,
        recent: list[Session],
        device_info: str | None,
        now: datetime,
    ) -> str | None:
        if not recent or device_info is None:
            return None
        latest = recent[0]
        if latest.device_info is None or latest.device_info == device_info:
            return None
        elapsed = now - _last_seen(latest)
        if elapsed >= self._policy.device_churn_window:
            return None
        return f"Rapid device change within {_minutes(elapsed)} minutes"

    def _check_active_sessions(self, others: list[Session]) -> str | None:
        active = sum(1 for s in others if s.status == SessionStatus.ACTIVE)
        if active <= self._policy.max_other_active_sessions:
            return None
        return f"Too many concurrent active sessions ({active} other active sessions)"

    def _check_platform_variety(
        self,
        current: Session | None,
        recent: list[Session],
    ) -> str | None:
        if not self._policy.flag_platform_variety or current is None:
            return None
        sample = [current, *recent[: self._policy.platform_variety_sample]]
        browsers = {s.browser_name for s in sample if s.browser_name}
        systems = {s.os_name for s in sample if s.os_name}
        if len(browsers) > 2 and len(systems) > 2:
            return "Unusual variety of browsers and operating systems"
        return None

    async def analyze_history(
        self, user_id: UUID
    ) -> Result[HistoryAnalysis, SessionDetectionError]:
        """Sweep a user's whole session history for concurrent use.

        Steps:
            1. Skip users with fewer than history_min_sessions sessions.
            2. Too many distinct locations flags every active session.
            3. Any two sessions that differ in both location and device and
               whose activity windows overlap are both flagged.
            4. Optionally, consecutive location observations from different
               IPs close together flag the later observation (and its
               session through the repository cascade).

        Revoked sessions are never re-flagged.

        Args:
            user_id: User to analyse.

        Returns:
            Success(HistoryAnalysis) listing newly flagged sessions, or
            Failure(SessionDetectionError) on the first storage failure.
        """
        loaded = await self._guard(
            "find_by_user_id",
            ErrorCode.SESSION_DETECTION_READ_FAILED,
            self._session_repo.find_by_user_id(user_id),
        )
        if isinstance(loaded, Failure):
            return loaded
        sessions = loaded.value

        if len(sessions) < self._policy.history_min_sessions:
            return Success(
                value=HistoryAnalysis(
                    user_id=user_id,
                    sessions_examined=len(sessions),
                    skipped=True,
                )
            )

        flagged: dict[UUID, str] = {}
        pending: dict[UUID, Session] = {}

        def flag(session: Session, reason: str) -> None:
            if session.mark_suspicious():
                flagged[session.id] = reason
                pending[session.id] = session

        locations = {s.location for s in sessions if s.location is not None}
        if len(locations) > self._policy.max_distinct_locations:
            for session in sessions:
                if session.is_active:
                    flag(session, TOO_MANY_LOCATIONS_REASON)

        fallback = self._policy.activity_fallback
        for first, second in combinations(sessions, 2):
            if first.location == second.location:
                continue
            if first.device_info == second.device_info:
                continue
            first_start, first_end = first.activity_window(fallback)
            second_start, second_end = second.activity_window(fallback)
            if first_start <= second_end and second_start <= first_end:
                flag(first, CONCURRENT_USE_REASON)
                flag(second, CONCURRENT_USE_REASON)

        for session in pending.values():
            saved = await self._guard(
                "save",
                ErrorCode.SESSION_DETECTION_WRITE_FAILED,
                self._session_repo.save(session),
            )
            if isinstance(saved, Failure):
                return saved

        if self._policy.correlate_ip_changes:
            correlated = await self._correlate_ip_changes(user_id, sessions)
            if isinstance(correlated, Failure):
                return correlated
            for session_id in correlated.value:
                flagged.setdefault(session_id, IP_CHANGE_REASON)

        if flagged:
            self._logger.warning(
                "session_history_flagged",
                user_id=str(user_id),
                flagged_count=len(flagged),
            )

        return Success(
            value=HistoryAnalysis(
                user_id=user_id,
                sessions_examined=len(sessions),
                flagged=flagged,
            )
        )

    async def _correlate_ip_changes(
        self,
        user_id: UUID,
        sessions: list[Session],
    ) -> Result[list[UUID], SessionDetectionError]:
        """Flag observations that follow a different IP too closely.

        Returns:
            Ids of sessions whose status changed to suspicious.
        """
        loaded = await self._guard(
            "find_by_user_id",
            ErrorCode.SESSION_DETECTION_READ_FAILED,
            self._location_repo.find_by_user_id(user_id),
        )
        if isinstance(loaded, Failure):
            return loaded
        observations = loaded.value

        by_id = {s.id: s for s in sessions}
        changed: list[UUID] = []
        for previous, current in zip(observations, observations[1:]):
            if previous.ip_address == current.ip_address:
                continue
            if current.created_at - previous.created_at >= self._policy.ip_change_window:
                continue
            if current.is_suspicious:
                continue
            owner = by_id.get(current.session_id)
            was_flaggable = owner is not None and not (
                owner.is_revoked or owner.is_suspicious
            )
            marked = await self._guard(
                "mark_suspicious",
                ErrorCode.SESSION_DETECTION_WRITE_FAILED,
                self._location_repo.mark_suspicious(current.id),
            )
            if isinstance(marked, Failure):
                return marked
            current.mark_suspicious()
            if marked.value and owner is not None and was_flaggable:
                owner.mark_suspicious()
                changed.append(owner.id)

        return Success(value=changed)

    async def flag_login(
        self,
        session: Session,
        observation: LocationObservation | None = None,
    ) -> Result[Session, SessionDetectionError]:
        """Apply a suspicious verdict to a freshly created login.

        With an observation, the observation is flagged and the repository
        cascades the flag to the session in the same transaction. Without
        one, the session is flagged and saved directly.

        Args:
            session: The session that was evaluated as suspicious.
            observation: Location observation recorded for this login.

        Returns:
            Success(session) with its updated status, or
            Failure(SessionDetectionError) if the write failed, with the
            session left in its previous status.
        """
        if observation is not None:
            marked = await self._guard(
                "mark_suspicious",
                ErrorCode.SESSION_DETECTION_WRITE_FAILED,
                self._location_repo.mark_suspicious(observation.id),
            )
            if isinstance(marked, Failure):
                return marked
            observation.mark_suspicious()
            session.mark_suspicious()
            return Success(value=session)

        previous = session.status
        if session.mark_suspicious():
            saved = await self._guard(
                "save",
                ErrorCode.SESSION_DETECTION_WRITE_FAILED,
                self._session_repo.save(session),
            )
            if isinstance(saved, Failure):
                session.status = previous
                return saved
        return Success(value=session)

    async def _guard(
        self,
        operation: str,
        code: ErrorCode,
        call: Awaitable[_T],
    ) -> Result[_T, SessionDetectionError]:
        """Await a repository call, converting exceptions into Failure."""
        try:
            return Success(value=await call)
        except Exception as e:
            self._logger.error(
                "session_detection_storage_failed",
                error=e,
                operation=operation,
            )
            return Failure(
                error=SessionDetectionError(
                    code=code,
                    message=str(e),
                    operation=operation,
                )
            )
