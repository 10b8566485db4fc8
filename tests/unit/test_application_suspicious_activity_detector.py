"""Unit tests for SuspiciousActivityDetector.

Tests cover:
- Per-login checks: first login, impossible travel, unusual device, device
  churn, active-session cap, platform variety
- History sweep: pairwise overlap, distinct-location cap, IP-change
  correlation, revoked sessions never re-flagged
- flag_login cascade through the location repository
- Storage failures surface as Failure(SessionDetectionError)

Architecture:
- In-memory repositories (real adapters, no database)
- AsyncMock repositories for failure paths
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest
from uuid_extensions import uuid7

from src.application.services.suspicious_activity_detector import (
    CONCURRENT_USE_REASON,
    IP_CHANGE_REASON,
    TOO_MANY_LOCATIONS_REASON,
    SuspiciousActivityDetector,
)
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.enums.session_status import SessionStatus
from src.domain.errors import SessionDetectionError
from src.domain.value_objects.detection_policy import DetectionPolicy
from tests.utils.factories import (
    CHROME_MAC,
    EDGE_WINDOWS,
    FIREFOX_WINDOWS,
    SAFARI_IPHONE,
    make_observation,
    make_session,
    minutes_ago,
)


@pytest.fixture
def detector(session_repo, location_repo, mock_logger):
    return SuspiciousActivityDetector(
        session_repo=session_repo,
        location_repo=location_repo,
        policy=DetectionPolicy(),
        logger=mock_logger,
    )


async def _evaluate(detector, current):
    return await detector.evaluate(
        user_id=current.user_id,
        session_token=current.session_token,
        ip_address=current.ip_address,
        location=current.location,
        device_info=current.device_info,
    )


# =============================================================================
# evaluate
# =============================================================================


@pytest.mark.unit
class TestFirstLoginExemption:
    """P1: zero or one session is never suspicious."""

    async def test_first_login_is_never_suspicious(self, detector, session_repo):
        current = make_session(location="Mogadishu", device_info="curl/8.0")
        await session_repo.save(current)

        result = await _evaluate(detector, current)

        assert isinstance(result, Success)
        assert result.value.is_suspicious is False
        assert result.value.reason is None

    async def test_user_without_sessions_is_never_suspicious(self, detector):
        result = await detector.evaluate(
            user_id=uuid7(),
            session_token="unknown",
            location="Lagos",
            device_info=CHROME_MAC,
        )

        assert isinstance(result, Success)
        assert result.value.is_suspicious is False


@pytest.mark.unit
class TestImpossibleTravel:
    """P2/P3: different location inside the travel window."""

    async def test_impossible_travel_flags_with_both_locations_and_minutes(
        self, detector, session_repo, mock_logger
    ):
        user_id = uuid7()
        previous = make_session(
            user_id=user_id,
            location="Nairobi",
            created_at=minutes_ago(40),
            last_activity=minutes_ago(10),
        )
        current = make_session(user_id=user_id, location="Mogadishu")
        await session_repo.save(previous)
        await session_repo.save(current)

        result = await _evaluate(detector, current)

        assert isinstance(result, Success)
        verdict = result.value
        assert verdict.is_suspicious is True
        assert verdict.reason == (
            "Rapid login from different location (Nairobi → Mogadishu) "
            "within 10 minutes"
        )
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.args[0] == "suspicious_login_detected"

    async def test_same_location_never_trips_impossible_travel(
        self, detector, session_repo
    ):
        user_id = uuid7()
        previous = make_session(
            user_id=user_id,
            location="Nairobi",
            created_at=minutes_ago(2),
            last_activity=minutes_ago(1),
        )
        current = make_session(user_id=user_id, location="Nairobi")
        await session_repo.save(previous)
        await session_repo.save(current)

        result = await _evaluate(detector, current)

        assert result.value.is_suspicious is False

    async def test_previous_activity_outside_window_is_not_flagged(
        self, detector, session_repo
    ):
        user_id = uuid7()
        previous = make_session(
            user_id=user_id,
            location="Nairobi",
            created_at=minutes_ago(120),
            last_activity=minutes_ago(45),
        )
        current = make_session(user_id=user_id, location="Mogadishu")
        await session_repo.save(previous)
        await session_repo.save(current)

        result = await _evaluate(detector, current)

        assert result.value.is_suspicious is False

    async def test_unknown_location_skips_check(self, detector, session_repo):
        user_id = uuid7()
        previous = make_session(
            user_id=user_id,
            location="Nairobi",
            created_at=minutes_ago(5),
            last_activity=minutes_ago(5),
        )
        current = make_session(user_id=user_id, location=None)
        await session_repo.save(previous)
        await session_repo.save(current)

        result = await _evaluate(detector, current)

        assert result.value.is_suspicious is False

    async def test_uses_created_at_when_no_activity_recorded(
        self, detector, session_repo
    ):
        user_id = uuid7()
        previous = make_session(
            user_id=user_id,
            location="Kampala",
            created_at=minutes_ago(20),
            last_activity=None,
        )
        current = make_session(user_id=user_id, location="Kigali")
        await session_repo.save(previous)
        await session_repo.save(current)

        result = await _evaluate(detector, current)

        assert result.value.is_suspicious is True
        assert "(Kampala → Kigali) within 20 minutes" in result.value.reason


@pytest.mark.unit
class TestUnusualDevice:
    """P4: novelty only counts once three devices are known."""

    async def _seed_devices(self, session_repo, user_id, devices):
        for device in devices:
            await session_repo.save(
                make_session(
                    user_id=user_id,
                    device_info=device,
                    created_at=minutes_ago(180),
                    last_activity=minutes_ago(170),
                )
            )

    async def test_fourth_device_after_three_known_is_flagged(
        self, detector, session_repo
    ):
        user_id = uuid7()
        await self._seed_devices(
            session_repo, user_id, [CHROME_MAC, FIREFOX_WINDOWS, SAFARI_IPHONE]
        )
        current = make_session(user_id=user_id, device_info=EDGE_WINDOWS)
        await session_repo.save(current)

        result = await _evaluate(detector, current)

        assert result.value.is_suspicious is True
        assert result.value.reason == f"Login from unusual device: {EDGE_WINDOWS}"

    async def test_third_device_after_two_known_is_not_flagged(
        self, detector, session_repo
    ):
        user_id = uuid7()
        await self._seed_devices(session_repo, user_id, [CHROME_MAC, FIREFOX_WINDOWS])
        current = make_session(user_id=user_id, device_info=SAFARI_IPHONE)
        await session_repo.save(current)

        result = await _evaluate(detector, current)

        assert result.value.is_suspicious is False

    async def test_known_device_is_not_flagged(self, detector, session_repo):
        user_id = uuid7()
        await self._seed_devices(
            session_repo, user_id, [CHROME_MAC, FIREFOX_WINDOWS, SAFARI_IPHONE]
        )
        current = make_session(user_id=user_id, device_info=FIREFOX_WINDOWS)
        await session_repo.save(current)

        result = await _evaluate(detector, current)

        assert result.value.is_suspicious is False


@pytest.mark.unit
class TestDeviceChurn:
    """Switching device right after the last activity."""

    async def test_device_change_within_window_is_flagged(
        self, detector, session_repo
    ):
        user_id = uuid7()
        previous = make_session(
            user_id=user_id,
            device_info=CHROME_MAC,
            created_at=minutes_ago(30),
            last_activity=minutes_ago(3),
        )
        current = make_session(user_id=user_id, device_info=SAFARI_IPHONE)
        await session_repo.save(previous)
        await session_repo.save(current)

        result = await _evaluate(detector, current)

        assert result.value.is_suspicious is True
        assert result.value.reason == "Rapid device change within 3 minutes"

    async def test_device_change_after_window_is_not_flagged(
        self, detector, session_repo
    ):
        user_id = uuid7()
        previous = make_session(
            user_id=user_id,
            device_info=CHROME_MAC,
            created_at=minutes_ago(60),
            last_activity=minutes_ago(15),
        )
        current = make_session(user_id=user_id, device_info=SAFARI_IPHONE)
        await session_repo.save(previous)
        await session_repo.save(current)

        result = await _evaluate(detector, current)

        assert result.value.is_suspicious is False


@pytest.mark.unit
class TestActiveSessionCap:
    """More than five other active sessions."""

    async def _seed_active(self, session_repo, user_id, count):
        for _ in range(count):
            await session_repo.save(
                make_session(
                    user_id=user_id,
                    created_at=minutes_ago(300),
                    last_activity=minutes_ago(240),
                )
            )

    async def test_six_other_active_sessions_is_flagged(self, detector, session_repo):
        user_id = uuid7()
        await self._seed_active(session_repo, user_id, 6)
        current = make_session(user_id=user_id)
        await session_repo.save(current)

        result = await _evaluate(detector, current)

        assert result.value.is_suspicious is True
        assert result.value.reason == (
            "Too many concurrent active sessions (6 other active sessions)"
        )

    async def test_five_other_active_sessions_is_allowed(self, detector, session_repo):
        user_id = uuid7()
        await self._seed_active(session_repo, user_id, 5)
        current = make_session(user_id=user_id)
        await session_repo.save(current)

        result = await _evaluate(detector, current)

        assert result.value.is_suspicious is False

    async def test_revoked_sessions_do_not_count(self, detector, session_repo):
        user_id = uuid7()
        await self._seed_active(session_repo, user_id, 5)
        await session_repo.save(
            make_session(
                user_id=user_id,
                status=SessionStatus.REVOKED,
                created_at=minutes_ago(300),
            )
        )
        current = make_session(user_id=user_id)
        await session_repo.save(current)

        result = await _evaluate(detector, current)

        assert result.value.is_suspicious is False


@pytest.mark.unit
class TestPlatformVariety:
    """Optional browser/OS variety check."""

    async def test_flags_many_browsers_and_systems_when_enabled(
        self, session_repo, location_repo, mock_logger
    ):
        detector = SuspiciousActivityDetector(
            session_repo=session_repo,
            location_repo=location_repo,
            policy=DetectionPolicy(flag_platform_variety=True),
            logger=mock_logger,
        )
        user_id = uuid7()
        for browser, system in [("Firefox", "Windows"), ("Safari", "iOS")]:
            await session_repo.save(
                make_session(
                    user_id=user_id,
                    device_info=None,
                    browser_name=browser,
                    os_name=system,
                    created_at=minutes_ago(90),
                    last_activity=minutes_ago(80),
                )
            )
        current = make_session(
            user_id=user_id,
            device_info=None,
            browser_name="Chrome",
            os_name="Mac OS X",
        )
        await session_repo.save(current)

        result = await _evaluate(detector, current)

        assert result.value.is_suspicious is True
        assert result.value.reason == (
            "Unusual variety of browsers and operating systems"
        )

    async def test_disabled_by_default(self, detector, session_repo):
        user_id = uuid7()
        for browser, system in [("Firefox", "Windows"), ("Safari", "iOS")]:
            await session_repo.save(
                make_session(
                    user_id=user_id,
                    device_info=None,
                    browser_name=browser,
                    os_name=system,
                    created_at=minutes_ago(90),
                )
            )
        current = make_session(
            user_id=user_id, device_info=None, browser_name="Chrome", os_name="Linux"
        )
        await session_repo.save(current)

        result = await _evaluate(detector, current)

        assert result.value.is_suspicious is False


@pytest.mark.unit
class TestEvaluateFailures:
    """Storage errors become Failure, never exceptions."""

    async def test_read_failure_returns_detection_error(
        self, location_repo, mock_logger
    ):
        broken_repo = AsyncMock()
        broken_repo.find_by_user_id.side_effect = RuntimeError("connection reset")
        detector = SuspiciousActivityDetector(
            session_repo=broken_repo,
            location_repo=location_repo,
            policy=DetectionPolicy(),
            logger=mock_logger,
        )

        result = await detector.evaluate(user_id=uuid7(), session_token="tok")

        assert isinstance(result, Failure)
        assert isinstance(result.error, SessionDetectionError)
        assert result.error.code == ErrorCode.SESSION_DETECTION_READ_FAILED
        assert result.error.operation == "find_by_user_id"
        assert result.error.message == "connection reset"
        mock_logger.error.assert_called_once()


# =============================================================================
# analyze_history
# =============================================================================


@pytest.mark.unit
class TestHistoryOverlap:
    """P8/P9: pairwise overlap with different location and device."""

    def _scenario(self, user_id, b_created_offset, b_activity_offset):
        t0 = datetime.now(UTC) - timedelta(hours=3)
        session_a = make_session(
            user_id=user_id,
            location="X",
            device_info="D1",
            created_at=t0,
            last_activity=t0 + timedelta(minutes=20),
        )
        session_b = make_session(
            user_id=user_id,
            location="Y",
            device_info="D2",
            created_at=t0 + timedelta(minutes=b_created_offset),
            last_activity=t0 + timedelta(minutes=b_activity_offset),
        )
        # Older, same place and device as A: keeps the user above the
        # minimum history size without overlapping anything.
        session_c = make_session(
            user_id=user_id,
            location="X",
            device_info="D1",
            created_at=t0 - timedelta(hours=5),
            last_activity=t0 - timedelta(hours=4),
        )
        return session_a, session_b, session_c

    async def test_overlapping_sessions_are_both_flagged(
        self, detector, session_repo
    ):
        user_id = uuid7()
        session_a, session_b, session_c = self._scenario(user_id, 10, 15)
        for session in (session_a, session_b, session_c):
            await session_repo.save(session)

        result = await detector.analyze_history(user_id)

        assert isinstance(result, Success)
        analysis = result.value
        assert analysis.sessions_examined == 3
        assert analysis.flagged == {
            session_a.id: CONCURRENT_USE_REASON,
            session_b.id: CONCURRENT_USE_REASON,
        }
        assert (await session_repo.find_by_id(session_a.id)).is_suspicious
        assert (await session_repo.find_by_id(session_b.id)).is_suspicious
        assert (await session_repo.find_by_id(session_c.id)).is_active

    async def test_non_overlapping_sessions_are_not_flagged(
        self, detector, session_repo
    ):
        user_id = uuid7()
        session_a, session_b, session_c = self._scenario(user_id, 25, 30)
        for session in (session_a, session_b, session_c):
            await session_repo.save(session)

        result = await detector.analyze_history(user_id)

        assert result.value.flagged == {}
        for session in (session_a, session_b, session_c):
            assert (await session_repo.find_by_id(session.id)).is_active

    async def test_touching_windows_count_as_overlap(self, detector, session_repo):
        user_id = uuid7()
        session_a, session_b, session_c = self._scenario(user_id, 20, 30)
        for session in (session_a, session_b, session_c):
            await session_repo.save(session)

        result = await detector.analyze_history(user_id)

        assert set(result.value.flagged) == {session_a.id, session_b.id}

    async def test_revoked_session_is_never_reflagged(self, detector, session_repo):
        user_id = uuid7()
        session_a, session_b, session_c = self._scenario(user_id, 10, 15)
        session_a.revoke("Revoked by admin")
        for session in (session_a, session_b, session_c):
            await session_repo.save(session)

        result = await detector.analyze_history(user_id)

        assert result.value.flagged == {session_b.id: CONCURRENT_USE_REASON}
        stored = await session_repo.find_by_id(session_a.id)
        assert stored.status == SessionStatus.REVOKED
        assert stored.revocation_reason == "Revoked by admin"

    async def test_same_device_is_not_concurrent_use(self, detector, session_repo):
        user_id = uuid7()
        session_a, session_b, session_c = self._scenario(user_id, 10, 15)
        session_b.device_info = "D1"
        for session in (session_a, session_b, session_c):
            await session_repo.save(session)

        result = await detector.analyze_history(user_id)

        assert result.value.flagged == {}


@pytest.mark.unit
class TestHistoryThresholds:
    """Minimum history size and distinct-location cap."""

    async def test_skips_users_with_fewer_than_three_sessions(
        self, detector, session_repo
    ):
        user_id = uuid7()
        await session_repo.save(make_session(user_id=user_id, location="X"))
        await session_repo.save(make_session(user_id=user_id, location="Y"))

        result = await detector.analyze_history(user_id)

        assert result.value.skipped is True
        assert result.value.sessions_examined == 2
        assert result.value.flagged == {}

    async def test_too_many_locations_flags_every_active_session(
        self, detector, session_repo
    ):
        user_id = uuid7()
        sessions = [
            make_session(
                user_id=user_id,
                location=f"City {i}",
                device_info=CHROME_MAC,
                created_at=minutes_ago(600 - i * 60),
                last_activity=minutes_ago(590 - i * 60),
            )
            for i in range(6)
        ]
        sessions[0].status = SessionStatus.INACTIVE
        for session in sessions:
            await session_repo.save(session)

        result = await detector.analyze_history(user_id)

        flagged = result.value.flagged
        assert set(flagged) == {s.id for s in sessions[1:]}
        assert set(flagged.values()) == {TOO_MANY_LOCATIONS_REASON}
        stored_first = await session_repo.find_by_id(sessions[0].id)
        assert stored_first.status == SessionStatus.INACTIVE

    async def test_five_locations_is_within_cap(self, detector, session_repo):
        user_id = uuid7()
        for i in range(5):
            await session_repo.save(
                make_session(
                    user_id=user_id,
                    location=f"City {i}",
                    created_at=minutes_ago(600 - i * 60),
                    last_activity=minutes_ago(590 - i * 60),
                )
            )

        result = await detector.analyze_history(user_id)

        assert result.value.flagged == {}


@pytest.mark.unit
class TestIpChangeCorrelation:
    """Optional correlation over the location history."""

    async def test_rapid_ip_change_flags_later_observation_and_session(
        self, session_repo, location_repo, mock_logger
    ):
        detector = SuspiciousActivityDetector(
            session_repo=session_repo,
            location_repo=location_repo,
            policy=DetectionPolicy(correlate_ip_changes=True),
            logger=mock_logger,
        )
        user_id = uuid7()
        first = make_session(
            user_id=user_id, ip_address="41.90.1.1", created_at=minutes_ago(180)
        )
        second = make_session(
            user_id=user_id, ip_address="197.232.5.5", created_at=minutes_ago(60)
        )
        third = make_session(
            user_id=user_id, ip_address="197.232.5.5", created_at=minutes_ago(30)
        )
        observations = []
        for session in (first, second, third):
            await session_repo.save(session)
            observation = make_observation(session)
            await location_repo.save(observation)
            observations.append(observation)

        result = await detector.analyze_history(user_id)

        assert result.value.flagged == {second.id: IP_CHANGE_REASON}
        assert (await session_repo.find_by_id(second.id)).is_suspicious
        assert (await session_repo.find_by_id(third.id)).is_active
        assert (await location_repo.find_by_id(observations[1].id)).is_suspicious
        assert not (await location_repo.find_by_id(observations[2].id)).is_suspicious

    async def test_disabled_by_default(self, detector, session_repo, location_repo):
        user_id = uuid7()
        for ip, age in [("41.90.1.1", 180), ("197.232.5.5", 60), ("8.8.8.8", 30)]:
            session = make_session(
                user_id=user_id, ip_address=ip, created_at=minutes_ago(age)
            )
            await session_repo.save(session)
            await location_repo.save(make_observation(session))

        result = await detector.analyze_history(user_id)

        assert result.value.flagged == {}


@pytest.mark.unit
class TestHistoryFailures:
    async def test_save_failure_returns_write_error(self, location_repo, mock_logger):
        user_id = uuid7()
        t0 = datetime.now(UTC) - timedelta(hours=2)
        sessions = [
            make_session(
                user_id=user_id,
                location="X",
                device_info="D1",
                created_at=t0,
                last_activity=t0 + timedelta(minutes=20),
            ),
            make_session(
                user_id=user_id,
                location="Y",
                device_info="D2",
                created_at=t0 + timedelta(minutes=5),
                last_activity=t0 + timedelta(minutes=10),
            ),
            make_session(user_id=user_id, location="X", device_info="D1", created_at=t0),
        ]
        broken_repo = AsyncMock()
        broken_repo.find_by_user_id.return_value = sessions
        broken_repo.save.side_effect = RuntimeError("disk full")
        detector = SuspiciousActivityDetector(
            session_repo=broken_repo,
            location_repo=location_repo,
            policy=DetectionPolicy(),
            logger=mock_logger,
        )

        result = await detector.analyze_history(user_id)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.SESSION_DETECTION_WRITE_FAILED
        assert result.error.operation == "save"


# =============================================================================
# flag_login
# =============================================================================


@pytest.mark.unit
class TestFlagLogin:
    async def test_flag_through_observation_cascades_to_session(
        self, detector, session_repo, location_repo
    ):
        session = make_session()
        await session_repo.save(session)
        observation = make_observation(session)
        await location_repo.save(observation)

        result = await detector.flag_login(session, observation)

        assert isinstance(result, Success)
        assert result.value.is_suspicious
        assert observation.is_suspicious
        assert (await session_repo.find_by_id(session.id)).is_suspicious
        assert (await location_repo.find_by_id(observation.id)).is_suspicious

    async def test_flag_without_observation_saves_session(
        self, detector, session_repo
    ):
        session = make_session(ip_address=None)
        await session_repo.save(session)

        result = await detector.flag_login(session)

        assert result.value.is_suspicious
        assert (await session_repo.find_by_id(session.id)).is_suspicious

    async def test_cascade_failure_returns_write_error(
        self, session_repo, mock_logger
    ):
        broken_locations = AsyncMock()
        broken_locations.mark_suspicious.side_effect = RuntimeError("deadlock")
        detector = SuspiciousActivityDetector(
            session_repo=session_repo,
            location_repo=broken_locations,
            policy=DetectionPolicy(),
            logger=mock_logger,
        )
        session = make_session()

        result = await detector.flag_login(session, make_observation(session))

        assert isinstance(result, Failure)
        assert result.error.operation == "mark_suspicious"
        assert session.is_active

    async def test_failed_save_leaves_session_status_unchanged(
        self, location_repo, mock_logger
    ):
        broken_sessions = AsyncMock()
        broken_sessions.save.side_effect = RuntimeError("disk full")
        detector = SuspiciousActivityDetector(
            session_repo=broken_sessions,
            location_repo=location_repo,
            policy=DetectionPolicy(),
            logger=mock_logger,
        )
        session = make_session(ip_address=None)

        result = await detector.flag_login(session)

        assert isinstance(result, Failure)
        assert result.error.operation == "save"
        assert session.status == SessionStatus.ACTIVE
