"""Unit tests for detector value objects (DetectionPolicy, verdicts)."""

from dataclasses import FrozenInstanceError
from datetime import timedelta
from uuid import uuid4

import pytest

from src.domain.value_objects import (
    DetectionPolicy,
    HistoryAnalysis,
    SuspicionVerdict,
)


@pytest.mark.unit
class TestDetectionPolicyDefaults:
    def test_default_thresholds(self):
        policy = DetectionPolicy()

        assert policy.comparison_window == timedelta(hours=24)
        assert policy.impossible_travel_window == timedelta(minutes=30)
        assert policy.unusual_device_min_known == 3
        assert policy.device_churn_window == timedelta(minutes=10)
        assert policy.max_other_active_sessions == 5
        assert policy.history_min_sessions == 3
        assert policy.max_distinct_locations == 5
        assert policy.activity_fallback == timedelta(minutes=30)
        assert policy.correlate_ip_changes is False
        assert policy.flag_platform_variety is False

    def test_is_immutable(self):
        policy = DetectionPolicy()

        with pytest.raises(FrozenInstanceError):
            policy.max_other_active_sessions = 10  # type: ignore[misc]


@pytest.mark.unit
class TestDetectionPolicyValidation:
    @pytest.mark.parametrize(
        "field_name",
        [
            "comparison_window",
            "impossible_travel_window",
            "device_churn_window",
            "activity_fallback",
            "ip_change_window",
        ],
    )
    def test_non_positive_window_rejected(self, field_name):
        with pytest.raises(ValueError, match="windows must be positive"):
            DetectionPolicy(**{field_name: timedelta(0)})

    def test_zero_minimum_rejected(self):
        with pytest.raises(ValueError, match="minimums"):
            DetectionPolicy(history_min_sessions=0)

    def test_negative_cap_rejected(self):
        with pytest.raises(ValueError, match="caps"):
            DetectionPolicy(max_other_active_sessions=-1)

    def test_zero_cap_allowed(self):
        policy = DetectionPolicy(max_other_active_sessions=0)

        assert policy.max_other_active_sessions == 0


@pytest.mark.unit
class TestVerdicts:
    def test_clear_verdict(self):
        verdict = SuspicionVerdict.clear()

        assert verdict.is_suspicious is False
        assert verdict.reason is None

    def test_flagged_verdict(self):
        verdict = SuspicionVerdict.flagged("Rapid device change within 3 minutes")

        assert verdict.is_suspicious is True
        assert verdict.reason == "Rapid device change within 3 minutes"

    def test_history_analysis_preserves_flagging_order(self):
        first, second = uuid4(), uuid4()
        analysis = HistoryAnalysis(
            user_id=uuid4(),
            sessions_examined=4,
            flagged={first: "a", second: "b"},
        )

        assert analysis.flagged_session_ids == [first, second]
        assert analysis.skipped is False
