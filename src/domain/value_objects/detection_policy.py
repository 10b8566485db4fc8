"""Detection policy value object.

Immutable thresholds for the suspicious activity detector. Built once from
settings by the container so every detector instance applies the same
policy.

Usage:
    from datetime import timedelta
    from src.domain.value_objects import DetectionPolicy

    policy = DetectionPolicy(impossible_travel_window=timedelta(minutes=30))
"""

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True, slots=True, kw_only=True)
class DetectionPolicy:
    """Suspicious activity thresholds (value object).

    Per-login checks run in a fixed order and stop at the first match:
    impossible travel, unusual device, device churn, too many active
    sessions, then the optional platform variety check.

    Example:
        # Looser travel window for a campus with shared proxies
        policy = DetectionPolicy(
            impossible_travel_window=timedelta(hours=6),
            max_other_active_sessions=3,
        )

    Raises:
        ValueError: If a window is not positive or a count is negative.
    """

    comparison_window: timedelta = timedelta(hours=24)
    """Only sessions created within this window are compared to a new login."""

    impossible_travel_window: timedelta = timedelta(minutes=30)
    """A login from a different location sooner than this is flagged."""

    unusual_device_min_known: int = 3
    """Distinct known devices required before an unseen device is flagged."""

    device_churn_window: timedelta = timedelta(minutes=10)
    """A device switch sooner than this after the last activity is flagged."""

    max_other_active_sessions: int = 5
    """Flag when more than this many other sessions are active."""

    history_min_sessions: int = 3
    """History analysis is skipped below this many sessions."""

    max_distinct_locations: int = 5
    """More distinct locations than this flags every active session."""

    activity_fallback: timedelta = timedelta(minutes=30)
    """Assumed session length when last activity is unknown."""

    ip_change_window: timedelta = timedelta(hours=12)
    """Consecutive observations from different IPs within this are flagged."""

    correlate_ip_changes: bool = False
    """Whether history analysis also sweeps location observations."""

    flag_platform_variety: bool = False
    """Whether evaluation also checks browser/OS variety."""

    platform_variety_sample: int = 5
    """Number of recent sessions sampled by the platform variety check."""

    def __post_init__(self) -> None:
        """Validate thresholds."""
        windows = (
            self.comparison_window,
            self.impossible_travel_window,
            self.device_churn_window,
            self.activity_fallback,
            self.ip_change_window,
        )
        if any(window <= timedelta(0) for window in windows):
            raise ValueError("detection windows must be positive")
        if self.unusual_device_min_known <= 0 or self.history_min_sessions <= 0:
            raise ValueError("detection minimums must be positive")
        if self.max_other_active_sessions < 0 or self.max_distinct_locations < 0:
            raise ValueError("detection caps must not be negative")
        if self.platform_variety_sample <= 0:
            raise ValueError("platform_variety_sample must be positive")
