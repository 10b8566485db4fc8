"""Detector outcome value objects.

SuspicionVerdict is the answer for a single login. HistoryAnalysis is the
outcome of a correlation sweep over a user's whole session history.
"""

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True, slots=True, kw_only=True)
class SuspicionVerdict:
    """Outcome of evaluating one login.

    Attributes:
        is_suspicious: Whether the login looks like account sharing.
        reason: Human-readable explanation, set only when suspicious.

    Example:
        >>> SuspicionVerdict.clear().is_suspicious
        False
        >>> SuspicionVerdict.flagged("Login from unusual device: curl/8.0").reason
        'Login from unusual device: curl/8.0'
    """

    is_suspicious: bool
    reason: str | None = None

    @classmethod
    def clear(cls) -> "SuspicionVerdict":
        """Build a not-suspicious verdict."""
        return cls(is_suspicious=False)

    @classmethod
    def flagged(cls, reason: str) -> "SuspicionVerdict":
        """Build a suspicious verdict with its reason."""
        return cls(is_suspicious=True, reason=reason)


@dataclass(frozen=True, slots=True, kw_only=True)
class HistoryAnalysis:
    """Outcome of a history correlation sweep.

    Attributes:
        user_id: User whose sessions were analysed.
        sessions_examined: Number of sessions considered.
        flagged: Session id to reason, for every session newly marked
            suspicious by this sweep.
        skipped: True when the user had too few sessions to analyse.
    """

    user_id: UUID
    sessions_examined: int
    flagged: dict[UUID, str] = field(default_factory=dict)
    skipped: bool = False

    @property
    def flagged_session_ids(self) -> list[UUID]:
        """Ids of sessions flagged by this sweep, in flagging order."""
        return list(self.flagged)
