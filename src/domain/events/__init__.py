"""Domain events package.

Usage:
    from src.domain.events import SessionCreated, SuspiciousSessionDetected
"""

from src.domain.events.base_event import DomainEvent
from src.domain.events.session_events import (
    SessionCreated,
    SessionEnded,
    SessionHistoryAnalyzed,
    SessionRevoked,
    SuspiciousSessionDetected,
    UserSessionsRevoked,
)

__all__ = [
    "DomainEvent",
    "SessionCreated",
    "SessionEnded",
    "SessionHistoryAnalyzed",
    "SessionRevoked",
    "SuspiciousSessionDetected",
    "UserSessionsRevoked",
]
