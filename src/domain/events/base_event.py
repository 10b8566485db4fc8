"""Base domain event class.

Domain events record things that happened in the session domain and are
named in past tense (SessionCreated, SuspiciousSessionDetected).

Architecture:
    - Frozen dataclass (immutable after creation)
    - Auto-generated event_id for tracking
    - occurred_at timestamp (UTC) for ordering

Usage:
    >>> @dataclass(frozen=True, kw_only=True, slots=True)
    >>> class SessionEnded(DomainEvent):
    ...     session_id: UUID
    >>>
    >>> event = SessionEnded(session_id=uuid7())
    >>> event.event_id  # auto-generated
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from uuid_extensions import uuid7


@dataclass(frozen=True, kw_only=True, slots=True)
class DomainEvent:
    """Base class for all domain events.

    All domain events MUST:
        1. Inherit from this base class
        2. Use past tense naming
        3. Be frozen, keyword-only dataclasses
        4. Carry the data their handlers need

    Attributes:
        event_id: Unique identifier for this event instance.
        occurred_at: When the event occurred (UTC).

    Notes:
        Events are published after the state change has been persisted
        (facts, not intents).
    """

    event_id: UUID = field(default_factory=uuid7)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))
