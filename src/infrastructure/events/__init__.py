"""Infrastructure event implementations.

Event Bus:
    - InMemoryEventBus: fail-open, concurrent handler execution

Event Handlers:
    - SessionLoggingEventHandler: structured logging for session events
"""

from src.infrastructure.events.in_memory_event_bus import InMemoryEventBus

__all__ = [
    "InMemoryEventBus",
]
