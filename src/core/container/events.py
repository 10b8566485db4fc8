"""Event bus factory.

The event bus is an application-scoped singleton; subscriptions are wired
once when it is first requested.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.domain.protocols.event_bus_protocol import EventBusProtocol


@lru_cache()
def get_event_bus() -> "EventBusProtocol":
    """Get event bus singleton with handlers subscribed.

    Subscriptions:
        - SessionLoggingEventHandler: every session event

    Usage:
        event_bus = get_event_bus()
        await event_bus.publish(SessionEnded(session_id=..., user_id=...))
    """
    from src.core.container.infrastructure import get_logger
    from src.infrastructure.events.handlers.logging_event_handler import (
        SessionLoggingEventHandler,
    )
    from src.infrastructure.events.in_memory_event_bus import InMemoryEventBus

    logger = get_logger()
    event_bus = InMemoryEventBus(logger=logger)
    SessionLoggingEventHandler(logger=logger).register(event_bus)
    return event_bus
