"""Event bus protocol (port) for domain events.

The domain defines the interface; infrastructure provides the adapter
(InMemoryEventBus). The container wires handlers at startup.

Usage:
    >>> event_bus = get_event_bus()
    >>> await event_bus.publish(SessionRevoked(session_id=..., user_id=..., reason="..."))
    >>>
    >>> async def log_revoked(event: SessionRevoked) -> None:
    ...     logger.info("session_revoked", session_id=str(event.session_id))
    >>>
    >>> event_bus.subscribe(SessionRevoked, log_revoked)
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from src.domain.events.base_event import DomainEvent

# Handlers receive a specific DomainEvent subclass
EventHandler = Callable[[Any], Awaitable[None]]


class EventBusProtocol(Protocol):
    """Protocol for event bus implementations.

    Key Requirements:
        1. Fail-open: one handler failure must NOT prevent other handlers
           from executing, and is never raised to the publisher.
        2. Async handlers.
        3. Exact type routing: handlers registered for SessionRevoked do
           not receive other events.
        4. No ordering guarantees between handlers.
    """

    def subscribe(
        self,
        event_type: type[DomainEvent],
        handler: EventHandler,
    ) -> None:
        """Register event handler for specific event type.

        Args:
            event_type: Class of event to handle (exact match).
            handler: Async callable taking the event.
        """
        ...

    async def publish(self, event: DomainEvent) -> None:
        """Publish event to all registered handlers.

        No handlers registered is a no-op.

        Args:
            event: Domain event to publish.
        """
        ...
