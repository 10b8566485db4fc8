"""In-memory event bus for session events.

Single-process adapter for EventBusProtocol. Subscribers are kept per
event class; publishing awaits every subscriber of the exact class
concurrently and never lets a subscriber failure reach the publisher
(a failed audit log line must not undo a revoke).

Log lines carry the session and user the event is about, so a failed
subscriber can be traced back to the login that triggered it.
"""

import asyncio
from collections import defaultdict
from typing import Any

from src.domain.events.base_event import DomainEvent
from src.domain.protocols.event_bus_protocol import EventHandler
from src.domain.protocols.logger_protocol import LoggerProtocol


def _handler_name(handler: EventHandler) -> str:
    return getattr(handler, "__name__", None) or repr(handler)


def _event_context(event: DomainEvent) -> dict[str, Any]:
    context: dict[str, Any] = {
        "event_type": type(event).__name__,
        "event_id": str(event.event_id),
    }
    for attr in ("session_id", "user_id"):
        value = getattr(event, attr, None)
        if value is not None:
            context[attr] = str(value)
    return context


class InMemoryEventBus:
    """Routes session events to their subscribers.

    Not thread-safe; one instance serves one asyncio loop.
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._subscribers: dict[type[DomainEvent], list[EventHandler]] = defaultdict(
            list
        )
        self._logger = logger

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        """Add a subscriber for one event class (subclasses are not routed)."""
        self._subscribers[event_type].append(handler)

    def subscriber_count(self, event_type: type[DomainEvent]) -> int:
        return len(self._subscribers.get(event_type, ()))

    async def publish(self, event: DomainEvent) -> None:
        """Deliver an event to its subscribers.

        Subscriber exceptions are logged at warning level with the event's
        session context and swallowed. Events nobody listens to are dropped.
        """
        subscribers = list(self._subscribers.get(type(event), ()))
        if not subscribers:
            return

        context = _event_context(event)
        self._logger.debug(
            "event_publishing", handler_count=len(subscribers), **context
        )

        outcomes = await asyncio.gather(
            *(subscriber(event) for subscriber in subscribers),
            return_exceptions=True,
        )
        for subscriber, outcome in zip(subscribers, outcomes):
            if not isinstance(outcome, Exception):
                continue
            self._logger.warning(
                "event_handler_failed",
                handler_name=_handler_name(subscriber),
                error_type=type(outcome).__name__,
                error_message=str(outcome),
                **context,
            )
