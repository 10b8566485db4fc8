"""Infrastructure event handlers."""

from src.infrastructure.events.handlers.logging_event_handler import (
    SessionLoggingEventHandler,
)

__all__ = ["SessionLoggingEventHandler"]
