"""LoggerProtocol definition for structured logging.

All logging calls are structured: a snake_case event name plus key-value
context. Implementations must never log session tokens.

Levels used by this service:
    - INFO: lifecycle transitions (created, revoked, ended)
    - WARNING: suspicious verdicts
    - ERROR: detection or persistence failures

Usage:
    logger: LoggerProtocol = get_logger()
    logger.info("session_created", session_id=str(session.id))

    request_logger = logger.bind(trace_id=trace_id)
    request_logger.info("request_started")
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None: ...

    def info(self, message: str, /, **context: Any) -> None: ...

    def warning(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None: ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event name.
            error: Optional exception; adapters add error_type and
                error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None: ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return new logger with permanently bound context.

        The original logger is unchanged.
        """
        ...

    def with_context(self, **context: Any) -> LoggerProtocol:
        """Alias for bind()."""
        ...
