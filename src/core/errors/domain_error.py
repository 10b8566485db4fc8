"""Base domain error for Result-based error handling.

Errors travel as data inside ``Failure``; they are returned, never raised,
so DomainError is a frozen dataclass rather than an Exception.

Usage:
    @dataclass(frozen=True, slots=True, kw_only=True)
    class SessionDetectionError(DomainError):
        operation: str
"""

from dataclasses import dataclass
from typing import Any

from src.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base domain error.

    Attributes:
        code: Machine-readable error code.
        message: Human-readable message.
        details: Optional extra context, merged into log lines.
    """

    code: ErrorCode
    message: str
    details: dict[str, str] | None = None

    def log_context(self) -> dict[str, Any]:
        """Structured fields describing this error for a log line."""
        return {
            "error_code": self.code.value,
            "error_message": self.message,
            **(self.details or {}),
        }

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
