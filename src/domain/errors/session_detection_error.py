"""Session detection error types.

Returned (never raised) by the suspicious activity detector when a
repository read or write fails. Callers decide how to degrade; the session
creation flow treats it as "not suspicious".

Usage:
    from src.domain.errors import SessionDetectionError
    from src.core.enums import ErrorCode
    from src.core.result import Failure

    return Failure(error=SessionDetectionError(
        code=ErrorCode.SESSION_DETECTION_READ_FAILED,
        message="connection reset by peer",
        operation="find_by_user_id",
    ))
"""

from dataclasses import dataclass
from typing import Any

from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionDetectionError(DomainError):
    """Persistence failure during suspicious activity detection.

    Attributes:
        code: SESSION_DETECTION_READ_FAILED or SESSION_DETECTION_WRITE_FAILED.
        message: Underlying failure message.
        operation: Repository operation that failed.
        details: Additional context.
    """

    operation: str

    def log_context(self) -> dict[str, Any]:
        return {**DomainError.log_context(self), "operation": self.operation}
