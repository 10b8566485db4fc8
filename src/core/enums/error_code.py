"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Session detection errors
    SESSION_DETECTION_READ_FAILED = "session_detection_read_failed"
    SESSION_DETECTION_WRITE_FAILED = "session_detection_write_failed"
