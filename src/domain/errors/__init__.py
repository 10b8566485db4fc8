"""Domain errors package.

Usage:
    from src.domain.errors import AuthenticationError, SessionDetectionError
"""

from src.domain.errors.authentication_error import AuthenticationError
from src.domain.errors.session_detection_error import SessionDetectionError

__all__ = [
    "AuthenticationError",
    "SessionDetectionError",
]
