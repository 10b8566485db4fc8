"""Domain enums package.

Usage:
    from src.domain.enums import SessionStatus, UserRole
"""

from src.domain.enums.session_status import SessionStatus
from src.domain.enums.user_role import UserRole

__all__ = ["SessionStatus", "UserRole"]
