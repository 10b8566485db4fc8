"""Caller roles carried in access tokens.

Roles are issued by the external authentication flow. This service only
distinguishes operators (admin) from everyone else.

Usage:
    from src.domain.enums import UserRole

    current_user: CurrentUser = Depends(require_role(UserRole.ADMIN.value))
"""

from enum import Enum


class UserRole(str, Enum):
    """Roles recognised by the session endpoints.

    String Enum:
        Inherits from str so roles compare equal to the raw JWT claim values.
    """

    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"
