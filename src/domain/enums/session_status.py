"""Session status lifecycle values.

State machine:
    (none) --create--> ACTIVE --flagged--> SUSPICIOUS
    ACTIVE --logout--> INACTIVE
    any non-revoked --revoke--> REVOKED

REVOKED is terminal. SUSPICIOUS never clears on its own.
"""

from enum import Enum


class SessionStatus(str, Enum):
    """Lifecycle status of a login session.

    String Enum:
        Inherits from str so values serialize directly in JSON responses
        and store as plain strings in the database.
    """

    ACTIVE = "active"
    INACTIVE = "inactive"
    REVOKED = "revoked"
    SUSPICIOUS = "suspicious"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transition is allowed from this status."""
        return self is SessionStatus.REVOKED
