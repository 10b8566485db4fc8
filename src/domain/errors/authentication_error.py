"""Authentication error constants.

Used in Result types for access token and session validation failures.
These are NOT exceptions; they are error value constants.

Usage:
    from src.domain.errors import AuthenticationError
    from src.core.result import Failure, Success

    match token_service.validate_access_token(token):
        case Success(value=claims):
            ...
        case Failure(error=AuthenticationError.INVALID_TOKEN):
            ...
"""


class AuthenticationError:
    """Authentication error constants.

    Error Categories:
        - Token errors: INVALID_TOKEN, EXPIRED_TOKEN, MALFORMED_TOKEN
        - Session errors: SESSION_NOT_FOUND, SESSION_REVOKED, SESSION_ENDED
    """

    # Token validation errors
    INVALID_TOKEN = "Invalid token"
    EXPIRED_TOKEN = "Token expired"
    MALFORMED_TOKEN = "Malformed token"

    # Session errors
    SESSION_NOT_FOUND = "Session not found"
    SESSION_REVOKED = "Session revoked"
    SESSION_ENDED = "Session ended"
