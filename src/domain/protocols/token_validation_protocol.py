"""Token validation protocol for domain layer.

Access tokens are issued by the external login flow. This service only
validates them and reads the claims it needs:

    sub: user ID
    roles: list of role names
    sid: external session token the request belongs to
"""

from typing import Any, Protocol

from src.core.result import Result


class TokenValidationProtocol(Protocol):
    """JWT access token validation interface.

    Usage:
        match token_service.validate_access_token(token):
            case Success(value=payload):
                user_id = UUID(payload["sub"])
            case Failure(error=error):
                # AuthenticationError.INVALID_TOKEN / EXPIRED_TOKEN / ...
                ...
    """

    def validate_access_token(self, token: str) -> Result[dict[str, Any], str]:
        """Validate JWT access token and extract payload.

        Args:
            token: Encoded JWT.

        Returns:
            Success(payload) if signature and expiry are valid,
            Failure(AuthenticationError constant) otherwise.
        """
        ...
