"""JWT token service (adapter).

Validates access tokens issued by the LMS login flow using PyJWT. Issuing
tokens is the login flow's job; this service only checks them.

Claims read:
    sub: user ID
    roles: list of role names
    sid: external session token the access token belongs to
    exp: expiry (required)
"""

from typing import Any

import jwt
from jwt.exceptions import (
    DecodeError,
    ExpiredSignatureError,
    InvalidSignatureError,
    InvalidTokenError,
)

from src.core.result import Failure, Result, Success
from src.domain.errors import AuthenticationError


class JWTService:
    """JWT access token service.

    Implements TokenValidationProtocol (structural typing).

    Usage:
        token_service = JWTService(secret_key=settings.secret_key)

        match token_service.validate_access_token(token):
            case Success(value=payload):
                ...
            case Failure(error=error):
                ...
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256") -> None:
        """Initialize JWT service.

        Args:
            secret_key: HMAC key shared with the login flow, at least 32 bytes.
            algorithm: JWT signing algorithm.

        Raises:
            ValueError: If secret_key is shorter than 32 bytes.
        """
        if len(secret_key) < 32:
            msg = "JWT secret key must be at least 32 bytes (256 bits)"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._algorithm = algorithm

    def validate_access_token(self, token: str) -> Result[dict[str, Any], str]:
        """Validate signature and expiry and return the payload.

        Returns:
            Success(payload), or Failure with AuthenticationError.EXPIRED_TOKEN,
            MALFORMED_TOKEN or INVALID_TOKEN.
        """
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
        except ExpiredSignatureError:
            return Failure(error=AuthenticationError.EXPIRED_TOKEN)
        # InvalidSignatureError subclasses DecodeError
        except InvalidSignatureError:
            return Failure(error=AuthenticationError.INVALID_TOKEN)
        except DecodeError:
            return Failure(error=AuthenticationError.MALFORMED_TOKEN)
        except InvalidTokenError:
            return Failure(error=AuthenticationError.INVALID_TOKEN)

        return Success(value=payload)
