"""JWT authentication dependencies.

FastAPI dependencies for extracting and validating access tokens issued by
the LMS login flow, and for resolving the session the token belongs to.

Usage:
    # Protected route (requires a live session)
    @router.get("/protected")
    async def protected_route(current_user: ActiveUser):
        return {"user_id": str(current_user.user_id)}

    # Operator route
    @router.get("/admin/thing")
    async def admin_route(
        current_user: CurrentUser = Depends(require_role(UserRole.ADMIN.value)),
    ):
        ...
"""

from dataclasses import dataclass, field
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.application.commands.handlers.touch_session_activity_handler import (
    TouchSessionActivityHandler,
)
from src.application.commands.session_commands import TouchSessionActivity
from src.application.queries.handlers.get_session_handler import (
    GetSessionByTokenHandler,
)
from src.application.queries.session_queries import GetSessionByToken
from src.core.container import (
    get_get_session_by_token_handler,
    get_token_service,
    get_touch_session_activity_handler,
)
from src.core.result import Failure, Success
from src.domain.enums.session_status import SessionStatus
from src.domain.errors import AuthenticationError
from src.domain.protocols.token_validation_protocol import TokenValidationProtocol

# HTTP Bearer token extractor
# auto_error=True returns 401 if no token provided
bearer_scheme = HTTPBearer(auto_error=True)


@dataclass(frozen=True, slots=True, kw_only=True)
class CurrentUser:
    """Authenticated user information from JWT.

    Attributes:
        user_id: User's unique identifier (from JWT 'sub' claim).
        roles: User's roles (from JWT 'roles' claim).
        session_token: External session token (from JWT 'sid' claim).
    """

    user_id: UUID
    roles: list[str] = field(default_factory=list)
    session_token: str | None = None


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    token_service: Annotated[TokenValidationProtocol, Depends(get_token_service)],
) -> CurrentUser:
    """Get current authenticated user from JWT token.

    Args:
        credentials: Bearer token from Authorization header.
        token_service: JWT token service (injected).

    Returns:
        CurrentUser with user identity from valid JWT.

    Raises:
        HTTPException 401: If token is invalid, expired, or has a bad payload.
    """
    match token_service.validate_access_token(credentials.credentials):
        case Success(value=payload):
            try:
                return CurrentUser(
                    user_id=UUID(str(payload["sub"])),
                    roles=list(payload.get("roles") or []),
                    session_token=payload.get("sid"),
                )
            except (KeyError, ValueError, TypeError) as e:
                raise _unauthorized("Invalid token payload") from e
        case Failure(error=error):
            raise _unauthorized(error)


async def get_current_active_user(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    session_handler: Annotated[
        GetSessionByTokenHandler, Depends(get_get_session_by_token_handler)
    ],
    touch_handler: Annotated[
        TouchSessionActivityHandler, Depends(get_touch_session_activity_handler)
    ],
) -> CurrentUser:
    """Get current user whose session is still live.

    Resolves the session named by the token's sid claim and rejects tokens
    whose session was revoked or ended. Suspicious sessions stay usable;
    flagging is a signal for operators, not a block. Every accepted request
    refreshes the session's last activity.

    Raises:
        HTTPException 401: If the session is unknown, revoked, or ended.
    """
    if not current_user.session_token:
        raise _unauthorized(AuthenticationError.SESSION_NOT_FOUND)

    result = await session_handler.handle(
        GetSessionByToken(session_token=current_user.session_token)
    )
    if isinstance(result, Failure):
        raise _unauthorized(AuthenticationError.SESSION_NOT_FOUND)

    session = result.value
    if session.user_id != current_user.user_id:
        raise _unauthorized(AuthenticationError.SESSION_NOT_FOUND)
    if session.status == SessionStatus.REVOKED:
        raise _unauthorized(AuthenticationError.SESSION_REVOKED)
    if session.status == SessionStatus.INACTIVE:
        raise _unauthorized(AuthenticationError.SESSION_ENDED)

    await touch_handler.handle(
        TouchSessionActivity(session_token=current_user.session_token)
    )
    return current_user


def require_role(required_role: str):
    """Create a dependency that requires a specific role.

    The session behind the token must also be live.

    Args:
        required_role: Role required to access the endpoint.

    Returns:
        Dependency function that validates user has required role.

    Raises:
        HTTPException 403: If user does not have required role.
    """

    async def role_checker(
        current_user: Annotated[CurrentUser, Depends(get_current_active_user)],
    ) -> CurrentUser:
        if required_role not in current_user.roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Role '{required_role}' required",
            )
        return current_user

    return role_checker


# Type aliases for cleaner route signatures
AuthenticatedUser = Annotated[CurrentUser, Depends(get_current_user)]
ActiveUser = Annotated[CurrentUser, Depends(get_current_active_user)]
