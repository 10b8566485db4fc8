"""Sessions resource router.

Self-service endpoints for a learner's own sessions.

Endpoints:
    GET    /api/v1/sessions         - List own active sessions
    DELETE /api/v1/sessions/current - Delete current session (logout)
    DELETE /api/v1/sessions/{id}    - Revoke a specific session
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Path, Request, status
from fastapi.responses import JSONResponse, Response

from src.application.commands.handlers.end_session_handler import EndSessionHandler
from src.application.commands.handlers.revoke_session_handler import (
    RevokeSessionError,
    RevokeSessionHandler,
)
from src.application.commands.session_commands import EndSession, RevokeSession
from src.application.queries.handlers.list_sessions_handler import (
    ListActiveSessionsHandler,
)
from src.application.queries.session_queries import ListActiveSessions
from src.core.container import (
    get_end_session_handler,
    get_list_active_sessions_handler,
    get_revoke_session_handler,
)
from src.core.result import Failure, Success
from src.presentation.api.middleware.auth_dependencies import ActiveUser
from src.presentation.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.session_schemas import SessionListResponse, SessionSummaryResponse

router = APIRouter(prefix="/sessions", tags=["Sessions"])

USER_REVOCATION_REASON = "Revoked by user"

# Handler error reason -> (HTTP status, user-facing detail)
_REVOKE_ERRORS: dict[str, tuple[int, str]] = {
    RevokeSessionError.SESSION_NOT_FOUND: (
        status.HTTP_404_NOT_FOUND,
        "Session not found",
    ),
    RevokeSessionError.NOT_OWNER: (
        status.HTTP_403_FORBIDDEN,
        "You can only revoke your own sessions",
    ),
    RevokeSessionError.CURRENT_SESSION: (
        status.HTTP_400_BAD_REQUEST,
        "Cannot revoke your current session. Use logout instead.",
    ),
}


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=SessionListResponse,
    responses={
        200: {"description": "Active sessions", "model": SessionListResponse},
        401: {"description": "Not authenticated", "model": ProblemDetails},
    },
    summary="List sessions",
    description="Get the current user's active sessions.",
)
async def list_sessions(
    current_user: ActiveUser,
    handler: ListActiveSessionsHandler = Depends(get_list_active_sessions_handler),
) -> SessionListResponse:
    """List active sessions for the current user.

    GET /api/v1/sessions → 200 OK

    The client IP and revocation reason are never exposed here.
    """
    result = await handler.handle(
        ListActiveSessions(
            user_id=current_user.user_id,
            current_session_token=current_user.session_token,
        )
    )
    list_result = result.value  # queries always succeed
    return SessionListResponse(
        sessions=[SessionSummaryResponse.from_item(item) for item in list_result.sessions],
        total_count=list_result.total_count,
    )


@router.delete(
    "/current",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    responses={
        204: {"description": "Session ended"},
        401: {"description": "Not authenticated", "model": ProblemDetails},
    },
    summary="Delete current session",
    description="Logout: mark the session behind the access token inactive.",
)
async def delete_current_session(
    current_user: ActiveUser,
    handler: EndSessionHandler = Depends(get_end_session_handler),
) -> Response:
    """Delete current session (logout).

    DELETE /api/v1/sessions/current → 204 No Content
    """
    await handler.handle(EndSession(session_token=current_user.session_token or ""))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    responses={
        204: {"description": "Session revoked successfully"},
        400: {"description": "Current session", "model": ProblemDetails},
        401: {"description": "Not authenticated", "model": ProblemDetails},
        403: {"description": "Not your session", "model": ProblemDetails},
        404: {"description": "Session not found", "model": ProblemDetails},
    },
    summary="Revoke session",
    description="Revoke one of your other sessions (logout that device).",
)
async def revoke_session(
    request: Request,
    current_user: ActiveUser,
    session_id: UUID = Path(..., description="Session ID to revoke"),
    handler: RevokeSessionHandler = Depends(get_revoke_session_handler),
) -> Response | JSONResponse:
    """Revoke a specific session.

    DELETE /api/v1/sessions/{id} → 204 No Content

    Returns:
        204 No Content on success.
        JSONResponse with error on failure (400/403/404).
    """
    command = RevokeSession(
        session_id=session_id,
        reason=USER_REVOCATION_REASON,
        requested_by=current_user.user_id,
        current_session_token=current_user.session_token,
    )

    match await handler.handle(command):
        case Success():
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        case Failure(error=error):
            status_code, detail = _REVOKE_ERRORS.get(
                error, (status.HTTP_400_BAD_REQUEST, "Session could not be revoked")
            )
            return ErrorResponseBuilder.build(
                request=request,
                status_code=status_code,
                error_code=error,
                detail=detail,
            )
