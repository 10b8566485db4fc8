"""Session oversight admin router.

Operator endpoints for reviewing and acting on learner sessions. Every
route requires the admin role.

Endpoints:
    GET    /api/v1/admin/sessions                          - List sessions
    GET    /api/v1/admin/sessions/suspicious               - List suspicious
    PUT    /api/v1/admin/sessions/{id}/mark-suspicious     - Flag a session
    DELETE /api/v1/admin/sessions/{id}                     - Revoke a session
    DELETE /api/v1/admin/users/{user_id}/sessions          - Revoke all for user
    POST   /api/v1/admin/users/{user_id}/session-analyses  - History sweep
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, Request, status
from fastapi.responses import JSONResponse, Response

from src.application.commands.handlers.analyze_session_history_handler import (
    AnalyzeSessionHistoryHandler,
)
from src.application.commands.handlers.mark_session_suspicious_handler import (
    MarkSessionSuspiciousError,
    MarkSessionSuspiciousHandler,
)
from src.application.commands.handlers.revoke_all_sessions_handler import (
    RevokeAllSessionsError,
    RevokeAllSessionsHandler,
)
from src.application.commands.handlers.revoke_session_handler import (
    RevokeSessionError,
    RevokeSessionHandler,
)
from src.application.commands.session_commands import (
    AnalyzeSessionHistory,
    MarkSessionSuspicious,
    RevokeAllUserSessions,
    RevokeSession,
)
from src.application.queries.handlers.list_sessions_handler import (
    ListAllSessionsHandler,
    ListSuspiciousSessionsHandler,
)
from src.application.queries.session_queries import (
    ListAllSessions,
    ListSuspiciousSessions,
)
from src.core.container import (
    get_analyze_session_history_handler,
    get_list_all_sessions_handler,
    get_list_suspicious_sessions_handler,
    get_mark_session_suspicious_handler,
    get_revoke_all_sessions_handler,
    get_revoke_session_handler,
)
from src.core.result import Failure, Success
from src.domain.enums import SessionStatus, UserRole
from src.presentation.api.middleware.auth_dependencies import require_role
from src.presentation.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.session_schemas import (
    AdminRevokeSessionRequest,
    AdminSessionListResponse,
    AdminSessionResponse,
    HistoryAnalysisResponse,
    RevokeAllSessionsResponse,
)

router = APIRouter(
    tags=["Session Oversight"],
    dependencies=[Depends(require_role(UserRole.ADMIN.value))],
    responses={
        401: {"description": "Not authenticated", "model": ProblemDetails},
        403: {"description": "Not authorized (admin only)", "model": ProblemDetails},
    },
)

ADMIN_REVOCATION_REASON = "Revoked by admin"


# =============================================================================
# Listing
# =============================================================================


@router.get(
    "/sessions",
    response_model=AdminSessionListResponse,
    summary="List sessions",
    description="Admin-only. Full session records, optionally filtered.",
)
async def list_sessions(
    user_id: UUID | None = Query(None, description="Restrict to one user"),
    status_filter: SessionStatus | None = Query(
        None, alias="status", description="Restrict to one status"
    ),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    handler: ListAllSessionsHandler = Depends(get_list_all_sessions_handler),
) -> AdminSessionListResponse:
    """GET /api/v1/admin/sessions → 200 OK"""
    result = await handler.handle(
        ListAllSessions(
            user_id=user_id,
            status=status_filter,
            limit=limit,
            offset=offset,
        )
    )
    page = result.value
    return AdminSessionListResponse(
        sessions=[AdminSessionResponse.from_entity(s) for s in page.sessions],
        total_count=page.total_count,
    )


@router.get(
    "/sessions/suspicious",
    response_model=AdminSessionListResponse,
    summary="List suspicious sessions",
    description="Admin-only. Every session currently flagged as suspicious.",
)
async def list_suspicious_sessions(
    handler: ListSuspiciousSessionsHandler = Depends(
        get_list_suspicious_sessions_handler
    ),
) -> AdminSessionListResponse:
    """GET /api/v1/admin/sessions/suspicious → 200 OK"""
    result = await handler.handle(ListSuspiciousSessions())
    sessions = [AdminSessionResponse.from_entity(s) for s in result.value]
    return AdminSessionListResponse(sessions=sessions, total_count=len(sessions))


# =============================================================================
# Single session actions
# =============================================================================


@router.put(
    "/sessions/{session_id}/mark-suspicious",
    response_model=AdminSessionResponse,
    responses={
        404: {"description": "Session not found", "model": ProblemDetails},
        409: {"description": "Session already revoked", "model": ProblemDetails},
    },
    summary="Mark session suspicious",
    description="Admin-only. Flag a session for review without revoking it.",
)
async def mark_session_suspicious(
    request: Request,
    session_id: UUID = Path(..., description="Session ID"),
    handler: MarkSessionSuspiciousHandler = Depends(
        get_mark_session_suspicious_handler
    ),
) -> AdminSessionResponse | JSONResponse:
    """PUT /api/v1/admin/sessions/{id}/mark-suspicious → 200 OK"""
    match await handler.handle(MarkSessionSuspicious(session_id=session_id)):
        case Success(value=session):
            return AdminSessionResponse.from_entity(session)
        case Failure(error=MarkSessionSuspiciousError.SESSION_REVOKED):
            return ErrorResponseBuilder.build(
                request=request,
                status_code=status.HTTP_409_CONFLICT,
                error_code=MarkSessionSuspiciousError.SESSION_REVOKED,
                detail="Revoked sessions cannot be marked suspicious",
            )
        case Failure(error=error):
            return ErrorResponseBuilder.build(
                request=request,
                status_code=status.HTTP_404_NOT_FOUND,
                error_code=error,
                detail="Session not found",
            )


@router.delete(
    "/sessions/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    responses={
        204: {"description": "Session revoked"},
        404: {"description": "Session not found", "model": ProblemDetails},
    },
    summary="Revoke session",
    description="Admin-only. Revoke any session.",
)
async def revoke_session(
    request: Request,
    session_id: UUID = Path(..., description="Session ID"),
    data: AdminRevokeSessionRequest | None = None,
    handler: RevokeSessionHandler = Depends(get_revoke_session_handler),
) -> Response | JSONResponse:
    """DELETE /api/v1/admin/sessions/{id} → 204 No Content"""
    reason = (data.reason if data else None) or ADMIN_REVOCATION_REASON
    result = await handler.handle(RevokeSession(session_id=session_id, reason=reason))

    if isinstance(result, Failure):
        return ErrorResponseBuilder.build(
            request=request,
            status_code=status.HTTP_404_NOT_FOUND,
            error_code=RevokeSessionError.SESSION_NOT_FOUND,
            detail="Session not found",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Per-user actions
# =============================================================================


@router.delete(
    "/users/{user_id}/sessions",
    response_model=RevokeAllSessionsResponse,
    responses={
        404: {"description": "User has no sessions", "model": ProblemDetails},
    },
    summary="Revoke all sessions for user",
    description="Admin-only. Revoke every session the user has.",
)
async def revoke_user_sessions(
    request: Request,
    user_id: UUID = Path(..., description="User ID"),
    handler: RevokeAllSessionsHandler = Depends(get_revoke_all_sessions_handler),
) -> RevokeAllSessionsResponse | JSONResponse:
    """DELETE /api/v1/admin/users/{user_id}/sessions → 200 OK"""
    match await handler.handle(
        RevokeAllUserSessions(user_id=user_id, reason=ADMIN_REVOCATION_REASON)
    ):
        case Success(value=count):
            return RevokeAllSessionsResponse(user_id=user_id, revoked_count=count)
        case Failure(error=error):
            return ErrorResponseBuilder.build(
                request=request,
                status_code=status.HTTP_404_NOT_FOUND,
                error_code=error or RevokeAllSessionsError.NO_SESSIONS,
                detail="No sessions found for user",
            )


@router.post(
    "/users/{user_id}/session-analyses",
    response_model=HistoryAnalysisResponse,
    responses={
        500: {"description": "Analysis failed", "model": ProblemDetails},
    },
    summary="Analyze session history",
    description=(
        "Admin-only. Correlate the user's session history and flag "
        "concurrent use from different places and devices."
    ),
)
async def analyze_user_sessions(
    request: Request,
    user_id: UUID = Path(..., description="User ID"),
    handler: AnalyzeSessionHistoryHandler = Depends(
        get_analyze_session_history_handler
    ),
) -> HistoryAnalysisResponse | JSONResponse:
    """POST /api/v1/admin/users/{user_id}/session-analyses → 200 OK"""
    match await handler.handle(AnalyzeSessionHistory(user_id=user_id)):
        case Success(value=analysis):
            return HistoryAnalysisResponse.from_analysis(analysis)
        case Failure(error=error):
            return ErrorResponseBuilder.build(
                request=request,
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                error_code=error,
                detail="Session history analysis failed",
            )
