"""Error response builder for RFC 7807 Problem Details.

Routers map handler error reasons (string constants) to an HTTP status, a
title and a user-facing message, then build the response here.

Exports:
    ErrorResponseBuilder: Utility class for building RFC 7807 responses
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from src.core.config import settings
from src.presentation.api.middleware.trace_middleware import get_trace_id
from src.presentation.api.v1.errors.problem_details import ProblemDetails

_TITLES: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "Bad Request",
    status.HTTP_401_UNAUTHORIZED: "Authentication Required",
    status.HTTP_403_FORBIDDEN: "Access Denied",
    status.HTTP_404_NOT_FOUND: "Resource Not Found",
    status.HTTP_409_CONFLICT: "Resource Conflict",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "Internal Server Error",
}


class ErrorResponseBuilder:
    """Build RFC 7807 Problem Details error responses.

    Example:
        >>> response = ErrorResponseBuilder.build(
        ...     request=request,
        ...     status_code=404,
        ...     error_code="session_not_found",
        ...     detail="Session not found",
        ... )
    """

    @staticmethod
    def build(
        request: Request,
        status_code: int,
        error_code: str,
        detail: str,
        title: str | None = None,
    ) -> JSONResponse:
        """Build an RFC 7807 JSON response.

        Args:
            request: FastAPI Request object (for instance URL).
            status_code: HTTP status code.
            error_code: Machine-readable error reason, used in the type URI.
            detail: Human-readable explanation.
            title: Optional title; derived from the status code when omitted.

        Returns:
            JSONResponse with ProblemDetails content and X-Trace-Id header.
        """
        trace_id = get_trace_id() or getattr(request.state, "trace_id", None)
        problem = ProblemDetails(
            type=f"{settings.api_base_url}/errors/{error_code}",
            title=title or ErrorResponseBuilder.get_title(status_code),
            status=status_code,
            detail=detail,
            instance=str(request.url.path),
            trace_id=trace_id,
        )
        return JSONResponse(
            status_code=status_code,
            content=problem.model_dump(exclude_none=True),
            headers={"X-Trace-Id": trace_id} if trace_id else None,
        )

    @staticmethod
    def get_title(status_code: int) -> str:
        """Get human-readable title for an HTTP status code.

        Example:
            >>> ErrorResponseBuilder.get_title(404)
            'Resource Not Found'
        """
        return _TITLES.get(status_code, "Request Failed")
