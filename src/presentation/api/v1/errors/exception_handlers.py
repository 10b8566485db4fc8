"""Global exception handlers for FastAPI application.

Converts HTTPException and unhandled exceptions to RFC 7807 Problem Details
responses.

Exports:
    register_exception_handlers: Register all exception handlers with FastAPI app
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from src.core.container import get_logger
from src.presentation.api.v1.errors.error_response_builder import (
    ErrorResponseBuilder,
)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render HTTPException (auth dependencies, role checks) as Problem Details."""
    response = ErrorResponseBuilder.build(
        request=request,
        status_code=exc.status_code,
        error_code=_error_code_for(exc.status_code),
        detail=str(exc.detail),
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected Python exceptions.

    Prevents leaking stack traces or internal details to API consumers. The
    exception is logged with the request trace ID.

    Args:
        request: FastAPI Request object
        exc: Unhandled exception

    Returns:
        JSONResponse with RFC 7807 ProblemDetails (500 Internal Server Error)
    """
    response = ErrorResponseBuilder.build(
        request=request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code="internal-server-error",
        detail="An unexpected error occurred. Please contact support with the trace ID.",
    )
    get_logger().error(
        "unhandled_exception",
        error=exc,
        method=request.method,
        path=str(request.url.path),
        trace_id=response.headers.get("X-Trace-Id"),
    )
    return response


def _error_code_for(status_code: int) -> str:
    return {
        status.HTTP_401_UNAUTHORIZED: "unauthorized",
        status.HTTP_403_FORBIDDEN: "forbidden",
        status.HTTP_404_NOT_FOUND: "not-found",
    }.get(status_code, "http-error")


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(HTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_exception_handler)
