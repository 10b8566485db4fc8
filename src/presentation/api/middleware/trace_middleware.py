"""Request context middleware: trace id, client IP, access log.

Every request gets a trace id (incoming X-Trace-Id or a fresh uuid7) and a
resolved client IP. Both are stored on request.state and bound into
structlog contextvars, so detector and handler log lines for a login can
be correlated with the request that created the session. The trace id is
echoed back in the X-Trace-Id response header.
"""

from __future__ import annotations

import ipaddress
import time
from contextvars import ContextVar
from typing import TYPE_CHECKING, Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp
from uuid_extensions import uuid7

if TYPE_CHECKING:
    from src.domain.protocols.logger_protocol import LoggerProtocol

TRACE_HEADER = "X-Trace-Id"

trace_id_context: ContextVar[str | None] = ContextVar("trace_id", default=None)


def get_trace_id() -> str | None:
    """Trace id of the request being served, if any."""
    return trace_id_context.get()


def get_client_ip(request: Request) -> str | None:
    """Client IP: first X-Forwarded-For entry, else the socket peer.

    The forwarded value is client-controlled and ends up in 45-character
    columns, so it is only used when it parses as an IPv4 or IPv6 address
    (returned in canonical form). Anything else falls back to the peer.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        try:
            return str(ipaddress.ip_address(first))
        except ValueError:
            pass
    return request.client.host if request.client else None


class TraceMiddleware(BaseHTTPMiddleware):
    """Bind trace id and client IP for the lifetime of a request.

    Args:
        app: Wrapped ASGI app.
        logger: When given, one ``request_completed`` line is written per
            request with method, path, status and duration.
    """

    def __init__(self, app: ASGIApp, logger: LoggerProtocol | None = None) -> None:
        super().__init__(app)
        self._logger = logger

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        trace_id = request.headers.get(TRACE_HEADER) or str(uuid7())
        client_ip = get_client_ip(request)

        token = trace_id_context.set(trace_id)
        request.state.trace_id = trace_id
        request.state.client_ip = client_ip
        structlog.contextvars.bind_contextvars(trace_id=trace_id, client_ip=client_ip)
        started = time.perf_counter()
        try:
            response = await call_next(request)
            response.headers[TRACE_HEADER] = trace_id
            if self._logger is not None:
                self._logger.info(
                    "request_completed",
                    method=request.method,
                    path=request.url.path,
                    status_code=response.status_code,
                    duration_ms=round((time.perf_counter() - started) * 1000, 2),
                )
            return response
        finally:
            trace_id_context.reset(token)
            structlog.contextvars.unbind_contextvars("trace_id", "client_ip")
