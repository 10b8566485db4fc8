"""Unit tests for trace middleware and RFC 7807 error responses.

Uses a small FastAPI app wired like src.main so the behavior is exercised
through real requests.
"""

import pytest
from fastapi import FastAPI, HTTPException, Request
from fastapi.testclient import TestClient

from src.presentation.api.middleware.trace_middleware import (
    TraceMiddleware,
    get_trace_id,
)
from src.presentation.api.v1.errors import (
    ErrorResponseBuilder,
    register_exception_handlers,
)


def _build_app(logger=None) -> FastAPI:
    app = FastAPI()
    app.add_middleware(TraceMiddleware, logger=logger)
    register_exception_handlers(app)

    @app.get("/trace")
    async def trace(request: Request):
        return {"trace_id": get_trace_id(), "state": request.state.trace_id}

    @app.get("/client")
    async def client_ip(request: Request):
        return {"client_ip": request.state.client_ip}

    @app.get("/conflict")
    async def conflict(request: Request):
        return ErrorResponseBuilder.build(
            request=request,
            status_code=409,
            error_code="session_revoked",
            detail="Revoked sessions cannot be marked suspicious",
        )

    @app.get("/unauthorized")
    async def unauthorized():
        raise HTTPException(
            status_code=401,
            detail="Token expired",
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.get("/boom")
    async def boom():
        raise RuntimeError("database exploded")

    return app


@pytest.fixture
def client():
    return TestClient(_build_app(), raise_server_exceptions=False)


@pytest.mark.unit
class TestTraceMiddleware:
    def test_generates_trace_id(self, client):
        response = client.get("/trace")

        trace_id = response.headers["X-Trace-Id"]
        assert trace_id
        assert response.json() == {"trace_id": trace_id, "state": trace_id}

    def test_propagates_incoming_trace_id(self, client):
        response = client.get("/trace", headers={"X-Trace-Id": "upstream-123"})

        assert response.headers["X-Trace-Id"] == "upstream-123"
        assert response.json()["trace_id"] == "upstream-123"

    def test_context_cleared_after_request(self, client):
        client.get("/trace")

        assert get_trace_id() is None

    def test_client_ip_from_forwarded_header(self, client):
        response = client.get(
            "/client", headers={"X-Forwarded-For": "41.90.64.10, 10.0.0.1"}
        )

        assert response.json() == {"client_ip": "41.90.64.10"}

    def test_client_ip_falls_back_to_peer(self, client):
        response = client.get("/client")

        assert response.json() == {"client_ip": "testclient"}

    def test_forwarded_ipv6_is_canonicalised(self, client):
        response = client.get(
            "/client", headers={"X-Forwarded-For": "2001:0DB8:0000::0001"}
        )

        assert response.json() == {"client_ip": "2001:db8::1"}

    @pytest.mark.parametrize(
        "forwarded",
        [
            "not-an-ip",
            "41.90.64.10:51234",
            "999.1.1.1",
            "2001:db8::1" + ":ffff" * 10,
            "a" * 60,
            ", 41.90.64.10",
        ],
    )
    def test_unparseable_forwarded_value_falls_back_to_peer(self, client, forwarded):
        response = client.get("/client", headers={"X-Forwarded-For": forwarded})

        assert response.json() == {"client_ip": "testclient"}

    def test_access_log_written_when_logger_given(self, mock_logger):
        client = TestClient(_build_app(logger=mock_logger))

        client.get("/trace")

        mock_logger.info.assert_called_once()
        assert mock_logger.info.call_args.args[0] == "request_completed"
        kwargs = mock_logger.info.call_args.kwargs
        assert kwargs["path"] == "/trace"
        assert kwargs["status_code"] == 200


@pytest.mark.unit
class TestProblemDetails:
    def test_builder_renders_problem_details(self, client):
        response = client.get("/conflict", headers={"X-Trace-Id": "t-409"})

        assert response.status_code == 409
        body = response.json()
        assert body["type"].endswith("/errors/session_revoked")
        assert body["title"] == "Resource Conflict"
        assert body["status"] == 409
        assert body["detail"] == "Revoked sessions cannot be marked suspicious"
        assert body["instance"] == "/conflict"
        assert body["trace_id"] == "t-409"

    def test_http_exception_keeps_headers(self, client):
        response = client.get("/unauthorized")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json()["detail"] == "Token expired"
        assert response.json()["title"] == "Authentication Required"

    def test_unhandled_exception_hides_details(self, client):
        response = client.get("/boom")

        assert response.status_code == 500
        body = response.json()
        assert "database exploded" not in body["detail"]
        assert body["title"] == "Internal Server Error"

    def test_unknown_status_title(self):
        assert ErrorResponseBuilder.get_title(418) == "Request Failed"
