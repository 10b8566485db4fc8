"""Fixtures for HTTP tests against the FastAPI app.

The two repository factories are overridden with in-memory adapters, so
no database is touched. Access tokens are real JWTs signed with the
configured secret.
"""

from collections.abc import Awaitable, Callable
from uuid import UUID

import pytest
from fastapi.testclient import TestClient
from uuid_extensions import uuid7

from src.core.config import settings
from src.core.container import get_location_repository, get_session_repository
from src.domain.entities.session import Session
from src.main import app
from tests.utils.factories import make_session
from tests.utils.tokens import issue_access_token


@pytest.fixture
def client(session_repo, location_repo):
    app.dependency_overrides[get_session_repository] = lambda: session_repo
    app.dependency_overrides[get_location_repository] = lambda: location_repo
    yield TestClient(app)
    app.dependency_overrides.clear()


def bearer(user_id: UUID, session_token: str | None, roles: list[str]) -> dict[str, str]:
    """Authorization header with a signed access token."""
    token = issue_access_token(
        user_id,
        roles,
        secret_key=settings.secret_key,
        session_token=session_token,
        algorithm=settings.jwt_algorithm,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def login(session_repo) -> Callable[..., Awaitable[tuple[Session, dict[str, str]]]]:
    """Store a live session and return it with a matching auth header.

    Usage:
        session, headers = await login(roles=["student"])
    """

    async def _login(
        *,
        user_id: UUID | None = None,
        roles: list[str] | None = None,
        **session_fields,
    ) -> tuple[Session, dict[str, str]]:
        session = make_session(user_id=user_id or uuid7(), **session_fields)
        await session_repo.save(session)
        headers = bearer(session.user_id, session.session_token, roles or ["student"])
        return session, headers

    return _login
