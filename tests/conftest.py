"""Pytest configuration shared by unit, integration and API tests.

Provides:
1. Marker registration and automatic asyncio marking
2. Mock logger / event bus fixtures
3. In-memory repository fixtures backed by one shared store
"""

import inspect
import os
from unittest.mock import AsyncMock, Mock

# Settings are read at import time; keep test runs away from real resources
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DB_AUTO_CREATE", "false")

import pytest  # noqa: E402

from src.infrastructure.persistence.memory import (  # noqa: E402
    MemoryLocationRepository,
    MemorySessionRepository,
    MemorySessionStore,
)


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real database"
    )
    config.addinivalue_line("markers", "api: HTTP tests against the FastAPI app")
    config.addinivalue_line("markers", "asyncio: Async test that requires event loop")


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions.

    This ensures all async tests are properly marked even if
    the developer forgets to add @pytest.mark.asyncio.
    """
    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)


# =============================================================================
# Reusable Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger():
    """Provide a mock logger for testing.

    Usage:
        def test_something(mock_logger):
            service = MyService(logger=mock_logger)
            service.do_something()
            mock_logger.info.assert_called_once()
    """
    logger = Mock()
    logger.info = Mock()
    logger.debug = Mock()
    logger.error = Mock()
    logger.warning = Mock()
    return logger


@pytest.fixture
def mock_event_bus():
    """Provide a mock event bus for testing.

    Usage:
        async def test_something(mock_event_bus):
            handler = MyHandler(event_bus=mock_event_bus)
            await handler.handle(cmd)
            mock_event_bus.publish.assert_called()
    """
    event_bus = AsyncMock()
    event_bus.publish = AsyncMock(return_value=None)
    event_bus.subscribe = Mock(return_value=None)
    return event_bus


# =============================================================================
# In-memory repositories
# =============================================================================


@pytest.fixture
def memory_store() -> MemorySessionStore:
    return MemorySessionStore()


@pytest.fixture
def session_repo(memory_store) -> MemorySessionRepository:
    return MemorySessionRepository(memory_store)


@pytest.fixture
def location_repo(memory_store) -> MemoryLocationRepository:
    return MemoryLocationRepository(memory_store)
