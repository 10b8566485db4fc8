"""Container module - Centralized dependency injection.

Re-exports all factory functions from submodules:

    from src.core.container import get_logger, get_revoke_session_handler

The container is organized into modules:
- infrastructure: Core services (database, logging, JWT, enrichers, policy)
- events: Event bus and subscriptions
- repositories: Repository factories (request-scoped)
- session_handlers: Command/query handler factories (request-scoped)
"""

from src.core.container.events import get_event_bus
from src.core.container.infrastructure import (
    get_database,
    get_db_session,
    get_detection_policy,
    get_device_enricher,
    get_location_enricher,
    get_logger,
    get_token_service,
)
from src.core.container.repositories import (
    get_location_repository,
    get_session_repository,
)
from src.core.container.session_handlers import (
    get_analyze_session_history_handler,
    get_create_session_handler,
    get_end_session_handler,
    get_get_session_by_token_handler,
    get_get_session_handler,
    get_list_active_sessions_handler,
    get_list_all_sessions_handler,
    get_list_suspicious_sessions_handler,
    get_mark_session_suspicious_handler,
    get_revoke_all_sessions_handler,
    get_revoke_session_handler,
    get_suspicious_activity_detector,
    get_touch_session_activity_handler,
)

__all__ = [
    # Infrastructure
    "get_database",
    "get_db_session",
    "get_detection_policy",
    "get_device_enricher",
    "get_location_enricher",
    "get_logger",
    "get_token_service",
    # Events
    "get_event_bus",
    # Repositories
    "get_location_repository",
    "get_session_repository",
    # Handlers
    "get_analyze_session_history_handler",
    "get_create_session_handler",
    "get_end_session_handler",
    "get_get_session_by_token_handler",
    "get_get_session_handler",
    "get_list_active_sessions_handler",
    "get_list_all_sessions_handler",
    "get_list_suspicious_sessions_handler",
    "get_mark_session_suspicious_handler",
    "get_revoke_all_sessions_handler",
    "get_revoke_session_handler",
    "get_suspicious_activity_detector",
    "get_touch_session_activity_handler",
]
