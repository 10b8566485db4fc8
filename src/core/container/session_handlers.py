"""Session handler factories.

Request-scoped command/query handlers built on the repository factories.
Presentation code depends on these with FastAPI Depends; in-process
callers (the login flow) can build repositories and call the handler
constructors directly.
"""

from typing import TYPE_CHECKING

from fastapi import Depends

from src.core.container.events import get_event_bus
from src.core.container.infrastructure import (
    get_detection_policy,
    get_device_enricher,
    get_location_enricher,
    get_logger,
)
from src.core.container.repositories import (
    get_location_repository,
    get_session_repository,
)

if TYPE_CHECKING:
    from src.application.commands.handlers.analyze_session_history_handler import (
        AnalyzeSessionHistoryHandler,
    )
    from src.application.commands.handlers.create_session_handler import (
        CreateSessionHandler,
    )
    from src.application.commands.handlers.end_session_handler import (
        EndSessionHandler,
    )
    from src.application.commands.handlers.mark_session_suspicious_handler import (
        MarkSessionSuspiciousHandler,
    )
    from src.application.commands.handlers.revoke_all_sessions_handler import (
        RevokeAllSessionsHandler,
    )
    from src.application.commands.handlers.revoke_session_handler import (
        RevokeSessionHandler,
    )
    from src.application.commands.handlers.touch_session_activity_handler import (
        TouchSessionActivityHandler,
    )
    from src.application.queries.handlers.get_session_handler import (
        GetSessionByTokenHandler,
        GetSessionHandler,
    )
    from src.application.queries.handlers.list_sessions_handler import (
        ListActiveSessionsHandler,
        ListAllSessionsHandler,
        ListSuspiciousSessionsHandler,
    )
    from src.application.services.suspicious_activity_detector import (
        SuspiciousActivityDetector,
    )
    from src.domain.protocols.location_repository import LocationRepository
    from src.domain.protocols.session_repository import SessionRepository


# ============================================================================
# Detector
# ============================================================================


async def get_suspicious_activity_detector(
    session_repo: "SessionRepository" = Depends(get_session_repository),
    location_repo: "LocationRepository" = Depends(get_location_repository),
) -> "SuspiciousActivityDetector":
    """Get suspicious activity detector (request-scoped)."""
    from src.application.services.suspicious_activity_detector import (
        SuspiciousActivityDetector,
    )

    return SuspiciousActivityDetector(
        session_repo=session_repo,
        location_repo=location_repo,
        policy=get_detection_policy(),
        logger=get_logger(),
    )


# ============================================================================
# Command Handlers
# ============================================================================


async def get_create_session_handler(
    session_repo: "SessionRepository" = Depends(get_session_repository),
    location_repo: "LocationRepository" = Depends(get_location_repository),
    detector: "SuspiciousActivityDetector" = Depends(get_suspicious_activity_detector),
) -> "CreateSessionHandler":
    """Get CreateSession command handler (request-scoped).

    Returns:
        CreateSessionHandler wired with enrichers, detector and event bus.
    """
    from src.application.commands.handlers.create_session_handler import (
        CreateSessionHandler,
    )

    return CreateSessionHandler(
        session_repo=session_repo,
        location_repo=location_repo,
        detector=detector,
        device_enricher=get_device_enricher(),
        location_enricher=get_location_enricher(),
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


async def get_touch_session_activity_handler(
    session_repo: "SessionRepository" = Depends(get_session_repository),
) -> "TouchSessionActivityHandler":
    from src.application.commands.handlers.touch_session_activity_handler import (
        TouchSessionActivityHandler,
    )

    return TouchSessionActivityHandler(session_repo=session_repo)


async def get_end_session_handler(
    session_repo: "SessionRepository" = Depends(get_session_repository),
) -> "EndSessionHandler":
    from src.application.commands.handlers.end_session_handler import (
        EndSessionHandler,
    )

    return EndSessionHandler(
        session_repo=session_repo,
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


async def get_revoke_session_handler(
    session_repo: "SessionRepository" = Depends(get_session_repository),
) -> "RevokeSessionHandler":
    from src.application.commands.handlers.revoke_session_handler import (
        RevokeSessionHandler,
    )

    return RevokeSessionHandler(
        session_repo=session_repo,
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


async def get_revoke_all_sessions_handler(
    session_repo: "SessionRepository" = Depends(get_session_repository),
) -> "RevokeAllSessionsHandler":
    from src.application.commands.handlers.revoke_all_sessions_handler import (
        RevokeAllSessionsHandler,
    )

    return RevokeAllSessionsHandler(
        session_repo=session_repo,
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


async def get_mark_session_suspicious_handler(
    session_repo: "SessionRepository" = Depends(get_session_repository),
) -> "MarkSessionSuspiciousHandler":
    from src.application.commands.handlers.mark_session_suspicious_handler import (
        MarkSessionSuspiciousHandler,
    )

    return MarkSessionSuspiciousHandler(
        session_repo=session_repo,
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


async def get_analyze_session_history_handler(
    detector: "SuspiciousActivityDetector" = Depends(get_suspicious_activity_detector),
) -> "AnalyzeSessionHistoryHandler":
    from src.application.commands.handlers.analyze_session_history_handler import (
        AnalyzeSessionHistoryHandler,
    )

    return AnalyzeSessionHistoryHandler(
        detector=detector,
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


# ============================================================================
# Query Handlers
# ============================================================================


async def get_get_session_handler(
    session_repo: "SessionRepository" = Depends(get_session_repository),
) -> "GetSessionHandler":
    from src.application.queries.handlers.get_session_handler import (
        GetSessionHandler,
    )

    return GetSessionHandler(session_repo=session_repo)


async def get_get_session_by_token_handler(
    session_repo: "SessionRepository" = Depends(get_session_repository),
) -> "GetSessionByTokenHandler":
    from src.application.queries.handlers.get_session_handler import (
        GetSessionByTokenHandler,
    )

    return GetSessionByTokenHandler(session_repo=session_repo)


async def get_list_active_sessions_handler(
    session_repo: "SessionRepository" = Depends(get_session_repository),
) -> "ListActiveSessionsHandler":
    from src.application.queries.handlers.list_sessions_handler import (
        ListActiveSessionsHandler,
    )

    return ListActiveSessionsHandler(session_repo=session_repo)


async def get_list_suspicious_sessions_handler(
    session_repo: "SessionRepository" = Depends(get_session_repository),
) -> "ListSuspiciousSessionsHandler":
    from src.application.queries.handlers.list_sessions_handler import (
        ListSuspiciousSessionsHandler,
    )

    return ListSuspiciousSessionsHandler(session_repo=session_repo)


async def get_list_all_sessions_handler(
    session_repo: "SessionRepository" = Depends(get_session_repository),
) -> "ListAllSessionsHandler":
    from src.application.queries.handlers.list_sessions_handler import (
        ListAllSessionsHandler,
    )

    return ListAllSessionsHandler(session_repo=session_repo)
