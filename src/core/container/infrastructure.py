"""Infrastructure service factories.

Application-scoped singletons (lru_cache) for logging, database, token
validation, enrichment and detection policy, plus the request-scoped
database session.
"""

from functools import lru_cache
from typing import TYPE_CHECKING, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from src.domain.protocols.logger_protocol import LoggerProtocol
    from src.domain.value_objects.detection_policy import DetectionPolicy
    from src.infrastructure.enrichers import IPLocationEnricher, UserAgentDeviceEnricher
    from src.infrastructure.security import JWTService


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Get logger singleton (app-scoped).

    Human-readable console output in development, JSON everywhere else.

    Usage:
        logger = get_logger()
        logger.info("session_created", session_id=str(session.id))
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
    )


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Use get_db_session() for per-request sessions. The application lifespan
    calls close() on shutdown.
    """
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    Commits on success, rolls back on error.

    Usage:
        @router.get("/sessions")
        async def list_sessions(session: AsyncSession = Depends(get_db_session)):
            ...
    """
    db = get_database()
    async with db.get_session() as session:
        yield session


@lru_cache()
def get_token_service() -> "JWTService":
    """Get JWT service singleton (app-scoped)."""
    from src.infrastructure.security import JWTService

    return JWTService(
        secret_key=settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )


@lru_cache()
def get_device_enricher() -> "UserAgentDeviceEnricher":
    """Get user agent parser singleton (app-scoped)."""
    from src.infrastructure.enrichers import UserAgentDeviceEnricher

    return UserAgentDeviceEnricher(logger=get_logger())


@lru_cache()
def get_location_enricher() -> "IPLocationEnricher":
    """Get GeoIP2 location enricher singleton (app-scoped).

    Geolocation is disabled when settings.geoip_db_path is unset.
    """
    from src.infrastructure.enrichers import IPLocationEnricher

    return IPLocationEnricher(logger=get_logger(), db_path=settings.geoip_db_path)


@lru_cache()
def get_detection_policy() -> "DetectionPolicy":
    """Build the detection thresholds from settings (app-scoped)."""
    from datetime import timedelta

    from src.domain.value_objects.detection_policy import DetectionPolicy

    return DetectionPolicy(
        comparison_window=timedelta(hours=settings.detection_comparison_window_hours),
        impossible_travel_window=timedelta(
            minutes=settings.detection_impossible_travel_minutes
        ),
        unusual_device_min_known=settings.detection_unusual_device_min_known,
        device_churn_window=timedelta(minutes=settings.detection_device_churn_minutes),
        max_other_active_sessions=settings.detection_max_other_active_sessions,
        history_min_sessions=settings.detection_history_min_sessions,
        max_distinct_locations=settings.detection_max_distinct_locations,
        activity_fallback=timedelta(
            minutes=settings.detection_activity_fallback_minutes
        ),
        ip_change_window=timedelta(hours=settings.detection_ip_change_window_hours),
        correlate_ip_changes=settings.detection_correlate_ip_changes,
        flag_platform_variety=settings.detection_flag_platform_variety,
    )
