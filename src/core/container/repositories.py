"""Repository dependency factories.

Request-scoped repository instances sharing one database session, so the
location/session cascade and handler writes run on the same connection.
Tests override these two factories with in-memory adapters.
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.container.infrastructure import get_db_session

if TYPE_CHECKING:
    from src.domain.protocols.location_repository import LocationRepository
    from src.domain.protocols.session_repository import SessionRepository


async def get_session_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "SessionRepository":
    """Get session repository (request-scoped).

    Args:
        session: Database session for request duration.

    Returns:
        SQLAlchemy SessionRepository.
    """
    from src.infrastructure.persistence.repositories import SessionRepository

    return SessionRepository(session=session)


async def get_location_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "LocationRepository":
    """Get location observation repository (request-scoped)."""
    from src.infrastructure.persistence.repositories import LocationRepository

    return LocationRepository(session=session)
