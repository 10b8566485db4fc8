"""SessionRepository - SQLAlchemy implementation of SessionRepository protocol.

Adapter for hexagonal architecture.
Maps between domain Session entities and UserSessionModel rows.
"""

from datetime import UTC, datetime
from typing import Any, cast
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.session import Session
from src.domain.enums.session_status import SessionStatus
from src.infrastructure.persistence.models.user_session import UserSessionModel


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes read back from SQLite."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


class SessionRepository:
    """SQLAlchemy implementation of SessionRepository protocol.

    This class does NOT inherit from the SessionRepository protocol
    (Protocol uses structural typing).

    Example:
        >>> async with database.get_session() as db_session:
        ...     repo = SessionRepository(db_session)
        ...     session = await repo.find_by_token("sess-abc")
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    async def save(self, session: Session) -> None:
        """Save or update a session.

        Args:
            session: Session entity to persist.
        """
        existing = await self._session.get(UserSessionModel, session.id)

        try:
            if existing is None:
                self._session.add(self._to_model(session))
            else:
                self._update_model(existing, session)
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise

    async def find_by_id(self, session_id: UUID) -> Session | None:
        model = await self._session.get(UserSessionModel, session_id)
        if model is None:
            return None
        return self._to_entity(model)

    async def find_by_token(self, session_token: str) -> Session | None:
        stmt = select(UserSessionModel).where(
            UserSessionModel.session_token == session_token
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return self._to_entity(model)

    async def find_by_user_id(
        self,
        user_id: UUID,
        *,
        status: SessionStatus | None = None,
    ) -> list[Session]:
        """Find all sessions for a user.

        Args:
            user_id: User identifier.
            status: Optional status filter.

        Returns:
            Sessions ordered by created_at descending (newest first).
        """
        stmt = select(UserSessionModel).where(UserSessionModel.user_id == user_id)
        if status is not None:
            stmt = stmt.where(UserSessionModel.status == status.value)
        stmt = stmt.order_by(UserSessionModel.created_at.desc())

        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def find_by_status(self, status: SessionStatus) -> list[Session]:
        stmt = (
            select(UserSessionModel)
            .where(UserSessionModel.status == status.value)
            .order_by(UserSessionModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def find_all(
        self,
        *,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Session]:
        stmt = (
            select(UserSessionModel)
            .order_by(UserSessionModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def count_all(self) -> int:
        result = await self._session.execute(
            select(func.count()).select_from(UserSessionModel)
        )
        return result.scalar_one()

    async def update_activity(self, session_token: str, at: datetime) -> bool:
        """Set last_activity with a single UPDATE.

        Returns:
            True if a row was updated.
        """
        stmt = (
            update(UserSessionModel)
            .where(UserSessionModel.session_token == session_token)
            .values(last_activity=at)
        )
        try:
            result = await self._session.execute(stmt)
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise
        return (cast(Any, result).rowcount or 0) > 0

    def _to_model(self, session: Session) -> UserSessionModel:
        """Convert domain entity to database model."""
        return UserSessionModel(
            id=session.id,
            user_id=session.user_id,
            session_token=session.session_token,
            device_info=session.device_info,
            is_mobile=session.is_mobile,
            browser_name=session.browser_name,
            browser_version=session.browser_version,
            os_name=session.os_name,
            os_version=session.os_version,
            ip_address=session.ip_address,
            location=session.location,
            status=session.status.value,
            last_activity=session.last_activity,
            created_at=session.created_at,
            expires_at=session.expires_at,
            revocation_reason=session.revocation_reason,
        )

    def _to_entity(self, model: UserSessionModel) -> Session:
        """Convert database model to domain entity."""
        return Session(
            id=model.id,
            user_id=model.user_id,
            session_token=model.session_token,
            device_info=model.device_info,
            is_mobile=model.is_mobile,
            browser_name=model.browser_name,
            browser_version=model.browser_version,
            os_name=model.os_name,
            os_version=model.os_version,
            ip_address=model.ip_address,
            location=model.location,
            status=SessionStatus(model.status),
            last_activity=as_utc(model.last_activity),
            created_at=cast(datetime, as_utc(model.created_at)),
            expires_at=as_utc(model.expires_at),
            revocation_reason=model.revocation_reason,
        )

    def _update_model(self, model: UserSessionModel, session: Session) -> None:
        """Copy mutable fields onto an existing row."""
        model.device_info = session.device_info
        model.is_mobile = session.is_mobile
        model.browser_name = session.browser_name
        model.browser_version = session.browser_version
        model.os_name = session.os_name
        model.os_version = session.os_version
        model.ip_address = session.ip_address
        model.location = session.location
        model.status = session.status.value
        model.last_activity = session.last_activity
        model.expires_at = session.expires_at
        model.revocation_reason = session.revocation_reason
