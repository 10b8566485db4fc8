"""LocationRepository - SQLAlchemy implementation of LocationRepository protocol.

Flagging an observation updates user_location_history and user_sessions on
the same AsyncSession and commits once, so both flags land together.
"""

from datetime import datetime
from typing import cast
from uuid import UUID

from sqlalchemy import and_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.location_observation import LocationObservation
from src.domain.enums.session_status import SessionStatus
from src.infrastructure.persistence.models.location_observation import (
    LocationObservationModel,
)
from src.infrastructure.persistence.models.user_session import UserSessionModel
from src.infrastructure.persistence.repositories.session_repository import as_utc


class LocationRepository:
    """SQLAlchemy implementation of LocationRepository protocol."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def save(self, observation: LocationObservation) -> None:
        """Persist a new location observation."""
        self._session.add(self._to_model(observation))
        try:
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise

    async def find_by_id(self, observation_id: UUID) -> LocationObservation | None:
        model = await self._session.get(LocationObservationModel, observation_id)
        if model is None:
            return None
        return self._to_entity(model)

    async def find_by_session_id(self, session_id: UUID) -> list[LocationObservation]:
        stmt = (
            select(LocationObservationModel)
            .where(LocationObservationModel.session_id == session_id)
            .order_by(LocationObservationModel.created_at.asc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def find_by_user_id(self, user_id: UUID) -> list[LocationObservation]:
        stmt = (
            select(LocationObservationModel)
            .where(LocationObservationModel.user_id == user_id)
            .order_by(LocationObservationModel.created_at.asc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def mark_suspicious(self, observation_id: UUID) -> bool:
        """Flag an observation and its owning session in one transaction.

        A revoked session keeps its status.

        Returns:
            True if the observation exists, False otherwise.
        """
        model = await self._session.get(LocationObservationModel, observation_id)
        if model is None:
            return False

        try:
            await self._session.execute(
                update(LocationObservationModel)
                .where(LocationObservationModel.id == observation_id)
                .values(is_suspicious=True)
            )
            await self._session.execute(
                update(UserSessionModel)
                .where(
                    and_(
                        UserSessionModel.id == model.session_id,
                        UserSessionModel.status != SessionStatus.REVOKED.value,
                    )
                )
                .values(status=SessionStatus.SUSPICIOUS.value)
            )
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise

        return True

    def _to_model(self, observation: LocationObservation) -> LocationObservationModel:
        return LocationObservationModel(
            id=observation.id,
            user_id=observation.user_id,
            session_id=observation.session_id,
            ip_address=observation.ip_address,
            country_code=observation.country_code,
            country_name=observation.country_name,
            region_name=observation.region_name,
            city=observation.city,
            latitude=observation.latitude,
            longitude=observation.longitude,
            is_suspicious=observation.is_suspicious,
            created_at=observation.created_at,
        )

    def _to_entity(self, model: LocationObservationModel) -> LocationObservation:
        return LocationObservation(
            id=model.id,
            user_id=model.user_id,
            session_id=model.session_id,
            ip_address=model.ip_address,
            country_code=model.country_code,
            country_name=model.country_name,
            region_name=model.region_name,
            city=model.city,
            latitude=model.latitude,
            longitude=model.longitude,
            is_suspicious=model.is_suspicious,
            created_at=cast(datetime, as_utc(model.created_at)),
        )
