"""Location observation repository protocol.

Observations are append-only records of where a login came from. The only
mutation after insert is flagging, which must also flag the owning session
in the same transaction.
"""

from typing import Protocol
from uuid import UUID

from src.domain.entities.location_observation import LocationObservation


class LocationRepository(Protocol):
    """Location observation repository protocol (port)."""

    async def save(self, observation: LocationObservation) -> None:
        """Persist a new location observation.

        Args:
            observation: Observation to store. Its session must exist.
        """
        ...

    async def find_by_id(self, observation_id: UUID) -> LocationObservation | None:
        """Find observation by ID."""
        ...

    async def find_by_session_id(self, session_id: UUID) -> list[LocationObservation]:
        """Find all observations recorded for a session, oldest first."""
        ...

    async def find_by_user_id(self, user_id: UUID) -> list[LocationObservation]:
        """Find all observations for a user, oldest first.

        Args:
            user_id: User identifier.

        Returns:
            Observations ordered by created_at ascending.
        """
        ...

    async def mark_suspicious(self, observation_id: UUID) -> bool:
        """Flag an observation and its owning session atomically.

        Both writes commit together or not at all. A revoked session keeps
        its status; the observation is still flagged.

        Args:
            observation_id: Observation to flag.

        Returns:
            True if the observation exists and was flagged, False if unknown.
        """
        ...
