"""Declarative base for the session tables.

Both tables (user_sessions, user_location_history) share a UUID primary
key and a timezone-aware created_at. Repositories always write created_at
from the entity, because the detector's time windows are computed from
it; the server default only covers rows inserted by hand.

Domain entities are mapped to and from these models by the repositories
and never inherit from them.
"""

from datetime import datetime
from uuid import UUID as PythonUUID

from sqlalchemy import DateTime, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from uuid_extensions import uuid7


class BaseModel(DeclarativeBase):
    """Base for all session-guard tables (id, created_at)."""

    __abstract__ = True

    # uuid7 keeps primary keys roughly ordered by creation time
    id: Mapped[PythonUUID] = mapped_column(Uuid, primary_key=True, default=uuid7)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id}>"


class TimestampMixin:
    """updated_at for rows whose status changes after insert."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
