"""User session database model.

Stores one row per login session with the device, network and activity
fields the suspicious activity detector correlates.

Status values: "active", "inactive", "revoked", "suspicious".
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseModel, TimestampMixin


class UserSessionModel(TimestampMixin, BaseModel):
    """Session model for login session tracking.

    Fields:
        id: UUID primary key (from BaseModel)
        created_at: When the session was created (from BaseModel)
        updated_at: When the row last changed (from TimestampMixin)

        Identity:
            user_id: Owning user (external auth service, no FK)
            session_token: External session token (unique)

        Device Information:
            device_info: Raw user agent string
            is_mobile, browser_name, browser_version, os_name, os_version

        Network Information:
            ip_address: Client IP (IPv4 or IPv6 text)
            location: Free-text location label

        Lifecycle:
            status, last_activity, expires_at, revocation_reason

    Indexes:
        - ix_user_sessions_user_id: (user_id) for history loads
        - ix_user_sessions_status: (status) for suspicious listing
        - idx_user_sessions_user_status: (user_id, status) for active listing
    """

    __tablename__ = "user_sessions"

    # Identity
    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
        comment="User who owns this session",
    )
    session_token: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="External session token",
    )

    # Device information
    device_info: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Raw user agent string",
    )
    is_mobile: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )
    browser_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    browser_version: Mapped[str | None] = mapped_column(String(50), nullable=True)
    os_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    os_version: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Network information
    ip_address: Mapped[str | None] = mapped_column(
        String(45),
        nullable=True,
        comment="Client IP at login",
    )
    location: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Location label",
    )

    # Lifecycle
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="active",
        index=True,
    )
    last_activity: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    revocation_reason: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )

    __table_args__ = (
        Index("idx_user_sessions_user_status", "user_id", "status"),
    )

    def __repr__(self) -> str:
        return (
            f"<UserSessionModel(id={self.id}, user_id={self.user_id}, "
            f"status={self.status})>"
        )
