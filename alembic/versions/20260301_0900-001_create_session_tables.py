"""create_session_tables

Revision ID: 001
Revises:
Create Date: 2026-03-01 09:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create user_sessions and user_location_history tables."""
    op.create_table(
        "user_sessions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        # Identity
        sa.Column(
            "user_id",
            sa.Uuid(),
            nullable=False,
            comment="User who owns this session",
        ),
        sa.Column(
            "session_token",
            sa.String(length=255),
            nullable=False,
            comment="External session token",
        ),
        # Device
        sa.Column("device_info", sa.Text(), nullable=True, comment="Raw user agent string"),
        sa.Column("is_mobile", sa.Boolean(), nullable=False),
        sa.Column("browser_name", sa.String(length=100), nullable=True),
        sa.Column("browser_version", sa.String(length=50), nullable=True),
        sa.Column("os_name", sa.String(length=100), nullable=True),
        sa.Column("os_version", sa.String(length=50), nullable=True),
        # Network
        sa.Column(
            "ip_address",
            sa.String(length=45),
            nullable=True,
            comment="Client IP at login",
        ),
        sa.Column(
            "location",
            sa.String(length=255),
            nullable=True,
            comment="Location label",
        ),
        # Lifecycle
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("last_activity", sa.DateTime(timezone=True), nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("revocation_reason", sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("session_token"),
    )
    op.create_index("ix_user_sessions_user_id", "user_sessions", ["user_id"])
    op.create_index("ix_user_sessions_status", "user_sessions", ["status"])
    op.create_index(
        "idx_user_sessions_user_status",
        "user_sessions",
        ["user_id", "status"],
    )

    op.create_table(
        "user_location_history",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("session_id", sa.Uuid(), nullable=False),
        sa.Column("ip_address", sa.String(length=45), nullable=False),
        sa.Column("country_code", sa.String(length=2), nullable=True),
        sa.Column("country_name", sa.String(length=100), nullable=True),
        sa.Column("region_name", sa.String(length=100), nullable=True),
        sa.Column("city", sa.String(length=100), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("is_suspicious", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(
            ["session_id"],
            ["user_sessions.id"],
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_user_location_history_user_id",
        "user_location_history",
        ["user_id"],
    )
    op.create_index(
        "ix_user_location_history_session_id",
        "user_location_history",
        ["session_id"],
    )


def downgrade() -> None:
    """Drop session tables."""
    op.drop_index(
        "ix_user_location_history_session_id",
        table_name="user_location_history",
    )
    op.drop_index(
        "ix_user_location_history_user_id",
        table_name="user_location_history",
    )
    op.drop_table("user_location_history")
    op.drop_index("idx_user_sessions_user_status", table_name="user_sessions")
    op.drop_index("ix_user_sessions_status", table_name="user_sessions")
    op.drop_index("ix_user_sessions_user_id", table_name="user_sessions")
    op.drop_table("user_sessions")
