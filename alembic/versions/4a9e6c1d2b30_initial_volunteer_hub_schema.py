"""Initial Volunteer Hub schema

Revision ID: 4a9e6c1d2b30
Revises:
Create Date: 2026-10-19
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4a9e6c1d2b30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "user_credentials",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("email", sa.String(256), nullable=False),
        sa.Column("password_hash", sa.String(512), nullable=False),
        sa.Column("role", sa.String(32), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_user_credentials_email"), "user_credentials", ["email"], unique=True)

    op.create_table(
        "user_profiles",
        sa.Column("user_credentials_id", sa.String(64), nullable=False),
        sa.Column("first_name", sa.String(50), nullable=False),
        sa.Column("last_name", sa.String(50), nullable=False),
        sa.Column("address_one", sa.String(100), nullable=False),
        sa.Column("address_two", sa.String(100), nullable=True),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("state", sa.String(2), nullable=False),
        sa.Column("zip_code", sa.String(9), nullable=False),
        sa.Column("skills", sa.JSON(), nullable=False),
        sa.Column("preferences", sa.String(2000), nullable=False),
        sa.Column("availability", sa.JSON(), nullable=False),
        sa.ForeignKeyConstraint(["user_credentials_id"], ["user_credentials.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_credentials_id"),
    )

    op.create_table(
        "events",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.String(4000), nullable=False),
        sa.Column("location", sa.String(500), nullable=False),
        sa.Column("date_utc", sa.DateTime(), nullable=False),
        sa.Column("urgency", sa.String(32), nullable=False),
        sa.Column("required_skills", sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_events_date_utc"), "events", ["date_utc"], unique=False)

    op.create_table(
        "volunteer_history",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("event_id", sa.String(64), nullable=False),
        sa.Column("date_utc", sa.DateTime(), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        sa.Column("created_at_utc", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["user_credentials.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "event_id", name="uq_volunteer_history_user_event"),
    )
    op.create_index(op.f("ix_volunteer_history_event_id"), "volunteer_history", ["event_id"], unique=False)
    op.create_index("ix_volunteer_history_user_date", "volunteer_history", ["user_id", "date_utc"], unique=False)

    op.create_table(
        "notifications",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("message", sa.String(2000), nullable=False),
        sa.Column("read", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["user_credentials.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_notifications_user_id"), "notifications", ["user_id"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f("ix_notifications_user_id"), table_name="notifications")
    op.drop_table("notifications")
    op.drop_index("ix_volunteer_history_user_date", table_name="volunteer_history")
    op.drop_index(op.f("ix_volunteer_history_event_id"), table_name="volunteer_history")
    op.drop_table("volunteer_history")
    op.drop_index(op.f("ix_events_date_utc"), table_name="events")
    op.drop_table("events")
    op.drop_table("user_profiles")
    op.drop_index(op.f("ix_user_credentials_email"), table_name="user_credentials")
    op.drop_table("user_credentials")
