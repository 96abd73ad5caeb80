"""Create users and exercises tables

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Initial schema: `users` and top-level `exercises` referencing users by id.
How:   Mirrors exercise_tracker/models/user.py and exercise.py.

Rollback: downgrade() drops both tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.String(32),
            nullable=False,
            comment="Opaque unique identifier (UUID4 hex)",
        ),
        sa.Column(
            "username",
            sa.String(30),
            nullable=False,
            comment="Display name, 1-30 characters",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this user was created (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_username", "users", ["username"])

    op.create_table(
        "exercises",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "user_id",
            sa.String(32),
            nullable=False,
            comment="Id of the owning user",
        ),
        sa.Column(
            "description",
            sa.String(20),
            nullable=False,
            comment="What was done, 1-20 characters",
        ),
        sa.Column(
            "duration",
            sa.Integer(),
            nullable=False,
            comment="Minutes, 1-1440",
        ),
        sa.Column(
            "date",
            sa.Date(),
            nullable=False,
            comment="Calendar date the exercise took place",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # Serves the per-user log query and count
    op.create_index("idx_exercises_user_id_date", "exercises", ["user_id", "date"])


def downgrade() -> None:
    op.drop_index("idx_exercises_user_id_date", table_name="exercises")
    op.drop_table("exercises")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
