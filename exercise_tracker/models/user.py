"""
Exercise Tracker: User SQLAlchemy Model
==========================================

What:  ORM model for the `users` table.
Who:   Created and queried only through ExerciseStore.

Table Design:
    - id: opaque 32-char hex string from the identity generator, assigned in
      Python before insert so the handler knows it without a round trip
    - username: 1-30 chars, enforced by the validation layer; the column is
      indexed (not unique) because duplicate handling is a runtime policy
    - created_at: UTC insert time; the oldest row wins when a name is shared
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, text
from sqlalchemy.orm import Mapped, mapped_column

from exercise_tracker.database import Base


class User(Base):
    """
    A person who logs exercises.

    Lifecycle:
        Created by POST /api/users. Never updated or deleted.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(32),
        primary_key=True,
        comment="Opaque unique identifier (UUID4 hex)",
    )

    username: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        index=True,
        comment="Display name, 1-30 characters",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this user was created (UTC)",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
