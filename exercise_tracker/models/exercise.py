"""
Exercise Tracker: Exercise SQLAlchemy Model
==============================================

What:  ORM model for the `exercises` table.
Who:   Created and queried only through ExerciseStore.

Table Design:
    - Exercises are top-level rows carrying a user_id back-reference, so the
      log query can count and filter them without loading the user.
    - No foreign key: ExerciseService checks the user exists before insert.
    - id: integer surrogate key; also the tie-breaker for equal dates.
    - date: calendar date only (no time of day).

Index on (user_id, date):
    Serves the log query: WHERE user_id = :id AND date >= :from AND date < :to
    ORDER BY date, plus the per-user COUNT.
"""

import datetime

from sqlalchemy import Date, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from exercise_tracker.database import Base


class Exercise(Base):
    """
    One logged exercise session.

    Lifecycle:
        Created by POST /api/users/{id}/exercises. Immutable afterwards.
    """

    __tablename__ = "exercises"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    user_id: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="Id of the owning user",
    )

    description: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="What was done, 1-20 characters",
    )

    duration: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Minutes, 1-1440",
    )

    date: Mapped[datetime.date] = mapped_column(
        Date,
        nullable=False,
        comment="Calendar date the exercise took place",
    )

    __table_args__ = (
        Index("idx_exercises_user_id_date", "user_id", "date"),
    )

    def __repr__(self) -> str:
        return (
            f"<Exercise(id={self.id}, user_id='{self.user_id}', "
            f"date='{self.date}', duration={self.duration})>"
        )
