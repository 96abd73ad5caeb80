"""
Exercise Tracker: Database Engine & Session Factory
======================================================

What:  Async SQLAlchemy engine construction, session factory, and the ORM base.
How:   Nothing here is a module-level singleton. main.py's lifespan builds one
       engine per application from Settings and hands its session factory to
       an ExerciseStore; tests build their own against in-memory SQLite.
Who:   Used by main.py (startup/shutdown), alembic/env.py, and the test suite.

Connection Pooling Strategy (PostgreSQL):
    pool_size:        Persistent connections for normal load
    max_overflow:     Temporary connections for traffic spikes
    pool_pre_ping:    Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour
"""

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from exercise_tracker.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object between the app (create_all) and Alembic.
    """
    pass


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """
    Build the async engine described by ``settings``.

    Pool arguments are only passed to server databases; SQLite picks its own
    pool class and rejects pool sizing.
    """
    url = settings.resolved_database_url
    kwargs = {"echo": settings.log_level == "DEBUG"}
    if not make_url(url).get_backend_name().startswith("sqlite"):
        kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(url, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to ``engine``.

    expire_on_commit=False keeps attributes readable after commit, once the
    session that loaded them is closed.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create any missing tables. Used at startup when CREATE_TABLES is on."""
    # Models register themselves with Base.metadata on import
    from exercise_tracker.models import exercise, user  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine(engine: AsyncEngine) -> None:
    """Close every pooled connection. Called during application shutdown."""
    await engine.dispose()
