"""
Exercise Tracker: Application Configuration
==============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by main.py, alembic/env.py and anything that needs a default.
When:  Loaded once at module import time; validated before the app starts.

Store connection:
    Either set DATABASE_URL to a full SQLAlchemy async URL, or set the
    components (DB_HOST, DB_PORT, DB_USER, DB_PASSWORD, DB_NAME) and let
    `resolved_database_url` assemble a postgresql+asyncpg URL from them.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults. Production deployments must
    override the store credentials.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Full URL wins over the components below when set.
    database_url: Optional[str] = Field(
        default=None,
        description="Async SQLAlchemy URL, e.g. postgresql+asyncpg://user:pw@host/db",
    )
    db_host: str = Field(default="localhost")
    db_port: int = Field(default=5432, ge=1, le=65535)
    db_user: str = Field(default="tracker")
    db_password: str = Field(default="")
    db_name: str = Field(default="exercise_tracker")

    # Pool sizing (ignored for SQLite URLs, which use SQLAlchemy's default pool)
    db_pool_size: int = Field(default=10, ge=1, le=100)
    db_max_overflow: int = Field(default=5, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    # Upper bound in seconds on any single store call
    storage_timeout: float = Field(default=10.0, gt=0, le=120)

    # Create missing tables at startup; turn off when Alembic owns the schema
    create_tables: bool = Field(default=True)

    # ── Behaviour Policies ────────────────────────────────────────────────
    # When on, POST /api/users with a known username returns the existing user
    enforce_unique_username: bool = Field(default=True)

    # Legacy rule: refuse exercises dated before today. Off unless reproducing it.
    reject_past_exercise_dates: bool = Field(default=False)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated URLs, or "*" for any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def resolved_database_url(self) -> str:
        """DATABASE_URL if given, otherwise a postgresql+asyncpg URL built from the components."""
        if self.database_url:
            return self.database_url
        url = URL.create(
            "postgresql+asyncpg",
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )
        return url.render_as_string(hide_password=False)

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Singleton instance, the default for create_app() and Alembic
settings = Settings()
