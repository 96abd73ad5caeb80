"""
Exercise Tracker: Shared Response Schemas
============================================

What:  Error and health payloads shared by every router.
"""

from typing import List, Union

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Error body for every 4xx/5xx response.

    error: a single message, or a list when several constraints failed at once.

    Example:
        {"error": ["description: String should have at least 1 character",
                   "duration: Input should be greater than or equal to 1"]}
    """
    error: Union[str, List[str]] = Field(description="Error message(s)")


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
