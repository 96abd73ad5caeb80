"""
Exercise Tracker: Health Check Route
=======================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings the store with SELECT 1 and reports the result with uptime.

Status levels:
    - healthy:   store reachable (HTTP 200)
    - unhealthy: store unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from exercise_tracker import __version__
from exercise_tracker.exceptions import StorageError
from exercise_tracker.routes.dependencies import get_store
from exercise_tracker.schemas.common import HealthResponse
from exercise_tracker.services.store import ExerciseStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Store unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(store: ExerciseStore = Depends(get_store)):
    db_status = "connected"
    overall = "healthy"

    try:
        await store.ping()
    except StorageError as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: store unreachable: %s", e.context)

    body = HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if overall != "healthy":
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
