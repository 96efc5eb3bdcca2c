"""
PawMart Backend — Liveness & Health Routes
============================================

What:  GET /        plain-text liveness message
       GET /health  dependency-aware health check
Who:   Called by uptime monitors, Docker health checks and load balancers.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response
from fastapi.responses import PlainTextResponse

from pawmart import __version__
from pawmart.database import Database
from pawmart.dependencies import get_database
from pawmart.schemas.responses import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

LIVENESS_MESSAGE = "PawMart Server is Running..."

_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, summary="Liveness message")
async def root() -> str:
    return LIVENESS_MESSAGE


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
)
async def health_check(
    response: Response,
    database: Database = Depends(get_database),
) -> HealthResponse:
    """
    Ping the database with SELECT 1 and report aggregate status.

    Why lightweight: health checks run every few seconds; a real query
    against the documents table would cost more than it tells us.
    """
    db_ok = await database.ping()
    if not db_ok:
        response.status_code = 503

    return HealthResponse(
        status="healthy" if db_ok else "unhealthy",
        version=__version__,
        database="connected" if db_ok else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
