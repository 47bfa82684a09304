"""
CascadeBlog Backend - Liveness and Health Routes
=================================================

What:  GET / answers a plain-text liveness message; GET /health probes the
       database for monitors and load balancers.
Why:   A process that cannot reach MongoDB cannot serve a single blog route,
       so /health reports 503 in that case.
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse
from motor.motor_asyncio import AsyncIOMotorDatabase

from app import __version__
from app.database import get_database, ping_database
from app.schemas.blog import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()

LIVENESS_MESSAGE = "welcome to the CascadeBlog server......."


@router.get("/", response_class=PlainTextResponse, summary="Liveness message")
async def root() -> str:
    return LIVENESS_MESSAGE


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(db: AsyncIOMotorDatabase = Depends(get_database)):
    """
    Probe the database with a `ping` command.

    Returns:
        200 with status=healthy, or 503 with status=unhealthy when the
        database does not answer.
    """
    connected = await ping_database(db)
    body = HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if not connected:
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
