"""
Pet Adoption Backend — Health Routes
======================================

What:  Liveness text at `/` and a store connectivity probe at `/health`.
How:   `/health` pings MongoDB through the store on `app.state`. When the
       store never came up (degraded startup) or the ping fails, the service
       reports `unhealthy` with HTTP 503.
Who:   Load balancers, container health checks, humans with curl.
"""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from pet_adoption import __version__
from pet_adoption.exceptions import StoreError
from pet_adoption.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Uptime is reported relative to module import
_start_time = time.time()

LIVENESS_TEXT = "🐾 Pet adoption server is running!"


@router.get("/", response_class=PlainTextResponse, summary="Liveness check")
async def root() -> PlainTextResponse:
    return PlainTextResponse(LIVENESS_TEXT)


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Store unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(request: Request):
    """
    Check whether the document store answers a ping.

    Returns:
        HealthResponse; HTTP 200 when healthy, 503 otherwise.
    """
    db_status = "connected"
    store = getattr(request.app.state, "store", None)

    if store is None:
        db_status = "disconnected"
    else:
        try:
            await store.ping()
        except StoreError as e:
            db_status = "disconnected"
            logger.warning("Health check: database unreachable: %s", e.message)

    health = HealthResponse(
        status="healthy" if db_status == "connected" else "unhealthy",
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if db_status != "connected":
        return JSONResponse(status_code=503, content=health.model_dump())
    return health
