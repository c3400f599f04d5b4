"""
Health check routes.
"""

import time

from fastapi import APIRouter, Request

from etfpulse import __version__
from etfpulse.web.models import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Liveness check; never touches upstream sources."""
    started = getattr(request.app.state, "start_time", time.time())
    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=round(time.time() - started, 3),
    )
