"""
Health check endpoints.

Usage:
    GET /health     - Provider health for every category
    GET /ping       - Simple liveness probe
    GET /ready      - Readiness probe
"""
from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import get_logger
from ..dependencies import AppStateDep
from ..models import HealthResponse, PingResponse, ReadinessResponse

logger = get_logger("routes.health")

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    responses={503: {"description": "Core providers unavailable"}},
)
async def health_check(state: AppStateDep):
    """
    Report the default provider of every category.

    - **healthy**: auth and database defaults are usable
    - **unhealthy**: one of them is missing or unavailable

    Categories without an implementation (blockchain, vc, zk) show
    `registered: false` and do not affect the overall status.
    """
    ready = state.is_ready()
    response = HealthResponse(
        status="healthy" if ready else "unhealthy",
        providers=state.provider_status(),
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=__version__,
    )
    if not ready:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump(),
        )
    return response


@router.get("/ping", response_model=PingResponse, summary="Liveness probe")
async def ping() -> PingResponse:
    return PingResponse(status="ok")


@router.get("/ready", response_model=ReadinessResponse, summary="Readiness probe")
async def readiness_check(state: AppStateDep):
    provider_status = state.provider_status()
    checks = {
        "auth": bool(provider_status["auth"]["available"]),
        "database": bool(provider_status["database"]["available"]),
    }
    response = ReadinessResponse(ready=all(checks.values()), checks=checks)

    if not response.ready:
        logger.warning("Readiness check failed: %s", checks)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump(),
        )
    return response
