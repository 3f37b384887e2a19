"""
Health Check Handler

Provides health check endpoints for monitoring and load balancers.

    /health  → process is serving requests
    /ready   → database reachable (Redis is reported, not required)
    /live    → process is alive
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from src.config.settings import settings
from src.shared.adapters.redis_adapter import get_redis_adapter
from src.shared.db import check_db
from src.shared.schemas.common import HealthResponse


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Basic health check endpoint.

    Returns:
        HealthResponse with service status
    """
    return HealthResponse(
        status="healthy",
        service=settings.APP_NAME.lower(),
        version=settings.APP_VERSION,
    )


@router.get("/ready", response_model=HealthResponse)
async def readiness_check():
    """
    Readiness check for Kubernetes/load balancers.

    503 while the database is unreachable.
    """
    checks = {
        "database": await check_db(),
        "redis": await get_redis_adapter().ping(),
    }
    body = HealthResponse(
        status="ready" if checks["database"] else "not_ready",
        service=settings.APP_NAME.lower(),
        version=settings.APP_VERSION,
        checks=checks,
    )
    if not checks["database"]:
        return JSONResponse(status_code=503, content=body.model_dump(mode="json"))
    return body


@router.get("/live")
async def liveness_check():
    """
    Liveness check for Kubernetes.

    Returns:
        Simple alive status
    """
    return {"status": "alive"}
