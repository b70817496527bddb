"""
Health check endpoints for monitoring and orchestration.

Provides:
- Liveness probe: Is the app running?
- Readiness probe: Can the app reach its database?
"""

import time

import structlog
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import text

from app.config import settings
from app.core.database import db_manager

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Health"])


async def _check_database() -> dict:
    start = time.perf_counter()
    try:
        async for db in db_manager.get_session():
            await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("health_database_unavailable", error=str(e))
        return {"status": "unhealthy", "error": str(e)}
    return {
        "status": "healthy",
        "response_time_ms": round((time.perf_counter() - start) * 1000, 2),
    }


@router.get("/health/live")
async def liveness() -> dict:
    """
    Liveness probe.

    Returns:
        200: Application is running
    """
    return {"status": "alive"}


@router.get("/health")
@router.get("/api/health")
async def health() -> JSONResponse:
    """
    Readiness/health check with dependency status.

    Returns:
        200: Database reachable
        503: Degraded service
    """
    database = await _check_database()
    healthy = database["status"] == "healthy"

    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ok" if healthy else "degraded",
            "version": settings.app_version,
            "environment": settings.environment,
            "checks": {"database": database},
        },
    )
