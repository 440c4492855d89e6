"""
Health check endpoints.

Used for monitoring and load balancer health checks.
"""
from fastapi import APIRouter
from fastapi.responses import JSONResponse
import logging
import platform

from core.domain.clock import utc_now
from core.infrastructure.database.config import get_session_factory, ping_database


logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns system health status.
    """
    return {
        "status": "healthy",
        "timestamp": utc_now().isoformat(),
        "service": "storefront-orders",
        "version": "1.0.0",
        "python_version": platform.python_version(),
    }


@router.get("/health/ready")
async def readiness_check():
    """
    Readiness check endpoint.

    Returns 503 until the database answers.
    """
    try:
        await ping_database(get_session_factory())
        database = "ok"
    except Exception as e:
        logger.warning(f"Readiness check failed: {e}")
        database = "unavailable"

    ready = database == "ok"
    return JSONResponse(
        status_code=200 if ready else 503,
        content={
            "status": "ready" if ready else "not_ready",
            "timestamp": utc_now().isoformat(),
            "checks": {
                "api": "ok",
                "database": database,
            },
        },
    )
