"""
Health check endpoints.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from shared.config.logging import rest_api_logger as logger
from shared.config.settings import settings


router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("")
def health_check():
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "service": "bodegon-api",
        "environment": settings.environment,
    }


@router.get("/detailed")
def detailed_health_check(request: Request):
    """
    Detailed health check that verifies database connectivity.
    Returns 503 when the database is unreachable.
    """
    checks = {
        "service": "bodegon-api",
        "environment": settings.environment,
        "dependencies": {},
    }

    try:
        with request.app.state.database.session() as db:
            db.execute(text("SELECT 1"))
        checks["dependencies"]["database"] = {"status": "healthy"}
        checks["status"] = "healthy"
    except Exception as e:
        logger.error("Database health check failed", error=str(e))
        checks["dependencies"]["database"] = {"status": "unhealthy", "error": str(e)}
        checks["status"] = "degraded"
        return JSONResponse(content=checks, status_code=503)

    return checks
