"""Health check endpoint."""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health(request: Request):
    """Health check endpoint with dependency status."""
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "services": {}
    }

    database = getattr(request.app.state, "database", None)
    if database is None:
        health_status["services"]["database"] = {
            "status": "unhealthy",
            "message": "Not configured"
        }
    elif database.ping():
        health_status["services"]["database"] = {
            "status": "healthy",
            "message": "Connection successful"
        }
    else:
        health_status["services"]["database"] = {
            "status": "unhealthy",
            "message": "Connection failed"
        }

    overall_healthy = health_status["services"]["database"]["status"] == "healthy"
    if not overall_healthy:
        health_status["status"] = "degraded"
        logger.warning("Health check degraded", extra={"services": health_status["services"]})

    status_code = status.HTTP_200_OK if overall_healthy else status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(
        content=health_status,
        status_code=status_code
    )
