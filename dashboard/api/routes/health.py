"""Health Probes — process liveness and database readiness.

Invariants:
    - /health/ answers 200 whenever the process can serve a request
    - /health/ready answers 503 until db_manager exists and a SELECT 1 round-trips
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

import dashboard.infrastructure.database as database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/")
async def liveness(request: Request):
    return {
        "status": "healthy",
        "service": request.app.title,
        "version": request.app.version,
    }


@router.get("/ready")
async def readiness():
    manager = database.db_manager
    if manager is not None and await manager.ping():
        return {"status": "ready", "checks": {"database": "ok"}}

    reason = "database_unavailable" if manager else "database_not_initialized"
    logger.warning(f"Not ready: {reason}", extra={"path": "/api/v1/health/ready"})
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason},
    )
