"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if either store is unreachable (readiness)
    - Probes are unauthenticated
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import thryv.infrastructure.database as database
import thryv.infrastructure.dynamodb as dynamodb

router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_NAME = "thryv-backend"
SERVICE_VERSION = "1.0.0"


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe — checks PostgreSQL and DynamoDB connectivity."""
    db_ok = await database.db_manager.health_check() if database.db_manager else False
    kv_ok = (
        await dynamodb.kv_manager.health_check(dynamodb.company_table_name)
        if dynamodb.kv_manager else False
    )
    checks = {
        "postgresql": "healthy" if db_ok else "unavailable",
        "dynamodb": "healthy" if kv_ok else "unavailable",
    }
    if not (db_ok and kv_ok):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": checks},
        )
    return {"status": "ready", "checks": checks}
