"""
Health check endpoints.

Readiness failures are logged with their cause; the probe response only says
which dependency failed.
"""

import logging
from typing import Dict

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from redis.asyncio import Redis
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from fieldservice.core.database import get_db
from fieldservice.core.redis import get_redis

logger = logging.getLogger(__name__)

router = APIRouter()

PASS = {"status": "pass"}
FAIL = {"status": "fail"}


@router.get("/liveness", status_code=status.HTTP_200_OK)
async def liveness() -> Dict[str, str]:
    """Simple liveness probe."""
    return {"status": "alive"}


@router.get("/readiness")
async def readiness(
    db: AsyncSession = Depends(get_db),
    redis: Redis = Depends(get_redis),
):
    """Readiness probe that verifies database and Redis connectivity."""
    checks: Dict[str, Dict[str, str]] = {}

    try:
        result = await db.execute(text("SELECT 1"))
        result.scalar()
        checks["database"] = dict(PASS)
    except Exception:
        logger.exception("readiness_check_failed", extra={"check": "database"})
        checks["database"] = dict(FAIL)

    try:
        await redis.ping()
        checks["redis"] = dict(PASS)
    except Exception:
        logger.exception("readiness_check_failed", extra={"check": "redis"})
        checks["redis"] = dict(FAIL)

    ready = all(check == PASS for check in checks.values())
    return JSONResponse(
        status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "ready" if ready else "not_ready", "checks": checks},
    )
