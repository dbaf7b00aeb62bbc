"""Health check endpoints.

Provides:
- Liveness probe with database check (/health)
- Detailed system status (/health/status)
"""

import platform
import sys
import time
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import text
import logging

from app.config import get_settings
from app.dependencies import get_workflow_engine
from workflow.engine import WorkflowEngine

logger = logging.getLogger(__name__)

router = APIRouter()

_start_time = time.monotonic()
_start_datetime = datetime.now(timezone.utc).isoformat()


@router.get("/health", response_model=dict[str, Any])
async def health_check() -> dict[str, Any]:
    """
    Health check with dependency verification.
    Returns 503 if the database cannot be reached.
    """
    settings = get_settings()
    checks: dict[str, str] = {}

    try:
        from db.database import engine

        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        logger.error("Database health check failed: %s", e)
        checks["database"] = "unavailable"

    if checks["database"] == "unavailable":
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"status": "unhealthy", "checks": checks},
        )

    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        **checks,
    }


@router.get("/health/status", response_model=dict[str, Any])
async def system_status(engine: WorkflowEngine = Depends(get_workflow_engine)) -> dict[str, Any]:
    """
    Detailed system status including uptime, versions and configured executors.
    """
    settings = get_settings()
    uptime_seconds = time.monotonic() - _start_time
    hours, remainder = divmod(int(uptime_seconds), 3600)
    minutes, seconds = divmod(remainder, 60)

    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "started_at": _start_datetime,
        "uptime": f"{hours}h {minutes}m {seconds}s",
        "uptime_seconds": round(uptime_seconds, 1),
        "python": {
            "version": sys.version,
            "platform": platform.platform(),
        },
        "step_types": engine.registry.available_types,
        "features": {
            "dependency_ordered_execution": settings.DEPENDENCY_ORDERED_EXECUTION,
            "enforce_step_timeouts": settings.ENFORCE_STEP_TIMEOUTS,
            "record_step_results": settings.RECORD_STEP_RESULTS,
        },
    }
