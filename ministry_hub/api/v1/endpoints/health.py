"""
Health Check Endpoints

- /health/live  - Basic liveness (app is running)
- /health/ready - Readiness check (database reachable)
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from datetime import datetime
from typing import Dict, Any
import time

from sqlalchemy import text

from ministry_hub.core.config import settings
from ministry_hub.core.database import get_session_local
from ministry_hub.core.logging_config import logger


router = APIRouter(prefix="/health", tags=["Health Checks"])


async def check_database() -> Dict[str, Any]:
    """Check database connectivity and that the members table exists"""
    start = time.time()
    try:
        session_factory = get_session_local()
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
            try:
                await session.execute(text("SELECT COUNT(*) FROM members"))
                tables_ok = True
            except Exception:
                tables_ok = False

        return {
            "status": "healthy",
            "latency_ms": round((time.time() - start) * 1000, 2),
            "tables_ready": tables_ok,
        }
    except Exception as e:
        logger.error(f"[HealthCheck] Database check failed: {e}")
        return {
            "status": "unhealthy",
            "latency_ms": round((time.time() - start) * 1000, 2),
            "tables_ready": False,
            "error": str(e),
        }


@router.get("/live")
async def liveness():
    """Liveness check"""
    return {"status": "alive", "timestamp": datetime.utcnow().isoformat()}


@router.get("/ready")
async def readiness():
    """Readiness check. 503 when the database is unreachable."""
    database = await check_database()
    healthy = database["status"] == "healthy"
    body = {
        "status": "ready" if healthy else "not_ready",
        "service": settings.APP_NAME,
        "checks": {"database": database},
        "timestamp": datetime.utcnow().isoformat(),
    }
    return JSONResponse(status_code=200 if healthy else 503, content=body)
