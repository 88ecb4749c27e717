"""
Health check endpoints.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
import redis.asyncio as redis

from config import settings, has_gemini_api_key
from database import engine

router = APIRouter()
logger = logging.getLogger(__name__)


async def _check_database() -> str:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as exc:
        logger.warning("Database health check failed: %s", exc)
        return f"down: {exc}"
    return "up"


async def _check_redis() -> str:
    client = redis.from_url(settings.REDIS_URL)
    try:
        await client.ping()
    except (redis.RedisError, OSError) as exc:
        return f"down: {exc}"
    finally:
        await client.aclose()
    return "up"


@router.get("/health")
async def health_check():
    """
    Overall service health. Redis is optional (cache and rate limits fall back
    to memory) so only a database failure degrades the status.
    """
    database = await _check_database()
    return {
        "status": "healthy" if database == "up" else "degraded",
        "api": "up",
        "database": database,
        "redis": await _check_redis(),
        "analyzer": "gemini" if has_gemini_api_key() else "mock",
    }


@router.get("/health/ready")
async def readiness_check():
    """Kubernetes-style readiness probe: a real analyzer must be configured."""
    if not has_gemini_api_key():
        return JSONResponse(
            status_code=503,
            content={"ready": False, "missing": ["GEMINI_API_KEY"]},
        )
    return {"ready": True}


@router.get("/health/live")
async def liveness_check():
    """Kubernetes-style liveness probe."""
    return {"alive": True}
