from typing import Optional

from fastapi import APIRouter, Depends
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import text
from structlog import get_logger

from protohub.core.cache import CACHE_PATTERNS, create_redis, get_cache, invalidate
from protohub.core.database import get_session
from protohub.dependencies.auth import require_role
from protohub.realtime import manager

logger = get_logger()
router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.get("/health/ready")
async def readiness(db: AsyncSession = Depends(get_session)):
    details = {"status": "ok", "checks": {}, "websocket_clients": manager.connection_count}

    # Redis check
    redis = create_redis()
    try:
        pong = await redis.ping()
        details["checks"]["redis"] = "ok" if pong else "fail"
    except Exception as e:
        logger.warning("health redis fail", error=str(e))
        details["checks"]["redis"] = f"fail: {str(e)}"
        details["status"] = "degraded"
    finally:
        await redis.aclose()

    # Database check
    try:
        await db.execute(text("SELECT 1"))
        details["checks"]["database"] = "ok"
    except Exception as e:
        logger.warning("health db fail", error=str(e))
        details["checks"]["database"] = f"fail: {str(e)}"
        details["status"] = "degraded"

    return details


@router.post("/cache/clear")
async def clear_cache(
    user: dict = Depends(require_role("admin")),
    cache: Optional[Redis] = Depends(get_cache),
):
    """
    Drop every cached listing owned by this service.
    Use this after changing seed data or list queries.
    """
    deleted = await invalidate(cache, *CACHE_PATTERNS)
    logger.info("Cache cleared", user_id=user.get("id"), deleted_keys=deleted)
    return {"status": "ok", "cleared_keys": deleted}
