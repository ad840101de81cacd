import json
from typing import Any, AsyncGenerator, Awaitable, Callable, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError
from structlog import get_logger

from protohub.config import settings

logger = get_logger()

# Key patterns owned by this service
CACHE_PATTERNS = ("stays:*", "home:*", "trends:*", "mentorship:*", "learning:*", "dining:*")


def create_redis(decode_responses: bool = True) -> Redis:
    return Redis.from_url(settings.REDIS_URL, encoding="utf-8", decode_responses=decode_responses)


async def get_cache() -> AsyncGenerator[Optional[Redis], None]:
    """Yields a Redis client, or None when caching is switched off."""
    if not settings.CACHE_ENABLED:
        yield None
        return
    redis = create_redis()
    try:
        yield redis
    finally:
        await redis.aclose()


async def cached_json(
    cache: Optional[Redis],
    key: str,
    loader: Callable[[], Awaitable[Any]],
    ttl: Optional[int] = None,
) -> Any:
    """
    Return the JSON value stored under ``key`` or build it with ``loader``.

    Redis problems are logged and the loader result is returned, so a cache
    outage degrades to direct database reads.
    """
    if cache is None:
        return await loader()

    try:
        cached = await cache.get(key)
        if cached:
            logger.info("Cache hit", cache_key=key)
            return json.loads(cached)
    except (RedisError, ValueError) as e:
        logger.warning("Cache read failed; rebuilding", cache_key=key, error=str(e))

    logger.info("Cache miss", cache_key=key)
    value = await loader()
    try:
        await cache.setex(key, ttl or settings.CACHE_TTL_SECONDS, json.dumps(value, default=str))
    except RedisError as e:
        logger.warning("Cache write failed", cache_key=key, error=str(e))
    return value


async def invalidate(cache: Optional[Redis], *patterns: str) -> int:
    if cache is None:
        return 0
    try:
        keys = []
        for pattern in patterns:
            keys.extend(await cache.keys(pattern))
        if not keys:
            return 0
        deleted = await cache.delete(*keys)
        logger.info("Cache invalidated", patterns=list(patterns), deleted_keys=deleted)
        return deleted
    except RedisError as e:
        logger.warning("Cache invalidation failed", patterns=list(patterns), error=str(e))
        return 0
