#!/usr/bin/env python3
"""
Script to clear the Redis listing caches (stays, home services, trends,
mentorship, learning and dining).
Run this after re-seeding or changing list queries.
"""
import asyncio

from protohub.core.cache import CACHE_PATTERNS, create_redis, invalidate


async def clear_cache():
    redis = create_redis()
    try:
        deleted = await invalidate(redis, *CACHE_PATTERNS)
    finally:
        await redis.aclose()

    if deleted:
        print(f"✓ Cleared {deleted} cache keys")
    else:
        print("✓ No cache keys found")
    print("✓ Cache cleared successfully!")

if __name__ == "__main__":
    asyncio.run(clear_cache())
