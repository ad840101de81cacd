import json
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from protohub.core.cache import cached_json, get_cache, invalidate


@pytest.mark.asyncio
async def test_cache_hit_skips_loader():
    cache = AsyncMock()
    cache.get.return_value = json.dumps([{"id": 1}])
    loader = AsyncMock()

    value = await cached_json(cache, "stays:properties:all", loader)

    assert value == [{"id": 1}]
    loader.assert_not_awaited()
    cache.setex.assert_not_awaited()


@pytest.mark.asyncio
async def test_cache_miss_stores_loader_result():
    cache = AsyncMock()
    cache.get.return_value = None
    loader = AsyncMock(return_value=[{"id": 2}])

    value = await cached_json(cache, "home:services", loader, ttl=60)

    assert value == [{"id": 2}]
    cache.setex.assert_awaited_once_with("home:services", 60, json.dumps([{"id": 2}]))


@pytest.mark.asyncio
async def test_redis_outage_falls_back_to_loader():
    cache = AsyncMock()
    cache.get.side_effect = RedisConnectionError("down")
    cache.setex.side_effect = RedisConnectionError("down")
    loader = AsyncMock(return_value={"predictions": []})

    assert await cached_json(cache, "trends:all", loader) == {"predictions": []}
    loader.assert_awaited_once()


@pytest.mark.asyncio
async def test_no_cache_calls_loader():
    loader = AsyncMock(return_value=[])
    assert await cached_json(None, "trends:all", loader) == []
    assert await invalidate(None, "trends:*") == 0


@pytest.mark.asyncio
async def test_invalidate_deletes_matching_keys():
    cache = AsyncMock()
    cache.keys.side_effect = [["trends:all", "trends:region:uk"], []]
    cache.delete.return_value = 2

    deleted = await invalidate(cache, "trends:*", "home:*")

    assert deleted == 2
    cache.delete.assert_awaited_once_with("trends:all", "trends:region:uk")


@pytest.mark.asyncio
async def test_invalidate_nothing_to_delete():
    cache = AsyncMock()
    cache.keys.return_value = []
    assert await invalidate(cache, "stays:*") == 0
    cache.delete.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_cache_disabled_yields_none():
    dependency = get_cache()
    assert await dependency.__anext__() is None
