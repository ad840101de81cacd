import json
from unittest.mock import AsyncMock, patch

import pytest
from fastapi import status
from redis.exceptions import ConnectionError as RedisConnectionError
from starlette.requests import Request

from conftest import MOCK_ADMIN, MOCK_USER
from protohub.core.cache import get_cache
from protohub.core.errors import global_exception_handler
from protohub.main import app


@pytest.mark.asyncio
async def test_health_check(client):
    response = await client.get("/api/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_readiness_ok(client):
    redis = AsyncMock()
    redis.ping.return_value = True
    with patch("protohub.routers.health.create_redis", return_value=redis):
        response = await client.get("/api/health/ready")

    body = response.json()
    assert body["status"] == "ok"
    assert body["checks"] == {"redis": "ok", "database": "ok"}
    assert body["websocket_clients"] == 0
    redis.aclose.assert_awaited_once()


@pytest.mark.asyncio
async def test_readiness_degraded_without_redis(client):
    redis = AsyncMock()
    redis.ping.side_effect = RedisConnectionError("refused")
    with patch("protohub.routers.health.create_redis", return_value=redis):
        response = await client.get("/api/health/ready")

    body = response.json()
    assert response.status_code == status.HTTP_200_OK
    assert body["status"] == "degraded"
    assert body["checks"]["redis"].startswith("fail")
    assert body["checks"]["database"] == "ok"


@pytest.mark.asyncio
async def test_clear_cache_requires_admin(client, login):
    login(MOCK_USER)
    assert (await client.post("/api/cache/clear")).status_code == status.HTTP_403_FORBIDDEN

    login(MOCK_ADMIN)
    response = await client.post("/api/cache/clear")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok", "cleared_keys": 0}


@pytest.mark.asyncio
async def test_clear_cache_reports_zero_when_redis_fails(client, login):
    redis = AsyncMock()
    redis.keys.side_effect = RedisConnectionError("refused")

    async def broken_cache():
        yield redis

    app.dependency_overrides[get_cache] = broken_cache
    login(MOCK_ADMIN)
    response = await client.post("/api/cache/clear")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok", "cleared_keys": 0}


@pytest.mark.asyncio
async def test_request_id_is_echoed(client):
    response = await client.get("/api/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"

    generated = await client.get("/api/health")
    assert len(generated.headers["X-Request-ID"]) == 32


@pytest.mark.asyncio
async def test_global_exception_handler_hides_details():
    request = Request({
        "type": "http",
        "method": "GET",
        "path": "/api/trends",
        "query_string": b"region=uk",
        "headers": [],
        "client": ("127.0.0.1", 5000),
    })

    response = await global_exception_handler(request, RuntimeError("database password is hunter2"))

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    body = json.loads(response.body)
    assert body["detail"] == "Internal server error"
    assert len(body["error_id"]) == 32
    assert "hunter2" not in response.body.decode()
