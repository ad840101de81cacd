import os

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["CACHE_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["REALTIME_ENABLED"] = "false"

import pytest
import pytest_asyncio
from fastapi import HTTPException, status
from httpx import ASGITransport, AsyncClient

from protohub.core.database import async_session_maker, drop_db, engine, init_db
from protohub.dependencies.auth import get_current_user, get_optional_user
from protohub.main import app

# Mock users as returned by the auth service
MOCK_USER = {"id": "user-1", "email": "ada@example.com", "role": "user", "plan": "free"}
MOCK_OTHER_USER = {"id": "user-2", "email": "bo@example.com", "role": "user", "plan": "free"}
MOCK_PRO_USER = {"id": "user-3", "email": "cy@example.com", "role": "user", "plan": "pro"}
MOCK_ADMIN = {"id": "admin-1", "email": "root@example.com", "role": "admin", "plan": "team"}


def as_user(user):
    async def override():
        return user
    return override


async def override_unauthenticated():
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")


@pytest_asyncio.fixture(autouse=True)
async def tables():
    await init_db()
    yield
    await drop_db()
    await engine.dispose()


@pytest_asyncio.fixture
async def db():
    async with async_session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides = {}


@pytest.fixture
def login():
    """Authenticate requests as ``user`` for the rest of the test."""
    def _login(user):
        app.dependency_overrides[get_current_user] = as_user(user)
        app.dependency_overrides[get_optional_user] = as_user(user)
    yield _login
    app.dependency_overrides.pop(get_current_user, None)
    app.dependency_overrides.pop(get_optional_user, None)


@pytest.fixture
def unauthenticated():
    app.dependency_overrides[get_current_user] = override_unauthenticated
    yield
    app.dependency_overrides.pop(get_current_user, None)
