from unittest.mock import AsyncMock, patch

import pytest

from protohub.utils.retry import retry


@pytest.mark.asyncio
async def test_retry_backs_off_until_success():
    calls = []

    @retry(tries=3, delay=1, backoff=2)
    async def flaky():
        calls.append(1)
        if len(calls) < 3:
            raise ConnectionError("database starting")
        return "ready"

    with patch("protohub.utils.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
        assert await flaky() == "ready"

    assert [call.args[0] for call in sleep.await_args_list] == [1, 2]


@pytest.mark.asyncio
async def test_retry_reraises_after_last_attempt():
    @retry(tries=2, delay=0)
    async def broken():
        raise ConnectionError("down")

    with patch("protohub.utils.retry.asyncio.sleep", new_callable=AsyncMock):
        with pytest.raises(ConnectionError):
            await broken()


@pytest.mark.asyncio
async def test_retry_ignores_unlisted_exceptions():
    calls = []

    @retry(tries=3, exceptions=(ConnectionError,))
    async def invalid():
        calls.append(1)
        raise ValueError("bad config")

    with pytest.raises(ValueError):
        await invalid()
    assert len(calls) == 1
