import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from commentcard.core.errors import UpstreamQuotaError
from commentcard.services.quota import MemoryQuotaStore, QuotaGuard, RedisQuotaStore


def test_quota_key_is_per_utc_day():
    now = datetime(2024, 3, 7, 23, 59, tzinfo=timezone.utc)
    assert QuotaGuard.quota_key(now) == "youtube_quota_2024-03-07"


@pytest.mark.asyncio
async def test_redis_store_sets_ttl_on_first_increment():
    redis_client = AsyncMock()
    redis_client.incr.return_value = 1
    store = RedisQuotaStore(client=redis_client, ttl_seconds=90000)

    assert await store.increment_and_get("k") == 1
    redis_client.incr.assert_awaited_once_with("k")
    redis_client.expire.assert_awaited_once_with("k", 90000)


@pytest.mark.asyncio
async def test_redis_store_does_not_reset_ttl_later():
    redis_client = AsyncMock()
    redis_client.incr.return_value = 7
    store = RedisQuotaStore(client=redis_client)

    assert await store.increment_and_get("k") == 7
    redis_client.expire.assert_not_awaited()


@pytest.mark.asyncio
async def test_guard_allows_up_to_limit_then_rejects():
    guard = QuotaGuard(store=MemoryQuotaStore(), daily_limit=3)
    for expected in (1, 2, 3):
        assert await guard.check_and_increment() == expected
    with pytest.raises(UpstreamQuotaError) as exc_info:
        await guard.check_and_increment()
    assert exc_info.value.status_code == 429


@pytest.mark.asyncio
async def test_concurrent_increments_never_exceed_limit():
    guard = QuotaGuard(store=MemoryQuotaStore(), daily_limit=10)

    async def attempt():
        try:
            await guard.check_and_increment()
            return True
        except UpstreamQuotaError:
            return False

    results = await asyncio.gather(*(attempt() for _ in range(25)))
    assert sum(results) == 10


@pytest.mark.asyncio
async def test_guard_uses_store_counter():
    store = AsyncMock()
    store.increment_and_get.return_value = 1001
    guard = QuotaGuard(store=store, daily_limit=1000)
    with pytest.raises(UpstreamQuotaError):
        await guard.check_and_increment()
    store.increment_and_get.assert_awaited_once_with(QuotaGuard.quota_key())
