"""
Daily quota guard for YouTube API calls.

The counter lives behind a narrow `increment_and_get(key)` interface so that
several server processes can share it. Each day gets its own key with a TTL a
little over 24h, so no reset job is ever needed.
"""
import asyncio
from datetime import datetime, timezone
from typing import Dict, Optional

import redis.asyncio as redis
from loguru import logger

from commentcard.config import settings
from commentcard.core.errors import UpstreamQuotaError


class RedisQuotaStore:
    """Atomic INCR against a shared Redis counter."""

    def __init__(self, client: Optional[redis.Redis] = None, ttl_seconds: int = None):
        self.redis_client = client
        self.ttl_seconds = ttl_seconds or settings.QUOTA_TTL_SECONDS

    async def _get_redis_client(self) -> redis.Redis:
        if self.redis_client is None:
            self.redis_client = redis.from_url(
                settings.REDIS_URL,
                password=settings.REDIS_TOKEN or None,
                decode_responses=True,
            )
        return self.redis_client

    async def increment_and_get(self, key: str) -> int:
        client = await self._get_redis_client()
        count = await client.incr(key)
        if count == 1:
            # First hit of the day starts the expiry clock
            await client.expire(key, self.ttl_seconds)
        return count

    async def close(self):
        if self.redis_client is not None:
            await self.redis_client.aclose()
            self.redis_client = None


class MemoryQuotaStore:
    """Process-local counter for development setups without Redis."""

    def __init__(self):
        self._counts: Dict[str, int] = {}
        self._lock = asyncio.Lock()

    async def increment_and_get(self, key: str) -> int:
        async with self._lock:
            self._counts[key] = self._counts.get(key, 0) + 1
            return self._counts[key]

    async def close(self):
        self._counts.clear()


class QuotaGuard:
    """Increments today's counter and rejects calls past the daily limit."""

    def __init__(self, store=None, daily_limit: int = None):
        if store is None:
            if settings.REDIS_URL:
                store = RedisQuotaStore()
            else:
                logger.warning("[Quota] REDIS_URL not set, using in-process counter (not shared across workers)")
                store = MemoryQuotaStore()
        self.store = store
        self.daily_limit = daily_limit or settings.YOUTUBE_DAILY_LIMIT

    @staticmethod
    def quota_key(now: datetime = None) -> str:
        now = now or datetime.now(timezone.utc)
        return f"youtube_quota_{now.strftime('%Y-%m-%d')}"

    async def check_and_increment(self) -> int:
        """
        Count one upstream call against today's quota.

        Returns:
            The call count for today, including this one.
        Raises:
            UpstreamQuotaError: The daily limit has been exceeded.
        """
        key = self.quota_key()
        count = await self.store.increment_and_get(key)
        if count > self.daily_limit:
            logger.warning(f"[Quota] Daily limit reached ({count}/{self.daily_limit}) for {key}")
            raise UpstreamQuotaError(
                "Daily usage limit reached. Please try again tomorrow. (API quota for YouTube exceeded)"
            )
        logger.debug(f"[Quota] {key}: {count}/{self.daily_limit}")
        return count

    async def close(self):
        await self.store.close()
