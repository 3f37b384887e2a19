"""
Redis adapter - Rate limiting and liveness.

Provides:
- Fixed-window rate limiting (fails open)
- Connectivity check for readiness probes

The generation cache lives in the database (see cache_service), not here.
"""

import functools
import logging
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from ...config.settings import settings

logger = logging.getLogger(__name__)


class RedisAdapter:
    """
    Adapter for Redis operations.

    Handles:
    - Counters with expiry
    - Rate limit windows
    """

    def __init__(self, url: Optional[str] = None):
        """
        Initialize Redis adapter.

        Args:
            url: Redis URL (redis://host:port/db)
        """
        self.url = url or settings.REDIS_URL
        self._client: Optional[redis.Redis] = None

    @property
    def client(self) -> redis.Redis:
        """Lazy-loaded Redis client."""
        if self._client is None:
            self._client = redis.from_url(
                self.url,
                decode_responses=True,
            )
        return self._client

    async def incr(self, key: str, amount: int = 1) -> Optional[int]:
        """Increment a counter. Returns the new value or None on error."""
        try:
            return await self.client.incrby(key, amount)
        except RedisError as e:
            logger.warning("Redis incr failed for %s: %s", key, e)
            return None

    async def expire(self, key: str, ttl: int) -> bool:
        """Set expiry on a key."""
        try:
            return bool(await self.client.expire(key, ttl))
        except RedisError as e:
            logger.warning("Redis expire failed for %s: %s", key, e)
            return False

    async def check_rate_limit(
        self,
        key: str,
        limit: int,
        window_seconds: int,
    ) -> tuple[bool, int]:
        """
        Check rate limit using a fixed window.

        The first hit in a window sets the key's expiry; later hits only
        increment.

        Args:
            key: Rate limit key (e.g., "rate:transcribe:<user_id>")
            limit: Maximum allowed requests
            window_seconds: Time window in seconds

        Returns:
            Tuple of (is_allowed, current_count). Allowed when Redis fails.
        """
        current = await self.incr(key)
        if current is None:
            return True, 0

        if current == 1:
            await self.expire(key, window_seconds)

        return current <= limit, current

    async def ping(self) -> bool:
        """
        Check Redis connectivity.

        Returns:
            True if connected
        """
        try:
            return bool(await self.client.ping())
        except RedisError:
            return False

    async def close(self) -> None:
        """Close the connection pool."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None


@functools.lru_cache(maxsize=1)
def get_redis_adapter() -> RedisAdapter:
    """Get or create Redis adapter singleton."""
    return RedisAdapter()
