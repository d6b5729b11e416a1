"""Global request rate limiter backed by Redis."""

import logging
import time
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from swell_forecast.config import (
    REDIS_URL,
    RATE_LIMIT_REQUESTS_PER_SECOND,
    RATE_LIMIT_REDIS_KEY_PREFIX
)

logger = logging.getLogger(__name__)


class RateLimiter:
    """Sliding window rate limiter on a Redis sorted set.

    Keeps forecast traffic under the upstream quota. Requests are allowed
    when Redis is unavailable.
    """

    def __init__(
        self,
        redis_client: Optional[redis.Redis] = None,
        max_requests: int = RATE_LIMIT_REQUESTS_PER_SECOND,
        window_size: float = 1.0
    ):
        """Initialize rate limiter.

        Args:
            redis_client: Optional Redis client. If None, creates new client.
            max_requests: Requests allowed per window
            window_size: Window length in seconds
        """
        self.redis_client = redis_client or redis.from_url(REDIS_URL)
        self.max_requests = max_requests
        self.window_size = window_size
        self.sorted_set_key = f"{RATE_LIMIT_REDIS_KEY_PREFIX}:global"

    async def is_allowed(self) -> tuple[bool, int]:
        """Record a request and check it against the limit.

        Returns:
            Tuple of (is_allowed, retry_after_seconds)
        """
        try:
            now_us = int(time.time() * 1_000_000)
            window_start = now_us - int(self.window_size * 1_000_000)

            pipe = self.redis_client.pipeline()
            pipe.zadd(self.sorted_set_key, {str(now_us): now_us})
            pipe.zremrangebyscore(self.sorted_set_key, 0, window_start)
            pipe.zcard(self.sorted_set_key)
            pipe.expire(self.sorted_set_key, max(1, int(self.window_size * 2)))

            _, _, request_count, _ = await pipe.execute()

        except (RedisError, OSError) as e:
            logger.error(f"Rate limiter error, allowing request: {e}")
            return True, 0

        if request_count > self.max_requests:
            retry_after = max(1, int(self.window_size * 2))
            logger.debug(f"Rate limited: count={request_count}, max={self.max_requests}")
            return False, retry_after

        return True, 0

    async def close(self):
        """Close Redis connection."""
        if self.redis_client:
            await self.redis_client.aclose()
