"""
Rate limiter for analytics delivery.

Implements a token bucket. Unlike a request queue it never waits: a caller
that finds the bucket empty is told to drop the event.
"""

import asyncio
import time
from typing import Optional
from matchumbeop.config import settings
from matchumbeop.utils.logger import get_logger

logger = get_logger("services.rate_limiter")


class TokenBucketRateLimiter:
    """
    Token bucket rate limiter.

    Allows up to max_requests per period, refilling continuously.
    Safe for concurrent use from one event loop.

    Usage:
        limiter = TokenBucketRateLimiter(requests_per_period=10, period=60)
        if await limiter.try_acquire():
            await deliver(event)
    """

    def __init__(
        self,
        requests_per_period: Optional[int] = None,
        period: Optional[int] = None
    ):
        """
        Initialize rate limiter.

        Args:
            requests_per_period: Max requests per period (defaults to config)
            period: Time period in seconds (defaults to config)
        """
        self.max_requests = requests_per_period or settings.ANALYTICS_RATE_LIMIT_REQUESTS
        self.period = period or settings.ANALYTICS_RATE_LIMIT_PERIOD

        # Token bucket state
        self.tokens = float(self.max_requests)
        self.last_refill = time.monotonic()

        self._lock = asyncio.Lock()

        logger.info(
            "Initialized rate limiter",
            max_requests=self.max_requests,
            period=self.period
        )

    def _refill_tokens(self) -> None:
        """
        Refill tokens based on elapsed time.

        Tokens are added at a constant rate: max_requests / period.
        Tokens are capped at max_requests (bucket capacity).
        """
        now = time.monotonic()
        elapsed = now - self.last_refill

        tokens_to_add = elapsed * (self.max_requests / self.period)

        if tokens_to_add > 0:
            self.tokens = min(self.max_requests, self.tokens + tokens_to_add)
            self.last_refill = now

    async def try_acquire(self) -> bool:
        """
        Take a token if one is available.

        Returns:
            True if a token was consumed, False if the bucket is empty
        """
        async with self._lock:
            self._refill_tokens()

            if self.tokens >= 1:
                self.tokens -= 1
                logger.debug("Token acquired", remaining_tokens=self.tokens)
                return True

            logger.debug("Rate limit reached", tokens=self.tokens)
            return False
