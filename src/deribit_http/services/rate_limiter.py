"""
Rate-limit governor

Token bucket per session plus a shared backoff deadline set when the
server reports rate-limit exhaustion.
"""

import asyncio
from typing import Optional

from pydantic import BaseModel, Field

from ..constants import (
    DEFAULT_RATE_LIMIT_BURST,
    DEFAULT_RATE_LIMIT_PER_SECOND,
    RATE_LIMIT_BASE_BACKOFF_S,
    RATE_LIMIT_MAX_BACKOFF_S,
    RATE_LIMIT_WINDOW_S,
)
from ..utils.clock import Clock, SystemClock
from ..utils.logging_config import get_logger

logger = get_logger(__name__)

_EPSILON = 1e-9


class RateLimitState(BaseModel):
    """Snapshot of the governor"""
    bucket_tokens: float = Field(..., description="Tokens currently available")
    last_refill_at: float = Field(..., description="Clock time of the last refill")
    last_429_at: Optional[float] = Field(default=None, description="Clock time of the last rate-limit signal")
    backoff_until: Optional[float] = Field(default=None, description="No request departs before this time")
    consecutive_429s: int = Field(default=0, description="Rate-limit signals inside the current window")


class RateLimitGovernor:
    """
    Admission control for outbound requests

    Each request takes one token from a bucket refilled continuously at
    refill_per_second up to capacity. While a backoff deadline is pending
    every caller waits for it. Waiters are admitted in arrival order.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_RATE_LIMIT_BURST,
        refill_per_second: float = DEFAULT_RATE_LIMIT_PER_SECOND,
        clock: Optional[Clock] = None,
        base_backoff: float = RATE_LIMIT_BASE_BACKOFF_S,
        max_backoff: float = RATE_LIMIT_MAX_BACKOFF_S,
        window: float = RATE_LIMIT_WINDOW_S
    ):
        if capacity <= 0 or refill_per_second <= 0:
            raise ValueError("capacity and refill_per_second must be positive")
        self.capacity = capacity
        self.refill_per_second = refill_per_second
        self.clock = clock or SystemClock()
        self.base_backoff = base_backoff
        self.max_backoff = max_backoff
        self.window = window

        self._tokens = float(capacity)
        self._last_refill = self.clock.now()
        self._last_429_at: Optional[float] = None
        self._backoff_until: Optional[float] = None
        self._consecutive_429s = 0
        self._lock = asyncio.Lock()

    def _refill(self, now: float) -> None:
        elapsed = now - self._last_refill
        if elapsed > 0:
            self._tokens = min(float(self.capacity), self._tokens + elapsed * self.refill_per_second)
            self._last_refill = now

    async def acquire(self) -> None:
        """Wait for admission and take one token"""
        async with self._lock:
            while True:
                now = self.clock.now()
                if self._backoff_until is not None and now < self._backoff_until:
                    await self.clock.sleep(self._backoff_until - now)
                    continue

                self._refill(now)
                if self._tokens >= 1 - _EPSILON:
                    self._tokens = max(0.0, self._tokens - 1)
                    return

                await self.clock.sleep((1 - self._tokens) / self.refill_per_second)

    def release(self) -> None:
        """Return a token taken by a request that never departed"""
        self._tokens = min(float(self.capacity), self._tokens + 1)

    def record_rate_limited(self, retry_after: Optional[float] = None) -> float:
        """
        Register a rate-limit signal and push the backoff deadline

        Args:
            retry_after: Server supplied delay in seconds

        Returns:
            The delay applied
        """
        now = self.clock.now()
        if self._last_429_at is None or now - self._last_429_at > self.window:
            self._consecutive_429s = 0

        if retry_after is not None:
            delay = retry_after
        else:
            delay = min(self.max_backoff, self.base_backoff * (2 ** self._consecutive_429s))

        self._consecutive_429s += 1
        self._last_429_at = now
        deadline = now + delay
        if self._backoff_until is None or deadline > self._backoff_until:
            self._backoff_until = deadline

        logger.warning(
            "Rate limited, backing off",
            retry_after=delay,
            consecutive=self._consecutive_429s
        )
        return delay

    def record_success(self) -> None:
        self._consecutive_429s = 0

    def snapshot(self) -> RateLimitState:
        return RateLimitState(
            bucket_tokens=self._tokens,
            last_refill_at=self._last_refill,
            last_429_at=self._last_429_at,
            backoff_until=self._backoff_until,
            consecutive_429s=self._consecutive_429s
        )
