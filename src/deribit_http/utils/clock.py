"""
Clock capability

The session reads time and sleeps only through a Clock so that rate-limit
and token-expiry behaviour can be driven deterministically in tests.
"""

import asyncio
import time
from typing import List, Protocol


class Clock(Protocol):
    def now(self) -> float:
        """Monotonic time in seconds"""
        ...

    def time_ms(self) -> int:
        """Wall-clock time in milliseconds since the epoch"""
        ...

    async def sleep(self, seconds: float) -> None:
        ...


class SystemClock:
    """Clock backed by the event loop and the system time"""

    def now(self) -> float:
        return time.monotonic()

    def time_ms(self) -> int:
        return int(time.time() * 1000)

    async def sleep(self, seconds: float) -> None:
        if seconds > 0:
            await asyncio.sleep(seconds)


class ManualClock:
    """
    Virtual clock for tests

    sleep() advances virtual time instead of waiting, then yields once to
    the event loop so other tasks can run.
    """

    def __init__(self, start: float = 1000.0, epoch_ms: int = 1700000000000):
        self._now = start
        self._start = start
        self._epoch_ms = epoch_ms
        self.sleeps: List[float] = []

    def now(self) -> float:
        return self._now

    def time_ms(self) -> int:
        return self._epoch_ms + int((self._now - self._start) * 1000)

    def advance(self, seconds: float) -> None:
        self._now += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        if seconds > 0:
            self._now += seconds
        await asyncio.sleep(0)
