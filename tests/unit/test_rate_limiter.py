"""
Unit tests for the rate-limit governor.
"""

import asyncio

import pytest

from deribit_http.services.rate_limiter import RateLimitGovernor
from deribit_http.utils.clock import ManualClock


@pytest.fixture
def governor(clock: ManualClock) -> RateLimitGovernor:
    return RateLimitGovernor(capacity=20, refill_per_second=20.0, clock=clock)


class TestTokenBucket:
    """Test bucket admission."""

    @pytest.mark.asyncio
    async def test_burst_admitted_without_waiting(self, governor, clock):
        for _ in range(20):
            await governor.acquire()
        assert clock.sleeps == []
        assert governor.snapshot().bucket_tokens == pytest.approx(0.0)

    @pytest.mark.asyncio
    async def test_empty_bucket_waits_for_refill(self, governor, clock):
        start = clock.now()
        for _ in range(21):
            await governor.acquire()
        assert clock.now() - start == pytest.approx(0.05)

    @pytest.mark.asyncio
    async def test_sustained_rate(self, governor, clock):
        start = clock.now()
        for _ in range(60):
            await governor.acquire()
        # 20 from the burst, 40 more at 20/s
        assert clock.now() - start == pytest.approx(2.0)

    @pytest.mark.asyncio
    async def test_release_returns_token(self, governor):
        await governor.acquire()
        governor.release()
        assert governor.snapshot().bucket_tokens == pytest.approx(20.0)

    @pytest.mark.asyncio
    async def test_concurrent_waiters_are_spaced(self, clock):
        governor = RateLimitGovernor(capacity=1, refill_per_second=10.0, clock=clock)
        admitted = []

        async def worker(n):
            await governor.acquire()
            admitted.append((n, clock.now()))

        await asyncio.gather(*(worker(n) for n in range(4)))

        assert [n for n, _ in admitted] == [0, 1, 2, 3]
        times = [t for _, t in admitted]
        for earlier, later in zip(times, times[1:]):
            assert later - earlier == pytest.approx(0.1)

    def test_invalid_configuration(self, clock):
        with pytest.raises(ValueError):
            RateLimitGovernor(capacity=0, clock=clock)


class TestBackoff:
    """Test rate-limit backoff."""

    @pytest.mark.asyncio
    async def test_retry_after_is_honored(self, governor, clock):
        signalled_at = clock.now()
        assert governor.record_rate_limited(2.0) == 2.0

        await governor.acquire()

        assert clock.now() >= signalled_at + 2.0
        assert governor.snapshot().backoff_until == pytest.approx(signalled_at + 2.0)

    def test_exponential_without_retry_after(self, governor, clock):
        delays = [governor.record_rate_limited() for _ in range(6)]
        assert delays == [0.5, 1.0, 2.0, 4.0, 8.0, 8.0]
        assert governor.snapshot().consecutive_429s == 6

    def test_success_resets_counter(self, governor):
        governor.record_rate_limited()
        governor.record_rate_limited()
        governor.record_success()
        assert governor.record_rate_limited() == 0.5

    def test_window_expiry_resets_counter(self, governor, clock):
        governor.record_rate_limited()
        governor.record_rate_limited()
        clock.advance(10.5)
        assert governor.record_rate_limited() == 0.5

    def test_deadline_never_moves_backwards(self, governor, clock):
        governor.record_rate_limited(5.0)
        governor.record_rate_limited(1.0)
        assert governor.snapshot().backoff_until == pytest.approx(clock.now() + 5.0)

    @pytest.mark.asyncio
    async def test_all_waiters_respect_backoff(self, governor, clock):
        signalled_at = clock.now()
        governor.record_rate_limited(1.5)
        admitted = []

        async def worker():
            await governor.acquire()
            admitted.append(clock.now())

        await asyncio.gather(*(worker() for _ in range(5)))

        assert len(admitted) == 5
        assert min(admitted) >= signalled_at + 1.5
