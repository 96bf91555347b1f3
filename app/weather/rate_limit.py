"""
Sliding-window rate limiter for outbound forecast requests.

Each limiter is an explicit object with an injectable clock, so callers
(and tests) own its state instead of sharing process-wide counters.
"""

from __future__ import annotations

import time
from collections import deque
from typing import Callable

from app.weather.errors import RateLimitExceededError


class RateLimiter:
    """Allow at most *max_requests* per *period_seconds*."""

    def __init__(self, max_requests: int, period_seconds: float = 60.0,
                 clock: Callable[[], float] = time.monotonic, ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        self.max_requests = max_requests
        self.period_seconds = period_seconds
        self._clock = clock
        self._calls: deque[float] = deque()

    def _evict(self, now: float) -> None:
        while self._calls and now - self._calls[0] >= self.period_seconds:
            self._calls.popleft()

    @property
    def remaining(self) -> int:
        self._evict(self._clock())
        return self.max_requests - len(self._calls)

    def try_acquire(self) -> bool:
        """Record a request if the budget allows it."""
        now = self._clock()
        self._evict(now)
        if len(self._calls) >= self.max_requests:
            return False
        self._calls.append(now)
        return True

    def acquire(self) -> None:
        """Like :meth:`try_acquire` but raises :class:`RateLimitExceededError`."""
        if not self.try_acquire():
            raise RateLimitExceededError(
                f"Rate limit exceeded: {self.max_requests} requests per {self.period_seconds:g}s")

    def reset(self) -> None:
        self._calls.clear()
