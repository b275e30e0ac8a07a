"""Per-provider request budgets.

Each provider client receives its own :class:`RateLimiter` instead of sharing
module-level timestamps and counters. A scheduled job owns the registry and
calls :meth:`RateLimiterRegistry.reset_daily` once per day.
"""

from __future__ import annotations

import time
from collections import deque
from typing import Callable, Deque, Dict, Iterable, Mapping, Optional

from ffcenter.config import ProviderProfile


class RateLimitExceeded(RuntimeError):
    """Raised when a provider's request budget is exhausted."""


class RateLimiter:
    """Sliding-window limiter with an optional daily cap."""

    def __init__(
        self,
        max_requests: int,
        window: float,
        *,
        daily_limit: Optional[int] = None,
        name: str = "provider",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_requests < 1:
            raise ValueError(f"max_requests must be >= 1, got {max_requests}")
        if window <= 0:
            raise ValueError(f"window must be positive, got {window}")
        if daily_limit is not None and daily_limit < 1:
            raise ValueError(f"daily_limit must be >= 1, got {daily_limit}")
        self.max_requests = max_requests
        self.window = window
        self.daily_limit = daily_limit
        self.name = name
        self._clock = clock
        self._requests: Deque[float] = deque()
        self._daily_count = 0

    @property
    def daily_count(self) -> int:
        return self._daily_count

    def _evict(self, now: float) -> None:
        window_start = now - self.window
        while self._requests and self._requests[0] < window_start:
            self._requests.popleft()

    def remaining(self) -> int:
        self._evict(self._clock())
        remaining = self.max_requests - len(self._requests)
        if self.daily_limit is not None:
            remaining = min(remaining, self.daily_limit - self._daily_count)
        return max(0, remaining)

    def try_acquire(self) -> bool:
        now = self._clock()
        self._evict(now)
        if self.daily_limit is not None and self._daily_count >= self.daily_limit:
            return False
        if len(self._requests) >= self.max_requests:
            return False
        self._requests.append(now)
        self._daily_count += 1
        return True

    def acquire(self) -> None:
        if not self.try_acquire():
            raise RateLimitExceeded(f"{self.name} rate limit exceeded. Please try again later.")

    def reset(self) -> None:
        self._requests.clear()

    def reset_daily(self) -> None:
        self._daily_count = 0


class RateLimiterRegistry:
    """Limiters keyed by provider, shared by reference with provider clients."""

    def __init__(self, limiters: Mapping[str, RateLimiter] | None = None) -> None:
        self._limiters: Dict[str, RateLimiter] = {
            key.upper(): limiter for key, limiter in (limiters or {}).items()
        }

    @classmethod
    def from_profiles(
        cls,
        profiles: Iterable[ProviderProfile],
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> "RateLimiterRegistry":
        return cls(
            {
                profile.key: RateLimiter(
                    profile.rate_limit.max_requests,
                    profile.rate_limit.window_seconds,
                    daily_limit=profile.daily_limit,
                    name=profile.label,
                    clock=clock,
                )
                for profile in profiles
            }
        )

    def get(self, key: str) -> RateLimiter:
        normalized = key.upper()
        if normalized not in self._limiters:
            raise KeyError(f"No rate limiter registered for {key!r}")
        return self._limiters[normalized]

    def reset_all(self) -> None:
        for limiter in self._limiters.values():
            limiter.reset()

    def reset_daily(self) -> None:
        for limiter in self._limiters.values():
            limiter.reset_daily()
