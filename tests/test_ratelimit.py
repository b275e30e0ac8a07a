import pytest

from ffcenter.config import iter_providers
from ffcenter.net import RateLimitExceeded, RateLimiter, RateLimiterRegistry


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def test_window_blocks_until_oldest_request_expires():
    clock = FakeClock()
    limiter = RateLimiter(2, 60, clock=clock)

    assert limiter.try_acquire()
    clock.advance(10)
    assert limiter.try_acquire()
    assert not limiter.try_acquire()

    clock.advance(51)
    assert limiter.try_acquire()
    assert not limiter.try_acquire()


def test_acquire_raises_with_provider_name():
    limiter = RateLimiter(1, 60, name="ESPN Fantasy", clock=FakeClock())
    limiter.acquire()

    with pytest.raises(RateLimitExceeded, match="ESPN Fantasy rate limit exceeded"):
        limiter.acquire()


def test_reset_clears_window_but_not_daily_count():
    limiter = RateLimiter(1, 60, daily_limit=5, clock=FakeClock())
    limiter.acquire()
    limiter.reset()

    limiter.acquire()
    assert limiter.daily_count == 2


def test_daily_limit_and_reset_daily():
    clock = FakeClock()
    limiter = RateLimiter(10, 60, daily_limit=2, clock=clock)
    limiter.acquire()
    limiter.acquire()

    clock.advance(3600)
    assert not limiter.try_acquire()
    assert limiter.remaining() == 0

    limiter.reset_daily()
    assert limiter.daily_count == 0
    assert limiter.try_acquire()


def test_remaining_tracks_window():
    clock = FakeClock()
    limiter = RateLimiter(3, 60, clock=clock)
    limiter.acquire()
    limiter.acquire()

    assert limiter.remaining() == 1
    clock.advance(61)
    assert limiter.remaining() == 3


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_requests": 0, "window": 60},
        {"max_requests": 1, "window": 0},
        {"max_requests": 1, "window": 60, "daily_limit": 0},
    ],
)
def test_invalid_arguments(kwargs):
    with pytest.raises(ValueError):
        RateLimiter(**kwargs)


def test_limiters_are_independent():
    clock = FakeClock()
    first = RateLimiter(1, 60, clock=clock)
    second = RateLimiter(1, 60, clock=clock)
    first.acquire()

    assert second.try_acquire()


def test_registry_from_provider_profiles():
    clock = FakeClock()
    registry = RateLimiterRegistry.from_profiles(iter_providers(), clock=clock)

    fantasypros = registry.get("fantasypros")
    assert fantasypros.max_requests == 10
    assert fantasypros.window == 60
    assert registry.get("ESPN").max_requests == 1
    assert registry.get("sleeper").max_requests == 1000

    with pytest.raises(KeyError):
        registry.get("yahoo")


def test_registry_reset_all_and_daily():
    clock = FakeClock()
    espn = RateLimiter(1, 60, daily_limit=3, clock=clock)
    registry = RateLimiterRegistry({"espn": espn})
    espn.acquire()

    registry.reset_all()
    assert registry.get("ESPN") is espn
    assert espn.try_acquire()

    registry.reset_daily()
    assert espn.daily_count == 0
