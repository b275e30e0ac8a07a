"""Provider networking helpers (rate limiting, JSON fetch)."""

from .fetch import FetchError, fetch_json
from .ratelimit import RateLimiter, RateLimiterRegistry, RateLimitExceeded

__all__ = [
    "FetchError",
    "RateLimitExceeded",
    "RateLimiter",
    "RateLimiterRegistry",
    "fetch_json",
]
