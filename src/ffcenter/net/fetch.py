"""JSON fetch helper with retry and rate limiting for provider calls."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Mapping, Optional

import httpx

from ffcenter.net.ratelimit import RateLimiter


logger = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """Raised when a provider request fails for good."""

    def __init__(self, message: str, status: Optional[int], url: str) -> None:
        super().__init__(message)
        self.status = status
        self.url = url


def fetch_json(
    client: httpx.Client,
    url: str,
    *,
    limiter: Optional[RateLimiter] = None,
    params: Optional[Mapping[str, Any]] = None,
    headers: Optional[Mapping[str, str]] = None,
    retries: int = 3,
    retry_delay: float = 1.0,
    timeout: float = 10.0,
    sleep: Callable[[float], None] = time.sleep,
) -> Any:
    """GET ``url`` and decode JSON.

    Transport errors and 5xx responses are retried with exponential backoff
    (``retry_delay * 2 ** attempt``). 4xx responses fail immediately.
    """

    if retries < 0:
        raise ValueError(f"retries must be >= 0, got {retries}")
    if limiter is not None:
        limiter.acquire()

    request_headers = {"Accept": "application/json", **(headers or {})}
    last_error: FetchError | None = None
    for attempt in range(retries + 1):
        try:
            response = client.get(url, params=params, headers=request_headers, timeout=timeout)
        except httpx.TransportError as exc:
            last_error = FetchError(f"Request failed: {exc}", None, url)
        else:
            if response.is_success:
                return response.json()
            error = FetchError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                response.status_code,
                url,
            )
            if 400 <= response.status_code < 500:
                raise error
            last_error = error

        if attempt == retries:
            break
        delay = retry_delay * (2 ** attempt)
        logger.warning("Request to %s failed (%s); retrying in %.1fs", url, last_error, delay)
        sleep(delay)

    raise last_error
