"""Backoff and rate limit header helpers for Auth0 API requests.

Auth0 reports its rate limit state through these response headers:
- X-RateLimit-Limit: Total requests allowed in the window
- X-RateLimit-Remaining: Requests remaining in the window
- X-RateLimit-Reset: Unix timestamp when the window resets

A 429 response may also carry a standard Retry-After header in seconds.
"""

import random
import time
from collections.abc import Mapping
from dataclasses import dataclass
from email.utils import parsedate_to_datetime
from typing import Any

# Below this fraction of the window remaining we log a warning
LOW_HEADROOM_THRESHOLD = 0.20


@dataclass
class RateLimitState:
    """Rate limit state parsed from one response.

    Attributes:
        remaining: Number of requests remaining in current window
        limit: Total requests allowed in window
        reset_time: Unix timestamp when limit resets
    """

    remaining: int | None = None
    limit: int | None = None
    reset_time: int | None = None

    @property
    def headroom_ratio(self) -> float | None:
        """Ratio of remaining requests to limit, or None if unknown."""
        if self.remaining is None or self.limit is None or self.limit == 0:
            return None
        return self.remaining / self.limit

    @property
    def is_low(self) -> bool:
        headroom = self.headroom_ratio
        return headroom is not None and headroom < LOW_HEADROOM_THRESHOLD


def _parse_int(headers: Mapping[str, Any], name: str) -> int | None:
    value = headers.get(name)
    if value is None:
        return None
    try:
        return int(value)
    except (ValueError, TypeError):
        return None


def parse_rate_limit_headers(headers: Mapping[str, Any]) -> RateLimitState:
    """Parse Auth0 rate limit headers, ignoring values that are not integers.

    Args:
        headers: Response headers mapping

    Returns:
        RateLimitState: Parsed state; unknown fields stay None
    """
    return RateLimitState(
        remaining=_parse_int(headers, "X-RateLimit-Remaining"),
        limit=_parse_int(headers, "X-RateLimit-Limit"),
        reset_time=_parse_int(headers, "X-RateLimit-Reset"),
    )


def parse_retry_after(
    headers: Mapping[str, Any], now: float | None = None
) -> float | None:
    """Work out how long a 429 response asks us to wait.

    ``Retry-After`` (seconds or an HTTP date) wins; otherwise the Auth0
    ``X-RateLimit-Reset`` epoch is converted into a delay.

    Args:
        headers: Response headers mapping
        now: Current Unix time, defaults to ``time.time()``

    Returns:
        float or None: Seconds to wait, or None if the response does not say
    """
    if now is None:
        now = time.time()

    retry_after = headers.get("Retry-After")
    if retry_after is not None:
        try:
            return max(0.0, float(retry_after))
        except (ValueError, TypeError):
            pass
        try:
            return max(0.0, parsedate_to_datetime(str(retry_after)).timestamp() - now)
        except (ValueError, TypeError, IndexError):
            pass

    reset_time = _parse_int(headers, "X-RateLimit-Reset")
    if reset_time is not None:
        return max(0.0, reset_time - now)

    return None


def backoff_delay(attempt: int, base_delay: float, max_delay: float) -> float:
    """Exponential backoff with jitter.

    ``min(max_delay, base_delay * 2**(attempt - 1))`` plus a random jitter
    in ``[0, base_delay)`` to prevent thundering herd.

    Args:
        attempt: 1-based number of the attempt that just failed
        base_delay: Base delay in seconds
        max_delay: Cap on the exponential part

    Returns:
        float: Sleep time in seconds
    """
    exponential = min(max_delay, base_delay * (2 ** max(0, attempt - 1)))
    jitter = random.uniform(0, base_delay) if base_delay > 0 else 0.0
    return exponential + jitter
