"""Retry policy for GitHub API requests.

GitHub reports rate limits two ways:

* ``429`` (secondary limit) -- retried after the delay the server asks
  for, read from ``Retry-After`` or ``x-ratelimit-reset``.
* ``403`` with ``x-ratelimit-remaining: 0`` or a "rate limit" message
  (primary quota) -- never retried.  The quota resets at most hourly, so
  the transport raises :class:`~mediumify.errors.MediumifyRateLimitError`
  carrying the reset delay instead of blocking the export.

``5xx`` responses and dropped connections are retried with capped
exponential backoff.
"""

from __future__ import annotations

import random
import time
from collections.abc import Callable
from dataclasses import dataclass

import httpx

from mediumify.config import MediumifyConfig

RETRYABLE_STATUSES: frozenset[int] = frozenset({429, 500, 502, 503, 504})

# Failures where the request may not have reached GitHub at all.
RETRYABLE_EXCEPTIONS: tuple[type[Exception], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)


def is_rate_limited(response: httpx.Response, message: str = "") -> bool:
    """True if a ``403`` is GitHub's quota exhaustion rather than a denial."""
    if response.headers.get("x-ratelimit-remaining") == "0":
        return True
    return "rate limit" in message.lower()


def server_delay(
    response: httpx.Response,
    now: Callable[[], float] = time.time,
) -> float | None:
    """Seconds GitHub asks the client to wait, or ``None`` if unspecified.

    ``Retry-After`` (delta seconds) wins.  Otherwise an exhausted quota's
    ``x-ratelimit-reset`` epoch is turned into a delay from *now*.
    """
    raw = response.headers.get("retry-after")
    if raw is not None:
        try:
            return max(0.0, float(raw))
        except ValueError:
            pass

    reset = response.headers.get("x-ratelimit-reset")
    if reset is not None and response.headers.get("x-ratelimit-remaining") == "0":
        try:
            return max(0.0, float(reset) - now())
        except ValueError:
            return None
    return None


@dataclass(frozen=True)
class RetryPolicy:
    """How many attempts to make and how long to wait between them.

    Attributes
    ----------
    max_attempts:
        Total attempts, including the first request.
    base_delay, max_delay:
        Backoff is ``base_delay * 2**attempt`` capped at ``max_delay``.
    jitter:
        Scale computed backoff to 50-100 % of its value.  Delays requested
        by the server are used as-is.
    """

    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0
    jitter: bool = True

    @classmethod
    def from_config(cls, config: MediumifyConfig) -> RetryPolicy:
        return cls(
            max_attempts=config.retry_max_attempts,
            base_delay=config.retry_base_delay,
            max_delay=config.retry_max_delay,
            jitter=config.retry_jitter,
        )

    def can_retry(self, attempt: int) -> bool:
        """True if another attempt follows the 0-indexed *attempt*."""
        return attempt + 1 < self.max_attempts

    def retries_status(self, status_code: int) -> bool:
        return status_code in RETRYABLE_STATUSES

    def retries_exception(self, exc: Exception) -> bool:
        return isinstance(exc, RETRYABLE_EXCEPTIONS)

    def backoff(self, attempt: int, requested: float | None = None) -> float:
        """Delay before the attempt following *attempt*."""
        if requested is not None:
            return requested
        delay = min(self.base_delay * (2 ** attempt), self.max_delay)
        if self.jitter:
            delay *= random.uniform(0.5, 1.0)
        return delay
