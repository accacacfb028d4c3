"""Metrics hook protocol and no-op default implementation.

mediumify emits counters and timings around gist requests and export
calls.  By default a :class:`NoopMetricsHook` discards them; pass any object
satisfying :class:`MetricsHook` as ``MediumifyConfig.metrics`` to forward
them to StatsD, Prometheus, or similar.

Emitted metric names:

* ``mediumify.requests_total``             -- counter
* ``mediumify.retries_total``              -- counter
* ``mediumify.rate_limited_total``         -- counter
* ``mediumify.request_duration_ms``        -- timing
* ``mediumify.gist_wait_ms``               -- timing
* ``mediumify.gists_created_total``        -- counter
* ``mediumify.gist_failures_total``        -- counter
* ``mediumify.exports_total``              -- counter
* ``mediumify.validation_warnings_total``  -- counter
* ``mediumify.export_duration_ms``         -- timing
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    All methods accept an optional *tags* dict of string keys and values.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment a counter metric."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration in milliseconds."""
        ...

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Set a gauge metric to an absolute value."""
        ...


class NoopMetricsHook:
    """Default metrics implementation that discards all data points."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass
