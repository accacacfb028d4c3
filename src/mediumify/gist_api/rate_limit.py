"""Request pacing for the Gist API.

GitHub throttles bursts of content-creating requests well below the
documented hourly quota, so gist creation is serialized with a fixed
minimum spacing rather than a burst-friendly token bucket.

:class:`RequestSpacer` takes its clock and sleep functions as arguments so
tests can drive it deterministically.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable


class RequestSpacer:
    """Enforce a minimum interval between consecutive requests.

    The first :meth:`acquire` returns immediately; every later call blocks
    until *min_interval* seconds have passed since the previous one.

    Parameters
    ----------
    min_interval:
        Minimum spacing in seconds.  Must be positive.
    clock:
        Monotonic clock returning seconds.  Defaults to
        :func:`time.monotonic`.
    sleep:
        Blocking sleep function.  Defaults to :func:`time.sleep`.
    """

    __slots__ = ("_clock", "_last", "_lock", "_sleep", "min_interval")

    def __init__(
        self,
        min_interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if min_interval <= 0:
            raise ValueError(f"min_interval must be > 0, got {min_interval}")

        self.min_interval: float = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last: float | None = None
        self._lock = threading.Lock()

    def acquire(self) -> float:
        """Wait for the next request slot.

        Returns the number of seconds the caller had to wait (``0.0`` if the
        slot was immediately available).
        """
        with self._lock:
            now = self._clock()
            wait = 0.0
            if self._last is not None:
                wait = max(0.0, self._last + self.min_interval - now)
            if wait > 0:
                self._sleep(wait)
            self._last = now + wait
        return wait
