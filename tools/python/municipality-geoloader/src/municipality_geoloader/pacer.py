"""
Municipality Geo Loader — Request Pacer
========================================
Token bucket of size one, refilled every ``interval_seconds``.  The first
:meth:`Pacer.wait` returns at once; every later call blocks until a full
interval has passed since the previous one.

Nominatim's usage policy allows at most one request per second, which is
why the loader default is slightly above one second.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from shared.python.exceptions import ConfigurationError

logger = logging.getLogger("geoloader.pacer")


class Pacer:
    """Enforce a fixed minimum spacing between successive calls.

    Args:
        interval_seconds: Refill interval of the single token.
        clock: Monotonic time source, injectable for tests.
        sleep: Blocking sleep function, injectable for tests.
    """

    def __init__(
        self,
        interval_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if interval_seconds < 0:
            raise ConfigurationError(
                f"Pacer interval must be >= 0, got {interval_seconds}"
            )
        self.interval_seconds = interval_seconds
        self._clock = clock
        self._sleep = sleep
        self._last_acquired: float | None = None

    def wait(self) -> float:
        """Block until the token is available, then take it.

        Returns:
            Seconds spent sleeping (``0.0`` when no wait was needed).
        """
        waited = 0.0
        if self._last_acquired is not None:
            remaining = self.interval_seconds - (self._clock() - self._last_acquired)
            if remaining > 0:
                logger.debug("Pacing: sleeping %.3fs before next request", remaining)
                self._sleep(remaining)
                waited = remaining
        self._last_acquired = self._clock()
        return waited
