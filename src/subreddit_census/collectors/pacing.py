"""In-process pacing between successive remote listing calls."""

from __future__ import annotations

from collections.abc import Callable
import logging
import random
import time

from subreddit_census.errors import CollectError

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], None]
ClockFn = Callable[[], float]


class IntervalRateLimiter:
    """Space remote listing calls at least a fixed interval apart.

    Every call after the first blocks until the interval (plus jitter) has
    elapsed since the previous call was allowed, however quickly that call
    returned. One limiter is shared by every ordering of a census, so calls
    stay paced across ordering boundaries too.
    """

    def __init__(
        self,
        interval_s: float,
        *,
        jitter_ms: int = 0,
        sleep: SleepFn = time.sleep,
        clock: ClockFn = time.monotonic,
        rng: random.Random | None = None,
    ) -> None:
        """
        Initialize the rate limiter.

        Args:
            interval_s: Minimum seconds between consecutive remote calls.
            jitter_ms: Maximum extra milliseconds added to each interval.
            sleep: Sleep function, injectable for deterministic tests.
            clock: Monotonic clock used to measure time since the last call.
            rng: Random source for jitter.
        """
        if interval_s < 0:
            raise CollectError("interval_s must be >= 0.")
        if jitter_ms < 0:
            raise CollectError("jitter_ms must be >= 0.")
        self._interval_s = float(interval_s)
        self._jitter_ms = int(jitter_ms)
        self._sleep = sleep
        self._clock = clock
        self._rng = rng if rng is not None else random.Random()
        self._last_call: float | None = None
        self._waits = 0

    @property
    def interval_s(self) -> float:
        return self._interval_s

    @property
    def waits(self) -> int:
        """Number of calls that actually had to block."""
        return self._waits

    def wait(self, key: str) -> float:
        """
        Block until the next call is allowed. Returns the time waited.

        Args:
            key: Rate limit key used for log correlation (e.g. "hot", "top").
        """
        if self._last_call is None:
            self._last_call = self._clock()
            return 0.0

        jitter = self._rng.uniform(0, self._jitter_ms / 1000.0) if self._jitter_ms else 0.0
        elapsed = self._clock() - self._last_call
        wait_time = self._interval_s + jitter - elapsed
        if wait_time > 0:
            logger.debug("Rate limit: key=%s waited=%.3fs", key, wait_time)
            self._sleep(wait_time)
            self._waits += 1
        else:
            wait_time = 0.0
        self._last_call = self._clock()
        return wait_time
