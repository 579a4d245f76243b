"""Minimum-interval pacing between listing requests."""

from __future__ import annotations

import random

import pytest

from subreddit_census.collectors.pacing import IntervalRateLimiter
from subreddit_census.errors import CollectError
from subreddit_census.testing import ManualClock, SleepRecorder


def test_first_call_is_not_delayed() -> None:
    sleeper = SleepRecorder()
    limiter = IntervalRateLimiter(60, sleep=sleeper, clock=ManualClock())

    assert limiter.wait("hot") == 0.0
    assert sleeper.calls == []
    assert limiter.waits == 0


def test_back_to_back_calls_sleep_the_full_interval() -> None:
    sleeper = SleepRecorder()
    limiter = IntervalRateLimiter(60, sleep=sleeper, clock=ManualClock())

    limiter.wait("hot")
    assert limiter.wait("hot") == 60.0
    assert limiter.wait("latest") == 60.0
    assert sleeper.calls == [60.0, 60.0]
    assert limiter.waits == 2


def test_time_already_elapsed_counts_toward_the_interval() -> None:
    clock = ManualClock()
    sleeper = SleepRecorder(clock=clock)
    limiter = IntervalRateLimiter(60, sleep=sleeper, clock=clock)

    limiter.wait("hot")
    clock.advance(45)
    assert limiter.wait("hot") == 15.0
    clock.advance(90)
    assert limiter.wait("hot") == 0.0
    assert sleeper.calls == [15.0]
    assert clock.now == 150.0


def test_zero_interval_does_not_sleep() -> None:
    sleeper = SleepRecorder()
    limiter = IntervalRateLimiter(0, sleep=sleeper, clock=ManualClock())

    limiter.wait("top")
    assert limiter.wait("top") == 0.0
    assert sleeper.calls == []
    assert limiter.waits == 0


def test_jitter_only_lengthens_the_wait() -> None:
    sleeper = SleepRecorder()
    limiter = IntervalRateLimiter(
        1.0, jitter_ms=500, sleep=sleeper, clock=ManualClock(), rng=random.Random(7)
    )

    for _ in range(21):
        limiter.wait("latest")

    assert len(sleeper.calls) == 20
    assert all(1.0 <= seconds <= 1.5 for seconds in sleeper.calls)


@pytest.mark.parametrize(("interval_s", "jitter_ms"), [(-1.0, 0), (1.0, -5)])
def test_rejects_negative_settings(interval_s: float, jitter_ms: int) -> None:
    with pytest.raises(CollectError):
        IntervalRateLimiter(interval_s, jitter_ms=jitter_ms)
