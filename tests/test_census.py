"""Sequential multi-ordering census runs."""

from __future__ import annotations

import pytest

from subreddit_census.census import run_census
from subreddit_census.collectors.listing import PaginatedCollector
from subreddit_census.collectors.pacing import IntervalRateLimiter
from subreddit_census.errors import CollectError, TransportError
from subreddit_census.models import OrderingMode
from subreddit_census.testing import (
    ManualClock,
    ScriptedListingClient,
    SleepRecorder,
    failing_page,
    make_items,
)


def _collector(client: ScriptedListingClient) -> PaginatedCollector:
    return PaginatedCollector(
        client,
        rate_limiter=IntervalRateLimiter(0, sleep=SleepRecorder()),
        observers=(),
    )


def test_run_census_collects_each_ordering_in_sequence() -> None:
    client = ScriptedListingClient(
        [
            make_items("a", "b", label="meme"),
            make_items("a", "c", flagged=True),
            make_items("d") + make_items("e", label="art"),
        ]
    )

    result = run_census(_collector(client), list(OrderingMode), 2, subreddit="196")

    assert [call.ordering for call in client.calls] == [
        OrderingMode.HOT,
        OrderingMode.LATEST,
        OrderingMode.TOP,
    ]
    assert all(call.after is None for call in client.calls)
    assert result.subreddit == "196"
    hot = result.get(OrderingMode.HOT)
    latest = result.get(OrderingMode.LATEST)
    top = result.get(OrderingMode.TOP)
    assert hot is not None and latest is not None and top is not None
    assert dict(hot.categories) == {"meme": 2}
    assert dict(latest.categories) == {"None": 2}
    assert latest.flags.flagged == 2
    assert dict(top.labeled_categories) == {"art": 1}
    assert result.short_orderings == ()


def test_items_may_repeat_across_orderings() -> None:
    client = ScriptedListingClient([make_items("x"), make_items("x")])

    result = run_census(_collector(client), [OrderingMode.HOT, OrderingMode.LATEST], 1)

    assert [entry.item_count for entry in result.orderings] == [1, 1]


def test_short_orderings_are_reported_without_failing() -> None:
    client = ScriptedListingClient([make_items("a"), ()])

    result = run_census(_collector(client), [OrderingMode.HOT], 3)

    assert result.short_orderings == (OrderingMode.HOT,)
    assert result.orderings[0].collection.stats.exhausted is True


def test_transport_failure_aborts_remaining_orderings() -> None:
    client = ScriptedListingClient([make_items("a"), failing_page("timed out")])

    with pytest.raises(TransportError):
        run_census(_collector(client), list(OrderingMode), 1)
    assert len(client.calls) == 2


@pytest.mark.parametrize(
    "orderings",
    [[], [OrderingMode.HOT, OrderingMode.HOT]],
)
def test_run_census_rejects_empty_or_repeated_orderings(orderings: list[OrderingMode]) -> None:
    with pytest.raises(CollectError):
        run_census(_collector(ScriptedListingClient([])), orderings, 1)


def test_pacing_continues_across_ordering_boundaries() -> None:
    clock = ManualClock()
    sleeper = SleepRecorder(clock=clock)
    client = ScriptedListingClient(
        [make_items("h"), make_items("l"), make_items("t")],
        sleep_recorder=sleeper,
    )
    collector = PaginatedCollector(
        client,
        rate_limiter=IntervalRateLimiter(60, sleep=sleeper, clock=clock),
        observers=(),
    )

    run_census(collector, list(OrderingMode), 1)

    assert [call.sleeps_before for call in client.calls] == [0, 1, 2]
    assert sleeper.calls == [60.0, 60.0]
    assert clock.now == 120.0
