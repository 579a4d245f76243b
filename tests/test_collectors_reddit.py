"""PRAW listing adapter request shaping and error wrapping."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest
from prawcore.exceptions import PrawcoreException

from subreddit_census.collectors.cursor import CursorState
from subreddit_census.collectors.reddit import PrawListingClient
from subreddit_census.errors import ConfigError, TransportError
from subreddit_census.models import ListingItem, LookbackWindow, OrderingMode


class FakeReddit:
    def __init__(self, response: Any = None, error: Exception | None = None) -> None:
        self.response = response if response is not None else SimpleNamespace(children=[])
        self.error = error
        self.requests: list[tuple[str, dict[str, Any]]] = []

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        self.requests.append((path, dict(params or {})))
        if self.error is not None:
            raise self.error
        return self.response


def _submission(item_id: str, flair: str | None = None, over_18: bool = False) -> SimpleNamespace:
    return SimpleNamespace(id=item_id, link_flair_text=flair, over_18=over_18)


def test_fetch_page_maps_submissions_to_listing_items() -> None:
    reddit = FakeReddit(
        SimpleNamespace(children=[_submission("a1", "meme", True), _submission("b2")])
    )
    client = PrawListingClient(reddit, "196")  # type: ignore[arg-type]

    items = client.fetch_page(OrderingMode.HOT, 100, cursor=CursorState())

    assert items == (
        ListingItem(item_id="a1", label="meme", flagged=True),
        ListingItem(item_id="b2", label=None, flagged=False),
    )


def test_fetch_page_requests_new_listing_with_after_cursor_and_count() -> None:
    reddit = FakeReddit()
    client = PrawListingClient(reddit, "196")  # type: ignore[arg-type]

    client.fetch_page(OrderingMode.LATEST, 25, cursor=CursorState().advance("zz9"), count=100)

    path, params = reddit.requests[0]
    assert path == "r/196/new"
    assert params["after"] == "t3_zz9"
    assert params["count"] == 100
    assert params["limit"] == 25
    assert "before" not in params
    assert "t" not in params


def test_fetch_page_passes_lookback_window_for_top() -> None:
    reddit = FakeReddit()
    client = PrawListingClient(reddit, "196")  # type: ignore[arg-type]

    client.fetch_page(OrderingMode.TOP, 100, cursor=CursorState(), window=LookbackWindow.MONTH)
    client.fetch_page(OrderingMode.TOP, 100, cursor=CursorState(), window=LookbackWindow.WEEK)

    assert reddit.requests[0][0] == "r/196/top"
    assert reddit.requests[0][1]["t"] == "month"
    assert reddit.requests[1][1]["t"] == "week"


def test_fetch_page_uses_before_token_when_anchored() -> None:
    reddit = FakeReddit()
    client = PrawListingClient(reddit, "196")  # type: ignore[arg-type]

    client.fetch_page(OrderingMode.HOT, 10, cursor=CursorState().anchor("abc"))

    _, params = reddit.requests[0]
    assert params["before"] == "t3_abc"
    assert "after" not in params


def test_fetch_page_wraps_prawcore_errors() -> None:
    reddit = FakeReddit(error=PrawcoreException("503 from upstream"))
    client = PrawListingClient(reddit, "196")  # type: ignore[arg-type]

    with pytest.raises(TransportError, match="503 from upstream") as excinfo:
        client.fetch_page(OrderingMode.HOT, 10, cursor=CursorState())
    assert isinstance(excinfo.value.__cause__, PrawcoreException)


def test_fetch_page_rejects_non_listing_payload() -> None:
    reddit = FakeReddit(response={"kind": "t3"})
    client = PrawListingClient(reddit, "196")  # type: ignore[arg-type]

    with pytest.raises(TransportError, match="Unexpected listing payload"):
        client.fetch_page(OrderingMode.HOT, 10, cursor=CursorState())


def test_subreddit_name_is_normalized() -> None:
    client = PrawListingClient(FakeReddit(), " r/196/ ")  # type: ignore[arg-type]
    assert client.subreddit == "196"


def test_blank_subreddit_is_a_config_error() -> None:
    with pytest.raises(ConfigError):
        PrawListingClient(FakeReddit(), "r/")  # type: ignore[arg-type]
