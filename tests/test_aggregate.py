"""Category and flag tallies plus cross-ordering alignment."""

from __future__ import annotations

import pytest

from subreddit_census.aggregate import (
    FlagTally,
    aligned_series,
    labeled_only,
    percentages_of,
    tally_by_category,
    tally_by_flag,
    union_labels,
)
from subreddit_census.errors import EmptyTallyError
from subreddit_census.models import ListingItem


def _items() -> list[ListingItem]:
    return [
        ListingItem("1", label="meme"),
        ListingItem("2", label=None, flagged=True),
        ListingItem("3", label="meme", flagged=True),
        ListingItem("4", label="rule"),
    ]


def test_tally_by_category_counts_unlabeled_under_sentinel() -> None:
    tally = tally_by_category(_items(), include_unlabeled=True)
    assert dict(tally) == {"meme": 2, "None": 1, "rule": 1}
    assert list(tally) == ["meme", "None", "rule"]


def test_tally_by_category_can_skip_unlabeled_items() -> None:
    tally = tally_by_category(_items(), include_unlabeled=False)
    assert dict(tally) == {"meme": 2, "rule": 1}


def test_tallies_are_read_only() -> None:
    tally = tally_by_category(_items(), include_unlabeled=True)
    with pytest.raises(TypeError):
        tally["meme"] = 5  # type: ignore[index]


def test_tally_by_flag_partitions_every_item() -> None:
    flags = tally_by_flag(_items())
    assert flags == FlagTally(flagged=2, unflagged=2)
    assert flags.total == 4
    assert dict(flags.as_mapping()) == {"NSFW": 2, "SFW": 2}


def test_empty_collection_yields_empty_tallies() -> None:
    assert dict(tally_by_category([], include_unlabeled=True)) == {}
    assert tally_by_flag([]).total == 0


def test_percentages_sum_to_one_hundred() -> None:
    percentages = percentages_of(tally_by_category(_items(), include_unlabeled=True))
    assert percentages == {"meme": 50.0, "None": 25.0, "rule": 25.0}
    assert sum(percentages.values()) == pytest.approx(100.0)


def test_percentages_accept_flag_tallies() -> None:
    assert percentages_of(FlagTally(flagged=1, unflagged=3)) == {"NSFW": 25.0, "SFW": 75.0}


def test_percentages_of_empty_tally_raise() -> None:
    with pytest.raises(EmptyTallyError):
        percentages_of(tally_by_category([], include_unlabeled=True))
    with pytest.raises(EmptyTallyError):
        percentages_of(FlagTally())


def test_aligned_series_fills_missing_labels_with_zero() -> None:
    assert aligned_series(["x", "y", "z"], {"x": 2}) == (2, 0, 0)


def test_union_labels_keeps_first_seen_order_and_exclusions() -> None:
    hot = {"meme": 3, "None": 1}
    latest = {"rule": 2, "meme": 1}
    top = {"art": 4}

    assert union_labels([hot, latest, top]) == ("meme", "None", "rule", "art")
    assert union_labels([hot, latest, top], exclude=["None"]) == ("meme", "rule", "art")


def test_labeled_only_drops_sentinel() -> None:
    assert labeled_only(("meme", "None", "rule")) == ("meme", "rule")
