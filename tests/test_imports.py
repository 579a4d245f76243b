"""Import smoke tests for package modules."""

from importlib import import_module

from subreddit_census.models import ListingItem

MODULES = [
    "subreddit_census.config",
    "subreddit_census.models",
    "subreddit_census.errors",
    "subreddit_census.logging",
    "subreddit_census.aggregate",
    "subreddit_census.census",
    "subreddit_census.collectors.base",
    "subreddit_census.collectors.cursor",
    "subreddit_census.collectors.listing",
    "subreddit_census.collectors.pacing",
    "subreddit_census.collectors.reddit",
    "subreddit_census.report",
    "subreddit_census.report.base",
    "subreddit_census.report.charts",
    "subreddit_census.report.jsonout",
    "subreddit_census.report.text",
    "subreddit_census.diagnostics.events",
    "subreddit_census.testing",
    "subreddit_census.cli",
]


def test_core_modules_import_cleanly() -> None:
    for module in MODULES:
        assert import_module(module) is not None


def test_listing_item_defaults_to_unlabeled_and_safe() -> None:
    item = ListingItem(item_id="abc")
    assert item.label_or_sentinel == "None"
    assert item.flagged is False
