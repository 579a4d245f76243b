"""Cross-ordering chart series built from census tallies."""

from __future__ import annotations

from subreddit_census.aggregate import (
    FLAG_LABELS,
    CategoryTally,
    aligned_series,
    labeled_only,
    union_labels,
)
from subreddit_census.census import CensusResult
from subreddit_census.report.base import ChartSeries, ChartSpec

FLAIR_CHART = "flairs"
FLAIR_NO_FLAIRLESS_CHART = "flairs_no_flairless"
NSFW_CHART = "nsfw"


def build_category_chart(
    key: str,
    title: str,
    labels: tuple[str, ...],
    tallies: list[tuple[str, CategoryTally]],
) -> ChartSpec:
    series = tuple(
        ChartSeries(name=name, labels=labels, values=aligned_series(labels, tally))
        for name, tally in tallies
    )
    return ChartSpec(key=key, title=title, labels=labels, series=series)


def build_charts(result: CensusResult) -> tuple[ChartSpec, ...]:
    """Build the flair, labeled-only flair and NSFW charts, one series per ordering."""
    all_labels = union_labels(entry.categories for entry in result.orderings)

    flair_chart = build_category_chart(
        FLAIR_CHART,
        "Flair Post Data",
        all_labels,
        [(entry.ordering.series_name, entry.categories) for entry in result.orderings],
    )
    labeled_chart = build_category_chart(
        FLAIR_NO_FLAIRLESS_CHART,
        "Flair Post Data (No Flairless)",
        labeled_only(all_labels),
        [(entry.ordering.series_name, entry.labeled_categories) for entry in result.orderings],
    )
    nsfw_chart = ChartSpec(
        key=NSFW_CHART,
        title="NSFW Post Data",
        labels=FLAG_LABELS,
        series=tuple(
            ChartSeries(
                name=entry.ordering.series_name,
                labels=FLAG_LABELS,
                values=entry.flags.as_counts(),
            )
            for entry in result.orderings
        ),
    )
    return (flair_chart, labeled_chart, nsfw_chart)
