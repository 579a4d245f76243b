"""Console percentage report."""

from __future__ import annotations

from subreddit_census.aggregate import CategoryTally, FlagTally, percentages_of
from subreddit_census.census import CensusResult, OrderingCensus

_EMPTY = "(no items)"


def format_percentages(tally: CategoryTally | FlagTally) -> list[str]:
    total = tally.total if isinstance(tally, FlagTally) else sum(tally.values())
    if total == 0:
        return [_EMPTY]
    return [f"{label}: {value:.2f}%" for label, value in percentages_of(tally).items()]


def render_text(result: CensusResult) -> str:
    sections = (
        ("--- Flair Post Data ---", "Flair", lambda entry: entry.categories),
        ("--- Flair Post Data (No Flairless) ---", "Flair", lambda entry: entry.labeled_categories),
        ("--- NSFW Post Data ---", "NSFW", lambda entry: entry.flags),
    )
    blocks: list[str] = [_summary(result)]
    for heading, noun, select in sections:
        lines = [heading]
        for index, entry in enumerate(result.orderings):
            if index:
                lines.append("")
            lines.append(f"{entry.ordering.series_name} {noun} Percentages:")
            lines.extend(format_percentages(select(entry)))
        blocks.append("\n".join(lines))
    return "\n\n\n".join(blocks)


def _summary(result: CensusResult) -> str:
    lines = [f"Census of r/{result.subreddit} (target {result.target_count} per ordering)"]
    for entry in result.orderings:
        lines.append(_summary_line(entry))
    return "\n".join(lines)


def _summary_line(entry: OrderingCensus) -> str:
    stats = entry.collection.stats
    return (
        f"- {entry.ordering.series_name}: {entry.item_count} items, "
        f"{stats.pages} pages, {stats.duplicates} duplicates dropped ({stats.stop_reason})"
    )
