"""JSON census rendering and chart export."""

from __future__ import annotations

import json
from pathlib import Path

from subreddit_census.aggregate import percentages_of
from subreddit_census.census import CensusResult, OrderingCensus
from subreddit_census.errors import RenderError
from subreddit_census.report.base import ChartSpec


def chart_to_dict(chart: ChartSpec) -> dict[str, object]:
    return {
        "key": chart.key,
        "title": chart.title,
        "labels": list(chart.labels),
        "series": [
            {"name": series.name, "labels": list(series.labels), "values": list(series.values)}
            for series in chart.series
        ],
    }


def ordering_to_dict(entry: OrderingCensus) -> dict[str, object]:
    stats = entry.collection.stats
    return {
        "ordering": entry.ordering.value,
        "collected": entry.item_count,
        "pages": stats.pages,
        "received": stats.received,
        "duplicates": stats.duplicates,
        "stop_reason": stats.stop_reason,
        "anchored": stats.anchored,
        "categories": dict(entry.categories),
        "labeled_categories": dict(entry.labeled_categories),
        "flags": dict(entry.flags.as_mapping()),
        "category_percentages": percentages_of(entry.categories) if entry.item_count else None,
        "flag_percentages": percentages_of(entry.flags) if entry.item_count else None,
    }


def render_json(result: CensusResult, charts: tuple[ChartSpec, ...] = ()) -> str:
    payload = {
        "subreddit": result.subreddit,
        "target_count": result.target_count,
        "orderings": [ordering_to_dict(entry) for entry in result.orderings],
        "charts": [chart_to_dict(chart) for chart in charts],
    }
    return json.dumps(payload, indent=2, sort_keys=True)


def write_chart_files(charts: tuple[ChartSpec, ...], output_dir: str | Path) -> tuple[Path, ...]:
    directory = Path(output_dir).expanduser()
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise RenderError(f"Could not create output directory '{directory}': {exc}") from exc

    written: list[Path] = []
    for chart in charts:
        path = directory / f"{chart.key}.json"
        try:
            path.write_text(json.dumps(chart_to_dict(chart), indent=2), encoding="utf-8")
        except OSError as exc:
            raise RenderError(f"Could not write chart '{chart.key}' to '{path}': {exc}") from exc
        written.append(path)
    return tuple(written)
