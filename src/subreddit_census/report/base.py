"""Reporting sink interfaces and chart contracts."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from subreddit_census.census import CensusResult


@dataclass(frozen=True)
class ChartSeries:
    name: str
    labels: tuple[str, ...]
    values: tuple[int, ...]


@dataclass(frozen=True)
class ChartSpec:
    key: str
    title: str
    labels: tuple[str, ...]
    series: tuple[ChartSeries, ...]


@dataclass(frozen=True)
class ReportOutput:
    text: str
    chart_paths: tuple[Path, ...] = field(default_factory=tuple)


class ReportSink(Protocol):
    def publish(self, result: CensusResult) -> ReportOutput:
        """Render a finished census; nothing flows back to the core."""
