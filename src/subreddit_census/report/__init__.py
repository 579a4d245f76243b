"""Report contracts and concrete census sinks."""

from __future__ import annotations

from pathlib import Path

from subreddit_census.census import CensusResult
from subreddit_census.errors import RenderError
from subreddit_census.report.base import ChartSeries, ChartSpec, ReportOutput, ReportSink
from subreddit_census.report.charts import build_charts
from subreddit_census.report.jsonout import chart_to_dict, render_json, write_chart_files
from subreddit_census.report.text import format_percentages, render_text


def render_report(result: CensusResult, report_format: str) -> str:
    if report_format == "text":
        return render_text(result)
    if report_format == "json":
        return render_json(result, build_charts(result))
    raise RenderError(f"Unsupported report format '{report_format}'. Use one of: text, json.")


class FileReportSink:
    """Write chart JSON files to a directory and render the census report."""

    def __init__(self, output_dir: str | Path, *, report_format: str = "text") -> None:
        if report_format not in {"text", "json"}:
            raise RenderError(f"Unsupported report format '{report_format}'. Use one of: text, json.")
        self._output_dir = Path(output_dir)
        self._report_format = report_format

    def publish(self, result: CensusResult) -> ReportOutput:
        chart_paths = write_chart_files(build_charts(result), self._output_dir)
        return ReportOutput(text=render_report(result, self._report_format), chart_paths=chart_paths)


__all__ = [
    "ChartSeries",
    "ChartSpec",
    "FileReportSink",
    "ReportOutput",
    "ReportSink",
    "build_charts",
    "chart_to_dict",
    "format_percentages",
    "render_json",
    "render_report",
    "render_text",
    "write_chart_files",
]
