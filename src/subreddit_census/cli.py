"""Typer CLI for subreddit census runs."""

from __future__ import annotations

from dataclasses import replace
import json
from pathlib import Path

import typer

from . import __version__
from .census import CensusResult, run_census
from .collectors.base import ListingClient, ProgressObserver
from .collectors.listing import PaginatedCollector, log_progress
from .collectors.pacing import IntervalRateLimiter
from .config import (
    VALID_ORDERINGS,
    VALID_REPORT_FORMATS,
    VALID_TOP_WINDOWS,
    RedditCredentials,
    RuntimeConfig,
    config_to_dict,
    init_default_config,
    load_credentials,
    load_runtime_config,
    resolve_config_path,
)
from .diagnostics.events import JsonlEventLogger
from .errors import CollectError, ConfigError, DiagnosticsError, RenderError, TransportError
from .logging import configure_logging
from .models import LookbackWindow, OrderingMode
from .report import FileReportSink

EVENTS_FILENAME = "census-events.jsonl"

app = typer.Typer(help="Tally subreddit flairs and NSFW share across hot, latest and top listings.")

config_app = typer.Typer(help="Config commands.")

app.add_typer(config_app, name="config")


@config_app.command("init")
def config_init(
    path: str | None = typer.Option(
        None, "--path", help="Optional config TOML path (defaults to platform config dir)."
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite existing config file."),
) -> None:
    try:
        written_path = init_default_config(path, force=force)
    except ConfigError as exc:
        typer.secho(f"Config init failed: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(2) from exc

    typer.echo(f"Wrote default config to {written_path}")


@config_app.command("show")
def config_show(
    path: str | None = typer.Option(
        None, "--path", help="Optional config TOML path (defaults to platform config dir)."
    ),
    as_json: bool = typer.Option(False, "--json", help="Render resolved config as JSON."),
) -> None:
    resolved_path = resolve_config_path(path)
    try:
        config = load_runtime_config(path)
    except ConfigError as exc:
        typer.secho(f"Config show failed: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(2) from exc

    payload = {
        "path": str(resolved_path),
        "config": config_to_dict(config),
    }
    if as_json:
        typer.echo(json.dumps(payload, indent=2, sort_keys=True))
        return

    collection = config.collection
    typer.echo(f"Resolved config path: {payload['path']}")
    typer.echo(f"Subreddit: r/{collection.subreddit}")
    typer.echo(f"Target count: {collection.target_count}")
    typer.echo(f"Interval: {collection.interval_seconds:g}s")
    typer.echo(f"Orderings: {', '.join(mode.value for mode in collection.orderings)}")


@app.command("run")
def run(
    ctx: typer.Context,
    path: str | None = typer.Option(
        None, "--path", help="Optional config TOML path (defaults to platform config dir)."
    ),
    subreddit: str | None = typer.Option(None, "--subreddit", help="Subreddit to survey."),
    count: int | None = typer.Option(None, "--count", min=1, help="Target items per ordering."),
    interval: float | None = typer.Option(
        None, "--interval", min=0, help="Seconds to wait between listing requests."
    ),
    orderings: list[str] | None = typer.Option(
        None, "--ordering", help="Ordering to collect (repeatable): hot|latest|top."
    ),
    top_window: str | None = typer.Option(
        None, "--top-window", help="Lookback window for top: hour|day|week|month|year|all."
    ),
    output_dir: str | None = typer.Option(
        None, "--output-dir", help="Directory for chart JSON files (defaults to config app.output_dir)."
    ),
    anchor: bool = typer.Option(
        False,
        "--anchor-on-exhaustion",
        help="Re-anchor on the newest item when the forward cursor runs dry.",
    ),
    require_full: bool = typer.Option(
        False, "--require-full", help="Fail when any ordering collects fewer items than requested."
    ),
    env_file: str = typer.Option(".env", "--env-file", help="Dotenv file holding REDDIT_* credentials."),
) -> None:
    try:
        config = load_runtime_config(path, missing_ok=path is None)
        effective = _config_with_overrides(
            config,
            subreddit=subreddit,
            count=count,
            interval=interval,
            orderings=orderings,
            top_window=top_window,
            output_dir=output_dir,
            anchor=anchor,
        )
        debug_enabled = _resolve_debug(ctx) or effective.app.debug
        configure_logging(debug_enabled)
        report_format = _resolve_report_format(ctx, config_default=effective.app.report_format)
        credentials = load_credentials(env_file)
        client = _build_listing_client(credentials, effective.collection.subreddit)
        collector = _build_collector(client, effective, debug_enabled=debug_enabled)

        collection = effective.collection
        typer.echo(
            f"Fetching {collection.target_count} posts from r/{collection.subreddit}",
            err=True,
        )
        result = run_census(
            collector,
            collection.orderings,
            collection.target_count,
            subreddit=collection.subreddit,
        )
        _check_short_collections(result, require_full=require_full)
        output = FileReportSink(effective.app.output_dir, report_format=report_format).publish(result)
    except (ConfigError, CollectError, TransportError, RenderError, DiagnosticsError) as exc:
        typer.secho(f"Census failed: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(2) from exc

    typer.echo(output.text)
    for chart_path in output.chart_paths:
        typer.echo(f"Wrote chart data to {chart_path}", err=True)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show subreddit-census version and exit."),
    output_format: str | None = typer.Option(
        None,
        "--format",
        help="Report format: text|json.",
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging and progress event log."),
) -> None:
    ctx.obj = {
        "output_format": output_format,
        "debug": debug,
    }
    if version:
        typer.echo(__version__)
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


def _build_listing_client(credentials: RedditCredentials, subreddit: str) -> ListingClient:
    from .collectors.reddit import PrawListingClient

    return PrawListingClient.from_credentials(credentials, subreddit)


def _build_collector(
    client: ListingClient,
    config: RuntimeConfig,
    *,
    debug_enabled: bool,
) -> PaginatedCollector:
    collection = config.collection
    observers: list[ProgressObserver] = [log_progress]
    if debug_enabled:
        event_logger = JsonlEventLogger(Path(config.app.output_dir).expanduser() / EVENTS_FILENAME)
        observers.append(event_logger.observe_page)
    return PaginatedCollector(
        client,
        rate_limiter=IntervalRateLimiter(collection.interval_seconds, jitter_ms=collection.jitter_ms),
        page_size=collection.page_size,
        top_window=collection.top_window,
        anchor_on_exhaustion=collection.anchor_on_exhaustion,
        observers=observers,
    )


def _config_with_overrides(
    config: RuntimeConfig,
    *,
    subreddit: str | None,
    count: int | None,
    interval: float | None,
    orderings: list[str] | None,
    top_window: str | None,
    output_dir: str | None,
    anchor: bool,
) -> RuntimeConfig:
    collection = config.collection
    if subreddit is not None:
        if not subreddit.strip():
            raise ConfigError("--subreddit must be non-empty.")
        collection = replace(collection, subreddit=subreddit.strip())
    if count is not None:
        collection = replace(collection, target_count=count)
    if interval is not None:
        collection = replace(collection, interval_seconds=float(interval))
    if orderings:
        collection = replace(collection, orderings=_parse_orderings(orderings))
    if top_window is not None:
        normalized = top_window.strip().lower()
        if normalized not in VALID_TOP_WINDOWS:
            supported = ", ".join(sorted(VALID_TOP_WINDOWS))
            raise ConfigError(f"Invalid top window '{top_window}'. Supported windows: {supported}.")
        collection = replace(collection, top_window=LookbackWindow(normalized))
    if anchor:
        collection = replace(collection, anchor_on_exhaustion=True)

    app_config = config.app
    if output_dir is not None:
        app_config = replace(app_config, output_dir=output_dir)
    return replace(config, app=app_config, collection=collection)


def _parse_orderings(raw_values: list[str]) -> tuple[OrderingMode, ...]:
    parsed: list[OrderingMode] = []
    for raw in raw_values:
        for part in raw.split(","):
            normalized = part.strip().lower()
            if not normalized:
                continue
            if normalized not in VALID_ORDERINGS:
                supported = ", ".join(sorted(VALID_ORDERINGS))
                raise ConfigError(f"Invalid ordering '{part}'. Supported orderings: {supported}.")
            mode = OrderingMode(normalized)
            if mode not in parsed:
                parsed.append(mode)
    if not parsed:
        raise ConfigError("--ordering requires at least one value.")
    return tuple(parsed)


def _check_short_collections(result: CensusResult, *, require_full: bool) -> None:
    for ordering in result.short_orderings:
        entry = result.get(ordering)
        collected = entry.item_count if entry is not None else 0
        message = (
            f"{ordering.series_name} listing ran dry after {collected} of "
            f"{result.target_count} items."
        )
        if require_full:
            raise CollectError(f"{message} Re-run without --require-full to accept short collections.")
        typer.secho(f"Warning: {message}", err=True, fg=typer.colors.YELLOW)


def _resolve_report_format(ctx: typer.Context | None, *, config_default: str) -> str:
    selected = None
    if ctx is not None and isinstance(ctx.obj, dict):
        selected = ctx.obj.get("output_format")
    resolved = (selected or config_default).strip().lower()
    if resolved not in VALID_REPORT_FORMATS:
        supported = ", ".join(sorted(VALID_REPORT_FORMATS))
        raise RenderError(
            f"Invalid output format '{resolved}'. Supported formats: {supported}."
        )
    return resolved


def _resolve_debug(ctx: typer.Context | None) -> bool:
    if ctx is None or not isinstance(ctx.obj, dict):
        return False
    return bool(ctx.obj.get("debug", False))
