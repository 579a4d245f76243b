"""Structured JSONL progress events for operator visibility."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
import json
from pathlib import Path
from typing import Any
import uuid

from subreddit_census.collectors.base import PageProgress
from subreddit_census.errors import DiagnosticsError


@dataclass(frozen=True)
class ProgressEvent:
    event_type: str
    occurred_at: str
    run_id: str
    ordering: str | None = None
    payload: dict[str, Any] = field(default_factory=dict)


def new_run_id() -> str:
    return uuid.uuid4().hex


class JsonlEventLogger:
    """Append one JSON line per progress event."""

    def __init__(self, path: str | Path, *, run_id: str | None = None) -> None:
        self._path = Path(path)
        self._run_id = run_id or new_run_id()
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DiagnosticsError(f"Could not create event log directory '{self._path.parent}': {exc}") from exc

    @property
    def path(self) -> Path:
        return self._path

    @property
    def run_id(self) -> str:
        return self._run_id

    def append(
        self,
        event_type: str,
        *,
        ordering: str | None = None,
        payload: dict[str, Any] | None = None,
        occurred_at: datetime | None = None,
    ) -> ProgressEvent:
        event = build_progress_event(
            event_type,
            run_id=self._run_id,
            ordering=ordering,
            payload=payload,
            occurred_at=occurred_at,
        )
        try:
            with self._path.open("a", encoding="utf-8") as stream:
                stream.write(json.dumps(asdict(event), sort_keys=True))
                stream.write("\n")
        except OSError as exc:
            raise DiagnosticsError(f"Could not append event to '{self._path}': {exc}") from exc
        return event

    def observe_page(self, progress: PageProgress) -> None:
        """Progress observer that records one ``page_fetched`` event per page."""
        self.append(
            "page_fetched",
            ordering=progress.ordering.value,
            payload={
                "page": progress.page,
                "received": progress.received,
                "appended": progress.appended,
                "duplicate_ids": list(progress.duplicate_ids),
                "collected": progress.collected,
                "remaining": progress.remaining,
                "cursor_mode": progress.cursor.mode.value,
                "cursor_token": progress.cursor.token,
            },
        )


def build_progress_event(
    event_type: str,
    *,
    run_id: str,
    ordering: str | None = None,
    payload: dict[str, Any] | None = None,
    occurred_at: datetime | None = None,
) -> ProgressEvent:
    if not event_type.strip():
        raise DiagnosticsError("event_type must be non-empty.")
    if not run_id.strip():
        raise DiagnosticsError("run_id must be non-empty.")

    resolved_time = occurred_at or datetime.now(timezone.utc)
    if resolved_time.tzinfo is None:
        resolved_time = resolved_time.replace(tzinfo=timezone.utc)
    return ProgressEvent(
        event_type=event_type.strip(),
        occurred_at=resolved_time.isoformat(),
        run_id=run_id.strip(),
        ordering=ordering.strip() if isinstance(ordering, str) and ordering.strip() else None,
        payload=dict(payload or {}),
    )
