"""Diagnostics helpers."""

from .events import JsonlEventLogger, ProgressEvent, build_progress_event, new_run_id

__all__ = [
    "JsonlEventLogger",
    "ProgressEvent",
    "build_progress_event",
    "new_run_id",
]
