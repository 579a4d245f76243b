"""Test-only utilities for deterministic collector assertions."""

from .fakes import RecordedFetch, ScriptedListingClient, failing_page, make_items
from .time_control import ManualClock, SleepRecorder

__all__ = [
    "ManualClock",
    "RecordedFetch",
    "ScriptedListingClient",
    "SleepRecorder",
    "failing_page",
    "make_items",
]
