"""Collector contracts."""

from .base import CollectionResult, CollectionStats, ListingClient, PageProgress, ProgressObserver
from .cursor import CursorMode, CursorState, cursor_token
from .listing import MAX_PAGE_SIZE, PaginatedCollector, log_progress
from .pacing import IntervalRateLimiter

__all__ = [
    "CollectionResult",
    "CollectionStats",
    "CursorMode",
    "CursorState",
    "IntervalRateLimiter",
    "ListingClient",
    "MAX_PAGE_SIZE",
    "PageProgress",
    "PaginatedCollector",
    "ProgressObserver",
    "cursor_token",
    "log_progress",
]
