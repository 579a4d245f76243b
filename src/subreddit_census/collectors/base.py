"""Collection interfaces for paginated listing readers."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from subreddit_census.collectors.cursor import CursorState
from subreddit_census.models import ItemCollection, ListingItem, LookbackWindow, OrderingMode


class ListingClient(Protocol):
    def fetch_page(
        self,
        ordering: OrderingMode,
        page_size: int,
        *,
        cursor: CursorState,
        count: int = 0,
        window: LookbackWindow | None = None,
    ) -> Sequence[ListingItem]:
        """Fetch one page of items; raise TransportError on remote failure."""


@dataclass(frozen=True)
class PageProgress:
    ordering: OrderingMode
    page: int
    received: int
    appended: int
    duplicate_ids: tuple[str, ...]
    collected: int
    remaining: int
    cursor: CursorState


ProgressObserver = Callable[[PageProgress], None]


@dataclass(frozen=True)
class CollectionStats:
    ordering: OrderingMode
    target_count: int
    pages: int
    received: int
    duplicates: int
    stop_reason: str
    anchored: bool = False

    @property
    def exhausted(self) -> bool:
        return self.stop_reason == "exhausted"


@dataclass(frozen=True)
class CollectionResult:
    items: ItemCollection
    stats: CollectionStats

    @property
    def short(self) -> bool:
        return len(self.items) < self.stats.target_count
