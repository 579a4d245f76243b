"""Bounded cursor-paginated collection against a sliding-window listing."""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence
import logging

from subreddit_census.collectors.base import (
    CollectionResult,
    CollectionStats,
    ListingClient,
    PageProgress,
    ProgressObserver,
)
from subreddit_census.collectors.cursor import CursorState
from subreddit_census.collectors.pacing import IntervalRateLimiter
from subreddit_census.errors import CollectError
from subreddit_census.models import ListingItem, LookbackWindow, OrderingMode

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


def log_progress(progress: PageProgress) -> None:
    logger.info(
        "page_fetched ordering=%s page=%d received=%d new=%d duplicates=%d remaining=%d cursor=%s",
        progress.ordering.value,
        progress.page,
        progress.received,
        progress.appended,
        len(progress.duplicate_ids),
        progress.remaining,
        progress.cursor.describe(),
    )
    if progress.duplicate_ids:
        logger.debug(
            "duplicates_dropped ordering=%s ids=%s",
            progress.ordering.value,
            ",".join(progress.duplicate_ids),
        )


class PaginatedCollector:
    """Collect up to a target number of unique items for one listing ordering."""

    def __init__(
        self,
        client: ListingClient,
        *,
        rate_limiter: IntervalRateLimiter,
        page_size: int = MAX_PAGE_SIZE,
        top_window: LookbackWindow = LookbackWindow.MONTH,
        anchor_on_exhaustion: bool = False,
        observers: Sequence[ProgressObserver] = (log_progress,),
    ) -> None:
        if page_size <= 0 or page_size > MAX_PAGE_SIZE:
            raise CollectError(f"page_size must be between 1 and {MAX_PAGE_SIZE}.")
        self._client = client
        self._rate_limiter = rate_limiter
        self._page_size = page_size
        self._top_window = top_window
        self._anchor_on_exhaustion = anchor_on_exhaustion
        self._observers = tuple(observers)

    def collect(self, ordering: OrderingMode, target_count: int) -> CollectionResult:
        """Collect up to ``target_count`` unique items; a zero target yields an empty result."""
        if target_count < 0:
            raise CollectError("target_count must be >= 0.")

        logger.info(
            "collection_started ordering=%s target=%d page_size=%d",
            ordering.value,
            target_count,
            self._page_size,
        )
        result = _collect_pages(
            self._client,
            ordering=ordering,
            target_count=target_count,
            page_size=self._page_size,
            window=self._top_window if ordering is OrderingMode.TOP else None,
            rate_limiter=self._rate_limiter,
            anchor_on_exhaustion=self._anchor_on_exhaustion,
            observers=self._observers,
        )
        logger.info(
            "collection_finished ordering=%s collected=%d target=%d pages=%d duplicates=%d stop_reason=%s",
            ordering.value,
            len(result.items),
            target_count,
            result.stats.pages,
            result.stats.duplicates,
            result.stats.stop_reason,
        )
        return result


def _collect_pages(
    client: ListingClient,
    *,
    ordering: OrderingMode,
    target_count: int,
    page_size: int,
    window: LookbackWindow | None,
    rate_limiter: IntervalRateLimiter,
    anchor_on_exhaustion: bool,
    observers: tuple[ProgressObserver, ...],
) -> CollectionResult:
    seen_ids: set[str] = set()
    collected: deque[ListingItem] = deque()
    cursor = CursorState()
    pages = 0
    received = 0
    duplicates = 0
    stop_reason = "target_reached"

    while len(collected) < target_count:
        rate_limiter.wait(ordering.value)
        limit = min(page_size, target_count - len(collected))
        page = tuple(
            client.fetch_page(
                ordering,
                limit,
                cursor=cursor,
                count=len(collected),
                window=window,
            )
        )
        pages += 1
        received += len(page)

        fresh, duplicate_ids = _split_unseen(page, seen_ids)
        duplicates += len(duplicate_ids)
        if cursor.anchored:
            # Anchored pages hold items newer than everything collected so far.
            collected.extendleft(reversed(fresh))
        else:
            collected.extend(fresh)

        exhausted = False
        if not page:
            if anchor_on_exhaustion and not cursor.anchored and collected:
                cursor = cursor.anchor(collected[0].item_id)
                logger.info(
                    "cursor_anchored ordering=%s cursor=%s",
                    ordering.value,
                    cursor.describe(),
                )
            else:
                exhausted = True
        elif cursor.anchored:
            if fresh:
                cursor = cursor.anchor(collected[0].item_id)
            else:
                exhausted = True
        else:
            last_seen = fresh[-1] if fresh else page[-1]
            cursor = cursor.advance(last_seen.item_id)
            if not fresh:
                logger.warning(
                    "page_without_new_items ordering=%s page=%d cursor=%s",
                    ordering.value,
                    pages,
                    cursor.describe(),
                )

        remaining = max(0, target_count - len(collected))
        progress = PageProgress(
            ordering=ordering,
            page=pages,
            received=len(page),
            appended=len(fresh),
            duplicate_ids=duplicate_ids,
            collected=len(collected),
            remaining=remaining,
            cursor=cursor,
        )
        for observer in observers:
            observer(progress)

        if exhausted:
            stop_reason = "exhausted"
            break

    items = tuple(collected)[:target_count]
    stats = CollectionStats(
        ordering=ordering,
        target_count=target_count,
        pages=pages,
        received=received,
        duplicates=duplicates,
        stop_reason=stop_reason,
        anchored=cursor.anchored,
    )
    return CollectionResult(items=items, stats=stats)


def _split_unseen(
    page: Sequence[ListingItem],
    seen_ids: set[str],
) -> tuple[list[ListingItem], tuple[str, ...]]:
    fresh: list[ListingItem] = []
    duplicate_ids: list[str] = []
    for item in page:
        if item.item_id in seen_ids:
            duplicate_ids.append(item.item_id)
            continue
        seen_ids.add(item.item_id)
        fresh.append(item)
    return fresh, tuple(duplicate_ids)
