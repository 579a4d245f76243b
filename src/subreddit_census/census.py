"""Multi-ordering census orchestration."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
import logging

from subreddit_census.aggregate import CategoryTally, FlagTally, tally_by_category, tally_by_flag
from subreddit_census.collectors.base import CollectionResult
from subreddit_census.collectors.listing import PaginatedCollector
from subreddit_census.errors import CollectError
from subreddit_census.models import OrderingMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderingCensus:
    ordering: OrderingMode
    collection: CollectionResult
    categories: CategoryTally
    labeled_categories: CategoryTally
    flags: FlagTally

    @property
    def item_count(self) -> int:
        return len(self.collection.items)


@dataclass(frozen=True)
class CensusResult:
    subreddit: str
    target_count: int
    orderings: tuple[OrderingCensus, ...]

    @property
    def short_orderings(self) -> tuple[OrderingMode, ...]:
        return tuple(entry.ordering for entry in self.orderings if entry.collection.short)

    def get(self, ordering: OrderingMode) -> OrderingCensus | None:
        return next((entry for entry in self.orderings if entry.ordering is ordering), None)


def tally_collection(ordering: OrderingMode, collection: CollectionResult) -> OrderingCensus:
    return OrderingCensus(
        ordering=ordering,
        collection=collection,
        categories=tally_by_category(collection.items, include_unlabeled=True),
        labeled_categories=tally_by_category(collection.items, include_unlabeled=False),
        flags=tally_by_flag(collection.items),
    )


def run_census(
    collector: PaginatedCollector,
    orderings: Iterable[OrderingMode],
    target_count: int,
    *,
    subreddit: str = "",
) -> CensusResult:
    """Collect and tally each ordering strictly one after another.

    All orderings go through the same collector and so share its rate
    limiter: the first request of an ordering is paced against the last
    request of the previous one. Transport failures propagate and abort the
    whole census.
    """
    resolved = tuple(orderings)
    if not resolved:
        raise CollectError("At least one ordering is required.")
    if len(set(resolved)) != len(resolved):
        raise CollectError("Orderings must not repeat.")

    logger.info(
        "census_started subreddit=%s orderings=%s target=%d",
        subreddit or "-",
        ",".join(mode.value for mode in resolved),
        target_count,
    )
    entries: list[OrderingCensus] = []
    for ordering in resolved:
        collection = collector.collect(ordering, target_count)
        if collection.short:
            logger.warning(
                "collection_short ordering=%s collected=%d target=%d stop_reason=%s",
                ordering.value,
                len(collection.items),
                target_count,
                collection.stats.stop_reason,
            )
        entries.append(tally_collection(ordering, collection))

    return CensusResult(subreddit=subreddit, target_count=target_count, orderings=tuple(entries))
