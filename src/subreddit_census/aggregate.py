"""Category and flag tallies derived from finished item collections."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from subreddit_census.errors import EmptyTallyError
from subreddit_census.models import NO_LABEL, ListingItem

FLAG_LABELS = ("NSFW", "SFW")

CategoryTally = Mapping[str, int]


@dataclass(frozen=True)
class FlagTally:
    flagged: int = 0
    unflagged: int = 0

    @property
    def total(self) -> int:
        return self.flagged + self.unflagged

    def as_counts(self) -> tuple[int, int]:
        return (self.flagged, self.unflagged)

    def as_mapping(self) -> CategoryTally:
        return MappingProxyType(dict(zip(FLAG_LABELS, self.as_counts())))


def tally_by_category(items: Iterable[ListingItem], include_unlabeled: bool) -> CategoryTally:
    """Count items per label.

    Unlabeled items count under the ``"None"`` sentinel when
    ``include_unlabeled`` is true and are skipped entirely otherwise.
    Label order follows first appearance in ``items``.
    """
    counts: dict[str, int] = {}
    for item in items:
        if item.label is None and not include_unlabeled:
            continue
        label = item.label_or_sentinel
        counts[label] = counts.get(label, 0) + 1
    return MappingProxyType(counts)


def tally_by_flag(items: Iterable[ListingItem]) -> FlagTally:
    flagged = 0
    unflagged = 0
    for item in items:
        if item.flagged:
            flagged += 1
        else:
            unflagged += 1
    return FlagTally(flagged=flagged, unflagged=unflagged)


def percentages_of(tally: CategoryTally | FlagTally) -> dict[str, float]:
    """Return label -> percentage of the tally total.

    Percentages are undefined for an empty tally; callers must check first.

    Raises:
        EmptyTallyError: If the tally total is zero.
    """
    counts = tally.as_mapping() if isinstance(tally, FlagTally) else tally
    total = sum(counts.values())
    if total <= 0:
        raise EmptyTallyError("Cannot compute percentages for a tally with a zero total.")
    return {label: 100.0 * count / total for label, count in counts.items()}


def union_labels(tallies: Iterable[CategoryTally], *, exclude: Iterable[str] = ()) -> tuple[str, ...]:
    """Union of labels across tallies, in first-seen order."""
    excluded = set(exclude)
    labels: dict[str, None] = {}
    for tally in tallies:
        for label in tally:
            if label not in excluded:
                labels.setdefault(label, None)
    return tuple(labels)


def aligned_series(all_labels: Sequence[str], tally: CategoryTally) -> tuple[int, ...]:
    """Project a tally onto ``all_labels``, preserving their order and filling gaps with 0."""
    return tuple(tally.get(label, 0) for label in all_labels)


def labeled_only(all_labels: Sequence[str]) -> tuple[str, ...]:
    return tuple(label for label in all_labels if label != NO_LABEL)
