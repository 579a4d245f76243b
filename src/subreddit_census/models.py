"""Data model contracts for cross-module use."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

NO_LABEL = "None"


class OrderingMode(str, Enum):
    HOT = "hot"
    LATEST = "latest"
    TOP = "top"

    @property
    def series_name(self) -> str:
        return self.value.capitalize()


class LookbackWindow(str, Enum):
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


@dataclass(frozen=True)
class ListingItem:
    item_id: str
    label: str | None = None
    flagged: bool = False

    @property
    def label_or_sentinel(self) -> str:
        return self.label if self.label is not None else NO_LABEL


ItemCollection = tuple[ListingItem, ...]
