"""Pagination cursor state for sliding-window listings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from subreddit_census.errors import CollectError

LINK_TYPE_PREFIX = "t3_"


class CursorMode(str, Enum):
    UNSET = "unset"
    ADVANCING = "advancing"
    ANCHORED = "anchored"


@dataclass(frozen=True)
class CursorState:
    """Immutable listing position threaded through one collection run.

    An advancing cursor carries an ``after`` token taken from the last item
    appended; an anchored cursor carries a ``before`` token taken from the
    newest item collected so far. A run may move from advancing to anchored
    but never back.
    """

    mode: CursorMode = CursorMode.UNSET
    token: str | None = None

    @property
    def after(self) -> str | None:
        return self.token if self.mode is CursorMode.ADVANCING else None

    @property
    def before(self) -> str | None:
        return self.token if self.mode is CursorMode.ANCHORED else None

    @property
    def anchored(self) -> bool:
        return self.mode is CursorMode.ANCHORED

    def advance(self, item_id: str) -> CursorState:
        if self.mode is CursorMode.ANCHORED:
            raise CollectError("An anchored cursor cannot return to advancing within the same run.")
        return CursorState(mode=CursorMode.ADVANCING, token=cursor_token(item_id))

    def anchor(self, item_id: str) -> CursorState:
        return CursorState(mode=CursorMode.ANCHORED, token=cursor_token(item_id))

    def describe(self) -> str:
        if self.mode is CursorMode.UNSET:
            return "-"
        direction = "after" if self.mode is CursorMode.ADVANCING else "before"
        return f"{direction}={self.token}"


def cursor_token(item_id: str) -> str:
    """Return the listing fullname for an item id."""
    raw = item_id.strip()
    if not raw:
        raise CollectError("Cannot derive a cursor token from an empty item id.")
    if raw.startswith(LINK_TYPE_PREFIX):
        return raw
    return f"{LINK_TYPE_PREFIX}{raw}"
