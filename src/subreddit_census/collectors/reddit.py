"""Subreddit listing pages via PRAW."""

from __future__ import annotations

import logging
from typing import Any

import praw
from praw.exceptions import PRAWException
from prawcore.exceptions import PrawcoreException

from subreddit_census.collectors.cursor import CursorState
from subreddit_census.config import RedditCredentials
from subreddit_census.errors import ConfigError, TransportError
from subreddit_census.models import ListingItem, LookbackWindow, OrderingMode

logger = logging.getLogger(__name__)

_LISTING_SUFFIX = {
    OrderingMode.HOT: "hot",
    OrderingMode.LATEST: "new",
    OrderingMode.TOP: "top",
}


def build_reddit(credentials: RedditCredentials) -> praw.Reddit:
    kwargs: dict[str, Any] = {
        "client_id": credentials.client_id,
        "client_secret": credentials.client_secret,
        "user_agent": credentials.user_agent,
        "check_for_updates": False,
    }
    if credentials.has_password_grant:
        kwargs["username"] = credentials.username
        kwargs["password"] = credentials.password
    return praw.Reddit(**kwargs)


class PrawListingClient:
    """Fetch exactly one listing page per call from a subreddit."""

    def __init__(self, reddit: praw.Reddit, subreddit: str) -> None:
        name = subreddit.strip().removeprefix("r/").strip("/")
        if not name:
            raise ConfigError("Subreddit name must be non-empty.")
        self._reddit = reddit
        self._subreddit = name

    @property
    def subreddit(self) -> str:
        return self._subreddit

    @classmethod
    def from_credentials(cls, credentials: RedditCredentials, subreddit: str) -> PrawListingClient:
        return cls(build_reddit(credentials), subreddit)

    def fetch_page(
        self,
        ordering: OrderingMode,
        page_size: int,
        *,
        cursor: CursorState,
        count: int = 0,
        window: LookbackWindow | None = None,
    ) -> tuple[ListingItem, ...]:
        path = f"r/{self._subreddit}/{_LISTING_SUFFIX[ordering]}"
        params: dict[str, str | int] = {"limit": page_size, "count": count, "raw_json": 1}
        if cursor.after is not None:
            params["after"] = cursor.after
        if cursor.before is not None:
            params["before"] = cursor.before
        if ordering is OrderingMode.TOP:
            params["t"] = (window or LookbackWindow.MONTH).value

        try:
            listing = self._reddit.get(path, params=params)
        except (PrawcoreException, PRAWException) as exc:
            raise TransportError(
                f"Listing request failed for r/{self._subreddit}/{_LISTING_SUFFIX[ordering]}: {exc}"
            ) from exc

        children = getattr(listing, "children", None)
        if children is None:
            raise TransportError(
                f"Unexpected listing payload for r/{self._subreddit}/{_LISTING_SUFFIX[ordering]}: "
                f"{type(listing).__name__}"
            )
        items = tuple(_to_item(child) for child in children)
        logger.debug(
            "listing_page path=%s params=%s items=%d",
            path,
            params,
            len(items),
        )
        return items


def _to_item(submission: Any) -> ListingItem:
    item_id = getattr(submission, "id", None)
    if not isinstance(item_id, str) or not item_id:
        raise TransportError("Listing entry is missing a submission id.")
    label = getattr(submission, "link_flair_text", None)
    return ListingItem(
        item_id=item_id,
        label=label if isinstance(label, str) else None,
        flagged=bool(getattr(submission, "over_18", False)),
    )
