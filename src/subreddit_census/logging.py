"""Logging setup for the census CLI."""

from __future__ import annotations

import logging

LOGGER_NAME = "subreddit_census"


def configure_logging(debug: bool = False) -> None:
    """Configure root handlers once and set the package logger level.

    The package level is set explicitly because ``basicConfig`` is a no-op
    when the root logger already has handlers.
    """
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    logging.getLogger(LOGGER_NAME).setLevel(level)
