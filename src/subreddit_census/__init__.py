"""subreddit_census package."""

from .aggregate import (
    FlagTally,
    aligned_series,
    percentages_of,
    tally_by_category,
    tally_by_flag,
    union_labels,
)
from .census import CensusResult, OrderingCensus, run_census
from .config import (
    AppConfig,
    CollectionConfig,
    RedditCredentials,
    RuntimeConfig,
    config_to_dict,
    default_config,
    init_default_config,
    load_credentials,
    load_runtime_config,
    resolve_config_path,
)
from .models import ListingItem, LookbackWindow, OrderingMode

__all__ = [
    "AppConfig",
    "CensusResult",
    "CollectionConfig",
    "FlagTally",
    "ListingItem",
    "LookbackWindow",
    "OrderingCensus",
    "OrderingMode",
    "RedditCredentials",
    "RuntimeConfig",
    "aligned_series",
    "config_to_dict",
    "default_config",
    "init_default_config",
    "load_credentials",
    "load_runtime_config",
    "percentages_of",
    "resolve_config_path",
    "run_census",
    "tally_by_category",
    "tally_by_flag",
    "union_labels",
]

__version__ = "0.1.0"
