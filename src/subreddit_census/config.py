"""Shared configuration contracts and validation helpers for subreddit-census."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import os
from pathlib import Path
import tomllib
from typing import Any

from platformdirs import user_config_dir
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError
from .models import LookbackWindow, OrderingMode

VALID_REPORT_FORMATS = {"text", "json"}
VALID_ORDERINGS = {mode.value for mode in OrderingMode}
VALID_TOP_WINDOWS = {window.value for window in LookbackWindow}
DEFAULT_CONFIG_FILENAME = "config.toml"
CONFIG_ENV_VAR = "CENSUS_CONFIG"

DEFAULT_CONFIG_TEMPLATE = """[app]
debug = false
output_dir = "."
report_format = "text"

[collection]
subreddit = "196"
target_count = 1000
page_size = 100
interval_seconds = 60
jitter_ms = 0
top_window = "month"
orderings = ["hot", "latest", "top"]
anchor_on_exhaustion = false
"""


class RedditCredentials(BaseSettings):
    """Reddit API credentials loaded from REDDIT_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="REDDIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    client_id: str = ""
    client_secret: str = ""
    user_agent: str = ""
    username: str = ""  # Optional: password grant only when set with password
    password: str = ""

    @property
    def has_password_grant(self) -> bool:
        return bool(self.username and self.password)


@dataclass(frozen=True)
class AppConfig:
    debug: bool = False
    output_dir: str = "."
    report_format: str = "text"


@dataclass(frozen=True)
class CollectionConfig:
    subreddit: str = "196"
    target_count: int = 1000
    page_size: int = 100
    interval_seconds: float = 60.0
    jitter_ms: int = 0
    top_window: LookbackWindow = LookbackWindow.MONTH
    orderings: tuple[OrderingMode, ...] = (
        OrderingMode.HOT,
        OrderingMode.LATEST,
        OrderingMode.TOP,
    )
    anchor_on_exhaustion: bool = False


@dataclass(frozen=True)
class RuntimeConfig:
    app: AppConfig = field(default_factory=AppConfig)
    collection: CollectionConfig = field(default_factory=CollectionConfig)


def default_config() -> RuntimeConfig:
    return RuntimeConfig()


def default_config_toml() -> str:
    return DEFAULT_CONFIG_TEMPLATE


def resolve_config_path(config_path: str | Path | None = None) -> Path:
    if config_path:
        return Path(config_path).expanduser()

    env_value = os.getenv(CONFIG_ENV_VAR)
    if env_value:
        return Path(env_value).expanduser()

    config_dir = Path(user_config_dir("subreddit-census", appauthor=False))
    return config_dir / DEFAULT_CONFIG_FILENAME


def init_default_config(config_path: str | Path | None = None, force: bool = False) -> Path:
    path = resolve_config_path(config_path)
    if path.exists() and path.is_dir():
        raise ConfigError(
            f"Config path '{path}' is a directory; expected a TOML file path (for example '{path / DEFAULT_CONFIG_FILENAME}')."
        )
    if path.exists() and not force:
        raise ConfigError(
            f"Config file already exists at '{path}'. Re-run with --force to overwrite."
        )

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(default_config_toml(), encoding="utf-8")
    except OSError as exc:
        raise ConfigError(
            f"Could not write config file at '{path}': {exc}. "
            "Check path permissions or choose a writable location with `--path`."
        ) from exc
    return path


def load_runtime_config(config_path: str | Path | None = None, *, missing_ok: bool = False) -> RuntimeConfig:
    """Load the TOML runtime config.

    With ``missing_ok`` a config file that does not exist yields defaults,
    so a census can run from CLI flags alone.
    """
    path = resolve_config_path(config_path)
    if not path.exists():
        if missing_ok:
            return default_config()
        raise ConfigError(
            f"Config file not found at '{path}'. Run `census config init --path \"{path}\"` to generate defaults."
        )
    if path.is_dir():
        raise ConfigError(
            f"Config path '{path}' is a directory; pass a file path ending in '{DEFAULT_CONFIG_FILENAME}'."
        )

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(
            f"Could not read config file '{path}': {exc}. "
            "Check file permissions and that the path points to a readable TOML file."
        ) from exc
    raw = _load_toml(text, path)
    return _parse_runtime_config(raw)


def load_credentials(env_file: str | Path | None = ".env") -> RedditCredentials:
    credentials = RedditCredentials(_env_file=env_file)
    missing = [
        f"REDDIT_{name.upper()}"
        for name in ("client_id", "client_secret", "user_agent")
        if not getattr(credentials, name).strip()
    ]
    if missing:
        raise ConfigError(
            f"Missing Reddit credentials: {', '.join(missing)}. "
            "Set them in the environment or in a .env file."
        )
    if bool(credentials.username) != bool(credentials.password):
        raise ConfigError("REDDIT_USERNAME and REDDIT_PASSWORD must be set together.")
    return credentials


def config_to_dict(config: RuntimeConfig) -> dict[str, Any]:
    payload = asdict(config)
    collection = payload["collection"]
    collection["top_window"] = config.collection.top_window.value
    collection["orderings"] = [mode.value for mode in config.collection.orderings]
    return payload


def _load_toml(text: str, path: Path) -> dict[str, Any]:
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Config file '{path}' contains invalid TOML: {exc}. "
            "Fix the syntax or regenerate defaults with `census config init --force`."
        ) from exc
    return data


def _parse_runtime_config(data: dict[str, Any]) -> RuntimeConfig:
    app_raw = _expect_table(data, "app", default={})
    collection_raw = _expect_table(data, "collection", default={})

    app_config = AppConfig(
        debug=_expect_bool(app_raw, "app.debug", default=False),
        output_dir=_expect_non_empty_string(app_raw, "app.output_dir", "."),
        report_format=_expect_choice(
            app_raw,
            "app.report_format",
            default="text",
            valid_values=VALID_REPORT_FORMATS,
        ),
    )

    page_size = _expect_positive_int(collection_raw, "collection.page_size", default=100)
    if page_size > 100:
        raise ConfigError("Invalid value for 'collection.page_size': expected 1..100.")

    collection_config = CollectionConfig(
        subreddit=_expect_non_empty_string(collection_raw, "collection.subreddit", "196"),
        target_count=_expect_positive_int(collection_raw, "collection.target_count", default=1000),
        page_size=page_size,
        interval_seconds=_expect_non_negative_number(
            collection_raw, "collection.interval_seconds", default=60.0
        ),
        jitter_ms=_expect_non_negative_int(collection_raw, "collection.jitter_ms", default=0),
        top_window=LookbackWindow(
            _expect_choice(
                collection_raw,
                "collection.top_window",
                default="month",
                valid_values=VALID_TOP_WINDOWS,
            )
        ),
        orderings=_expect_orderings(collection_raw, "collection.orderings"),
        anchor_on_exhaustion=_expect_bool(
            collection_raw, "collection.anchor_on_exhaustion", default=False
        ),
    )

    return RuntimeConfig(app=app_config, collection=collection_config)


def _expect_table(data: dict[str, Any], key: str, default: dict[str, Any]) -> dict[str, Any]:
    value = data.get(key, default)
    if not isinstance(value, dict):
        raise ConfigError(f"Invalid [{key}] table: expected table, got {type(value).__name__}.")
    return value


def _expect_non_empty_string(
    data: dict[str, Any], key: str, default: str | None
) -> str:
    if key.split(".")[-1] in data:
        value = data[key.split(".")[-1]]
    else:
        if default is None:
            raise ConfigError(f"Missing required value '{key}'.")
        value = default

    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"Invalid value for '{key}': expected non-empty string.")
    return value


def _expect_positive_int(data: dict[str, Any], key: str, default: int) -> int:
    field = key.split(".")[-1]
    value = data.get(field, default)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"Invalid value for '{key}': expected positive integer.")
    return value


def _expect_non_negative_int(data: dict[str, Any], key: str, default: int) -> int:
    field = key.split(".")[-1]
    value = data.get(field, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"Invalid value for '{key}': expected integer >= 0.")
    return value


def _expect_non_negative_number(data: dict[str, Any], key: str, default: float) -> float:
    field = key.split(".")[-1]
    value = data.get(field, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        raise ConfigError(f"Invalid value for '{key}': expected number >= 0.")
    return float(value)


def _expect_bool(data: dict[str, Any], key: str, default: bool) -> bool:
    field = key.split(".")[-1]
    value = data.get(field, default)
    if not isinstance(value, bool):
        raise ConfigError(f"Invalid value for '{key}': expected boolean true/false.")
    return value


def _expect_choice(
    data: dict[str, Any],
    key: str,
    default: str | None,
    valid_values: set[str],
) -> str:
    field = key.split(".")[-1]
    if field in data:
        value = data[field]
    else:
        if default is None:
            raise ConfigError(f"Missing required value '{key}'.")
        value = default

    if not isinstance(value, str) or value not in valid_values:
        choices = ", ".join(sorted(valid_values))
        raise ConfigError(f"Invalid value for '{key}': expected one of [{choices}].")
    return value


def _expect_orderings(data: dict[str, Any], key: str) -> tuple[OrderingMode, ...]:
    field = key.split(".")[-1]
    if field not in data:
        return CollectionConfig().orderings
    value = data[field]
    if not isinstance(value, list) or not value:
        raise ConfigError(f"Invalid value for '{key}': expected a non-empty array.")

    parsed: list[OrderingMode] = []
    for index, raw in enumerate(value):
        if not isinstance(raw, str) or raw not in VALID_ORDERINGS:
            choices = ", ".join(sorted(VALID_ORDERINGS))
            raise ConfigError(f"Invalid value for '{key}[{index}]': expected one of [{choices}].")
        mode = OrderingMode(raw)
        if mode in parsed:
            raise ConfigError(f"Invalid value for '{key}': '{raw}' is listed more than once.")
        parsed.append(mode)
    return tuple(parsed)
