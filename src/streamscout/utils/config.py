"""Config utility for persistent streamscout defaults.

Reads and writes the user config file at
``$XDG_CONFIG_HOME/streamscout/config.toml`` (``~/.config`` when the variable
is unset). Uses tomli/tomli-w for TOML parsing and writing.

The file holds flat, lowercase keys matching the settings fields::

    region = "US"
    providers = "Netflix,Amazon"
    min_rating = 7.0
"""

import os
from pathlib import Path
from typing import Any

import tomli
import tomli_w

# Keys accepted by ``streamscout config set`` and their value types.
CONFIG_KEYS: dict[str, type] = {
    "tmdb_api_key": str,
    "region": str,
    "providers": str,
    "language": str,
    "min_rating": float,
    "min_votes": int,
    "api_timeout_seconds": int,
    "debug": bool,
}


class UnknownConfigKeyError(KeyError):
    """Raised when a key outside CONFIG_KEYS is written to the config file."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return (
            f"Unknown config key: {self.key}. "
            f"Valid keys: {', '.join(sorted(CONFIG_KEYS))}"
        )


def get_config_dir() -> Path:
    """Return the config directory, respecting XDG_CONFIG_HOME if set."""
    xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config_home / "streamscout"


def get_config_file() -> Path:
    return get_config_dir() / "config.toml"


def read_config_file() -> dict[str, Any]:
    """Read the TOML config file if it exists, returning a flat dict."""
    config_file = get_config_file()
    if not config_file.exists():
        return {}
    with config_file.open("rb") as f:
        return tomli.load(f)


def _coerce(key: str, raw: str) -> Any:
    """Convert a command-line string to the type declared for *key*."""
    target = CONFIG_KEYS[key]
    if target is bool:
        return raw.lower() in {"1", "true", "yes", "on"}
    return target(raw)


def set_config_value(key: str, raw_value: str) -> Any:
    """Persist *key* in config.toml and return the stored (typed) value.

    Raises:
        UnknownConfigKeyError: If *key* is not a known setting.
        ValueError: If *raw_value* cannot be converted to the key's type.
    """
    key = key.lower()
    if key not in CONFIG_KEYS:
        raise UnknownConfigKeyError(key)
    value = _coerce(key, raw_value)

    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    data = read_config_file()
    data[key] = value
    with get_config_file().open("wb") as f:
        tomli_w.dump(data, f)
    return value
