"""Tests for the persistent TOML config helpers."""

from pathlib import Path

import pytest
import tomli

from streamscout.utils.config import (
    UnknownConfigKeyError,
    get_config_dir,
    get_config_file,
    read_config_file,
    set_config_value,
)


def test_config_dir_respects_xdg(isolated_env: Path) -> None:
    assert get_config_dir() == isolated_env / "streamscout"
    assert get_config_file() == isolated_env / "streamscout" / "config.toml"


def test_config_dir_defaults_to_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    assert get_config_dir() == tmp_path / ".config" / "streamscout"


def test_read_missing_file_returns_empty() -> None:
    assert read_config_file() == {}


def test_set_value_creates_file_with_typed_values() -> None:
    assert set_config_value("region", "US") == "US"
    assert set_config_value("MIN_RATING", "7.0") == 7.0
    assert set_config_value("min_votes", "500") == 500
    assert set_config_value("debug", "yes") is True

    with get_config_file().open("rb") as f:
        data = tomli.load(f)
    assert data == {"region": "US", "min_rating": 7.0, "min_votes": 500, "debug": True}


def test_set_value_overwrites_existing_key() -> None:
    set_config_value("providers", "Netflix")
    set_config_value("providers", "Netflix,Hulu")
    assert read_config_file() == {"providers": "Netflix,Hulu"}


def test_unknown_key_is_rejected() -> None:
    with pytest.raises(UnknownConfigKeyError) as exc_info:
        set_config_value("colour", "blue")
    assert "Unknown config key: colour" in str(exc_info.value)
    assert not get_config_file().exists()


def test_bad_value_type_is_rejected() -> None:
    with pytest.raises(ValueError):
        set_config_value("min_votes", "lots")
