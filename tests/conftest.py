"""Shared fixtures: isolate every test from the user's config and environment."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from streamscout.cli.console import NO_RICH_ENV
from streamscout.utils.debug import enable_debug

SETTINGS_ENV_VARS = [
    "TMDB_API_KEY",
    "REGION",
    "PROVIDERS",
    "LANGUAGE",
    "MIN_RATING",
    "MIN_VOTES",
    "API_TIMEOUT_SECONDS",
    "DEBUG",
    "STREAMSCOUT_DEBUG",
]


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point the config dir at tmp_path and clear settings variables.

    Also runs each test from an empty directory so a developer's ``.env`` is
    never read, and widens the console so Rich does not wrap lines.
    """
    config_home = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # The --no-rich flag writes os.environ directly; setting a value here means
    # monkeypatch restores it afterwards.
    monkeypatch.setenv(NO_RICH_ENV, "0")
    monkeypatch.setenv("COLUMNS", "200")
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    yield config_home
    enable_debug(False)
