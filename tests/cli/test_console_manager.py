from __future__ import annotations

import pytest
from rich.console import Console

from streamscout.cli.console import NO_RICH_ENV, ConsoleManager, rich_enabled


def test_console_manager_yields_console_and_spins():  # noqa: D103
    with ConsoleManager(record=True) as console:  # type: Console
        assert isinstance(console, Console)
        console.print("Start")
        with console.status("Fetching page 1..."):
            console.print("Working")
        console.print("Done")

        output = console.export_text()

    for expected in ("Start", "Working", "Done"):
        assert expected in output


def test_console_manager_pretty_traceback():  # noqa: D103
    with ConsoleManager(record=True) as console:
        try:
            1 / 0
        except ZeroDivisionError:
            console.print_exception()

        output = console.export_text()

    assert "ZeroDivisionError" in output


def test_no_rich_env_disables_colour(monkeypatch: pytest.MonkeyPatch):  # noqa: D103
    monkeypatch.setenv(NO_RICH_ENV, "1")
    assert not rich_enabled()
    with ConsoleManager() as console:
        assert console.color_system is None


def test_force_use_overrides_env(monkeypatch: pytest.MonkeyPatch):  # noqa: D103
    monkeypatch.setenv(NO_RICH_ENV, "true")
    with ConsoleManager(force_use=True, force_terminal=True, color_system="truecolor") as console:
        assert console.color_system is not None
