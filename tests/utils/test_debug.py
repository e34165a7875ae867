"""Tests for the debug/logging helpers."""

import logging

import pytest

from streamscout.utils import debug as dbg


def test_debug_silent_by_default(capsys: pytest.CaptureFixture[str]) -> None:
    dbg.enable_debug(False)
    dbg.debug("hidden message")
    assert "hidden message" not in capsys.readouterr().out


def test_enable_debug_prints_and_logs(
    capsys: pytest.CaptureFixture[str], caplog: pytest.LogCaptureFixture
) -> None:
    dbg.enable_debug()
    assert dbg.is_debug()
    with caplog.at_level(logging.DEBUG, logger="streamscout"):
        dbg.debug("visible message")
    assert "[DEBUG] visible message" in capsys.readouterr().out
    assert "visible message" in caplog.text


def test_warn_and_error_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="streamscout"):
        dbg.warn("careful")
        dbg.error("broken")
    levels = {record.levelname for record in caplog.records}
    assert {"WARNING", "ERROR"} <= levels


def test_utils_package_exposes_debug_module() -> None:
    import types

    import streamscout.utils

    assert isinstance(streamscout.utils.debug, types.ModuleType)
    assert callable(dbg.enable_debug)
