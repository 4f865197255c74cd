"""Regression tests for the optional Rich dependency.

Bootstrap paths and error rendering must keep working when Rich is not
importable; output then falls back to plain stderr.
"""

from __future__ import annotations

import logging
import sys

import pytest

from deps_launcher.cli import exit_codes
from deps_launcher.cli.app import cli, main
from deps_launcher.cli.console import configure_logging, console


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    monkeypatch.setitem(sys.modules, "rich.logging", None)
    monkeypatch.setitem(sys.modules, "rich.markup", None)


def test_help_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    assert main(["--help"]) == exit_codes.SUCCESS


def test_console_falls_back_to_stderr(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)
    console.print("plain message")
    assert capsys.readouterr().err == "plain message\n"


def test_error_boundary_without_rich(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)
    monkeypatch.setattr(sys, "argv", ["deps-launcher", "-Snope"])
    with pytest.raises(SystemExit) as exc_info:
        cli()
    assert exc_info.value.code == exit_codes.GENERAL_ERROR
    assert "Invalid option: -Snope" in capsys.readouterr().err


def test_logging_without_rich_uses_stream_handler(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    configure_logging(verbose=True)

    logger = logging.getLogger("deps_launcher")
    assert len(logger.handlers) == 1
    assert type(logger.handlers[0]) is logging.StreamHandler
    assert logger.level == logging.DEBUG


def test_logging_default_level_is_warning() -> None:
    configure_logging(verbose=False)
    logger = logging.getLogger("deps_launcher")
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
