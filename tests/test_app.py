"""Tests for logging setup and the command-line entry point."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

pytest.importorskip("PySide6")

from typer.testing import CliRunner

from steptree.logging_config import setup_logging
from steptree.main import app


def test_setup_logging_console_only() -> None:
    logger = setup_logging(level=logging.DEBUG, capture_qt=False)
    assert logger.name == "steptree"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_setup_logging_with_file(tmp_path: Path) -> None:
    log_file = tmp_path / "steptree.log"
    logger = setup_logging(log_file=str(log_file), capture_qt=False)
    assert len(logger.handlers) == 2

    logging.getLogger("steptree.model.tree").info("hello from the tree")
    for handler in logger.handlers:
        handler.flush()
    assert "hello from the tree" in log_file.read_text(encoding="utf-8")

    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def test_cli_help() -> None:
    result = CliRunner().invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "--template" in result.output


class StubWindow:
    """Stands in for MainWindow so the command runs without a display."""

    opened: list[Path] = []

    def __init__(self, template=None) -> None:
        self.factory = type("Factory", (), {"template": template or "box"})()

    def open_outline(self, path) -> bool:
        StubWindow.opened.append(Path(path))
        return False

    def show(self) -> None:
        pass


class StubApp:
    def exec(self) -> int:
        return 0


def test_run_logs_outline_and_template(monkeypatch, caplog) -> None:
    import steptree.main as steptree_main
    import steptree.view.main_window as main_window
    from steptree import config

    monkeypatch.setattr(steptree_main, "create_app", lambda: StubApp())
    monkeypatch.setattr(main_window, "MainWindow", StubWindow)
    StubWindow.opened.clear()

    with caplog.at_level(logging.INFO, logger="steptree"):
        result = CliRunner().invoke(app, ["--template", "rounded"])

    assert result.exit_code == 0
    assert StubWindow.opened == [Path(config.DEMO_OUTLINE_PATH)]
    messages = [r.getMessage() for r in caplog.records if r.name == "steptree.main"]
    assert any("rounded" in m and "demo_outline.json" in m for m in messages)
    assert "Starting with an empty canvas." in messages
    logging.getLogger("steptree").handlers.clear()
