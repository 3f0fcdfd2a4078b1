"""Tests for the structlog-backed logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
import structlog

from tw_common.logs.core import configure_logging


pytestmark = pytest.mark.unit_common


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_force_replaces_handlers(restore_root_logger: logging.Logger) -> None:
    configure_logging(level="debug", force=True)

    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1
    assert isinstance(
        restore_root_logger.handlers[0].formatter, structlog.stdlib.ProcessorFormatter
    )


def test_debug_flag_wins_over_level(restore_root_logger: logging.Logger) -> None:
    configure_logging(level="error", debug=True, force=True)

    assert restore_root_logger.level == logging.DEBUG


def test_default_level_is_warning(
    restore_root_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("TW_LOG_LEVEL", raising=False)
    configure_logging(force=True)

    assert restore_root_logger.level == logging.WARNING


def test_level_read_from_env(
    restore_root_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("TW_LOG_LEVEL", "error")
    configure_logging(force=True)

    assert restore_root_logger.level == logging.ERROR


def test_log_file_adds_handler(
    restore_root_logger: logging.Logger, tmp_path: Path
) -> None:
    log_file = tmp_path / "widgets.log"
    configure_logging(level="info", log_file=str(log_file), force=True, json=True)
    logging.getLogger("tw_widgets.test").warning("rendered %s", "table")
    for handler in restore_root_logger.handlers:
        handler.flush()

    assert len(restore_root_logger.handlers) == 2
    content = log_file.read_text(encoding="utf-8")
    assert '"event": "rendered table"' in content
    assert '"level": "warning"' in content


def test_existing_handlers_are_kept_without_force(
    restore_root_logger: logging.Logger,
) -> None:
    configure_logging(level="info", force=True)
    before = list(restore_root_logger.handlers)

    configure_logging(level="debug")

    assert restore_root_logger.handlers == before
    assert restore_root_logger.level == logging.INFO


def test_extra_fields_and_logger_name_are_rendered(
    restore_root_logger: logging.Logger, tmp_path: Path
) -> None:
    log_file = tmp_path / "errors.log"
    configure_logging(level="debug", log_file=str(log_file), force=True, json=True)
    logging.getLogger("tw_widgets.cli.output").debug(
        "Widget construction failed",
        extra={"error_type": "UnknownPresetError", "error_context": {"name": "wavy"}},
    )
    for handler in restore_root_logger.handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert '"logger": "tw_widgets.cli.output"' in content
    assert '"error_type": "UnknownPresetError"' in content
    assert '"error_context": {"name": "wavy"}' in content
    assert "_record" not in content


def test_log_file_keeps_box_glyphs(
    restore_root_logger: logging.Logger, tmp_path: Path
) -> None:
    log_file = tmp_path / "glyphs.log"
    configure_logging(level="info", log_file=str(log_file), force=True, json=False)
    logging.getLogger("tw_widgets.test").warning("top border %s", "┌──┐")
    for handler in restore_root_logger.handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert "┌──┐" in content
    assert "\x1b[" not in content
