"""Console helpers shared by the CLI commands."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.text import Text

from tw_common.errors import TWError, error_to_payload

logger = logging.getLogger(__name__)


def stdout_console() -> Console:
    return Console(highlight=False, soft_wrap=True)


def stderr_console() -> Console:
    return Console(stderr=True, highlight=False, soft_wrap=True)


def emit(rendered: str) -> None:
    """Write widget output verbatim (no markup, no wrapping)."""
    stdout_console().print(Text(rendered))


def fail(message: str) -> None:
    stderr_console().print(Text(f"✖ {message}", style="red"))
    raise typer.Exit(1)


def fail_with(error: TWError) -> None:
    """Report a widget error on stderr and exit; the full payload goes to the log."""
    logger.debug("Widget construction failed", extra=error_to_payload(error))
    fail(error.describe())


def load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        fail(f"Cannot read {path}: {exc}")
    except json.JSONDecodeError as exc:
        fail(f"Invalid JSON in {path}: {exc}")
