"""Logging setup for termwidgets: stdlib logging rendered through structlog.

Widget modules log with ``logging.getLogger(__name__)`` and attach structured
fields through ``extra=`` (the CLI does this with error payloads). Those fields
are rendered next to the event by the formatters built here.
"""

from __future__ import annotations

import logging
import sys

import structlog

from tw_common.config.env import read_bool_env, read_env


def _resolve_level(value: str | int | None, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    if value is None:
        return logging.WARNING
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        pass
    return logging.getLevelNamesMapping().get(value.upper(), logging.INFO)


def configure_logging(
    *,
    level: str | int | None = None,
    debug: bool = False,
    log_file: str | None = None,
    json: bool | None = None,
    force: bool = False,
) -> None:
    """Route stdlib logging through structlog renderers.

    Arguments left as None fall back to ``TW_LOG_LEVEL``, ``TW_LOG_JSON`` and
    ``TW_LOG_FILE``. When the root logger already has handlers (an embedding
    application configured logging first) they are left alone unless ``force``
    is set.
    """
    env_level, env_json, env_log_file = _read_logging_env()
    resolved_level = _resolve_level(level or env_level, debug)
    resolved_json = bool(env_json if json is None else json)
    resolved_log_file = env_log_file if log_file is None else log_file

    root_logger = logging.getLogger()
    if root_logger.handlers and not force:
        _configure_structlog()
        return

    if force:
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)

    root_logger.setLevel(resolved_level)
    for handler in _build_handlers(resolved_json, resolved_log_file):
        root_logger.addHandler(handler)
    _configure_structlog()


def _read_logging_env() -> tuple[str | None, bool | None, str | None]:
    return read_env("log_level"), read_bool_env("log_json"), read_env("log_file")


def _foreign_pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def _make_formatter(*, json: bool, colors: bool) -> structlog.stdlib.ProcessorFormatter:
    renderer: structlog.types.Processor
    if json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=colors)
    return structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        foreign_pre_chain=_foreign_pre_chain(),
    )


def _build_handlers(json: bool, log_file: str | None) -> list[logging.Handler]:
    """A stderr handler, plus a UTF-8 file handler when ``log_file`` is set.

    Rendered widgets are full of box-drawing glyphs, so the file is always
    written as UTF-8 and never gets ANSI colors.
    """
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(_make_formatter(json=json, colors=_is_terminal(sys.stderr)))
    handlers: list[logging.Handler] = [stream_handler]
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(_make_formatter(json=json, colors=False))
        handlers.append(file_handler)
    return handlers


def _configure_structlog() -> None:
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _is_terminal(stream: object) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())
