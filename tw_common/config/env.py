"""Reading termwidgets settings from ``TW_*`` environment variables."""

from __future__ import annotations

import os
from typing import Mapping

ENV_PREFIX = "TW_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def env_name(setting: str) -> str:
    """Map a setting name to its variable: ``log_level`` -> ``TW_LOG_LEVEL``."""
    return ENV_PREFIX + setting.upper()


def read_env(setting: str, environ: Mapping[str, str] | None = None) -> str | None:
    """Return the stripped value of a setting, or None when unset or blank."""
    source = os.environ if environ is None else environ
    value = source.get(env_name(setting))
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_bool_env(value: str | None) -> bool | None:
    """True for "1", "true", "yes" or "on" (any case); None stays None."""
    if value is None:
        return None
    return value.strip().lower() in _TRUE_VALUES


def parse_int_env(value: str | None) -> int | None:
    """Parse an integer, returning None for missing or malformed values."""
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def read_bool_env(setting: str, environ: Mapping[str, str] | None = None) -> bool | None:
    return parse_bool_env(read_env(setting, environ))


def read_int_env(setting: str, environ: Mapping[str, str] | None = None) -> int | None:
    return parse_int_env(read_env(setting, environ))
