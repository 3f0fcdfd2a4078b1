"""Shared helpers for termwidgets."""

from tw_common.errors import ConfigurationError, TWError, UnknownPresetError
from tw_common.logs.core import configure_logging

__all__ = ["configure_logging", "ConfigurationError", "TWError", "UnknownPresetError"]
