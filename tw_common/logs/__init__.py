"""Logging setup shared by the widgets and the CLI."""

from tw_common.logs.core import configure_logging

__all__ = ["configure_logging"]
