"""Command-line demo for termwidgets."""

from tw_widgets.cli.main import app, main

__all__ = ["app", "main"]
