"""
Command-line interface for termwidgets.

Prints one rendered snapshot of a widget per command; useful for trying
presets and checking layouts against real data.
"""

from __future__ import annotations

import typer

from tw_common.logs.core import configure_logging
from tw_widgets.cli.commands.data import register_data_commands
from tw_widgets.cli.commands.inline import register_inline_commands

app = typer.Typer(help="Render terminal widgets from the command line.", no_args_is_help=True)


@app.callback()
def entry(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
) -> None:
    """Global options shared by every command."""
    configure_logging(debug=debug, force=True)


register_data_commands(app)
register_inline_commands(app)


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
