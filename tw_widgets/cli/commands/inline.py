"""Commands rendering widgets from command-line values alone."""

from __future__ import annotations

from typing import Optional

import typer

from tw_common.errors import TWError
from tw_widgets.cli.output import emit, fail_with
from tw_widgets.components import progress, spinner, timer


def register_inline_commands(app: typer.Typer) -> None:
    """Attach the value-driven render commands to ``app``."""

    @app.command("progress")
    def render_progress(
        value: float = typer.Argument(..., help="Progress fraction (0-1), or percent with --percent."),
        percent: bool = typer.Option(False, "--percent", help="Treat VALUE as 0-100."),
        width: int = typer.Option(40, "--width", help="Bar width."),
        style: Optional[str] = typer.Option(None, "--style", help="Bar style preset."),
        no_percent: bool = typer.Option(False, "--no-percent", help="Hide the percent label."),
    ) -> None:
        """Render a progress bar."""
        try:
            model = progress.create(width=width, style=style, show_percent=not no_percent)
        except TWError as exc:
            fail_with(exc)
        model = progress.set_percent(model, value) if percent else progress.set(model, value)
        emit(progress.view(model))

    @app.command("spinner")
    def render_spinner(
        type_: Optional[str] = typer.Option(None, "--type", help="Frame set preset."),
        frames: bool = typer.Option(False, "--frames", help="Print every frame."),
    ) -> None:
        """Print a spinner's first frame (or all of them)."""
        try:
            model = spinner.create(type=type_)
        except TWError as exc:
            fail_with(exc)
        if not frames:
            emit(spinner.view(model))
            return
        shown: list[str] = []
        for _ in model.frames:
            shown.append(spinner.view(model))
            model = spinner.tick(model)
        emit(" ".join(shown))

    @app.command("time")
    def render_time(
        ms: int = typer.Argument(..., help="Duration in milliseconds."),
        compact: bool = typer.Option(False, "--compact", help="Use the compact form."),
        show_ms: bool = typer.Option(False, "--ms", help="Add centiseconds."),
    ) -> None:
        """Format a duration the way the timer widget does."""
        if compact:
            emit(timer.format_time_compact(ms))
        else:
            emit(timer.format_time(ms, show_ms))
