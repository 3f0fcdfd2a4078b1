"""Commands rendering widgets from data files (table, list, keys, viewport)."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from tw_common.config.env import read_env, read_int_env
from tw_common.errors import TWError
from tw_widgets.cli.output import emit, fail, fail_with, load_json
from tw_widgets.components import keyhelp, selectlist, table, viewport


DEFAULT_HELP_WIDTH = 80


def _columns_for(rows: list[dict]) -> list[table.TableColumn]:
    keys: list[str] = []
    for row in rows:
        for key in row:
            if key not in keys:
                keys.append(key)
    return [table.TableColumn(key=key, title=key) for key in keys]


def register_data_commands(app: typer.Typer) -> None:
    """Attach the file-driven render commands to ``app``."""

    @app.command("table")
    def render_table(
        file: Path = typer.Argument(..., help="JSON array of objects."),
        border: Optional[str] = typer.Option(
            None, "--border", "-b", help="Border preset (env TW_BORDER)."
        ),
        padding: int = typer.Option(1, "--padding", help="Spaces around cell content."),
        no_header: bool = typer.Option(False, "--no-header", help="Hide the header row."),
        select: Optional[int] = typer.Option(None, "--select", help="Mark a row as selected."),
    ) -> None:
        """Render a JSON array of objects as a table."""
        rows = load_json(file)
        if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
            fail(f"{file} must contain a JSON array of objects")
        try:
            model = table.create(
                columns=_columns_for(rows),
                rows=rows,
                border=border or read_env("border"),
                padding=padding,
                show_header=not no_header,
                selectable=select is not None,
                selected=-1 if select is None else select,
            )
        except TWError as exc:
            fail_with(exc)
        emit(table.view(model))

    @app.command("list")
    def render_list(
        file: Path = typer.Argument(..., help="JSON array of titles or item objects."),
        height: int = typer.Option(0, "--height", help="Visible rows (0 = all)."),
        select: int = typer.Option(0, "--select", help="Index to select."),
        filter_text: Optional[str] = typer.Option(None, "--filter", help="Filter by title."),
        fuzzy: bool = typer.Option(False, "--fuzzy", help="Use fuzzy matching for --filter."),
        descriptions: bool = typer.Option(False, "--descriptions", help="Show descriptions."),
    ) -> None:
        """Render a selectable list."""
        items = load_json(file)
        if not isinstance(items, list):
            fail(f"{file} must contain a JSON array")
        try:
            model = selectlist.create(
                items=items, height=height, show_descriptions=descriptions
            )
        except TWError as exc:
            fail_with(exc)
        if filter_text:
            if fuzzy:
                model = selectlist.filter_fuzzy(model, filter_text)
            else:
                model = selectlist.filter_by_title(model, filter_text)
        model = selectlist.select(model, select)
        emit(selectlist.view(model))

    @app.command("keys")
    def render_keys(
        file: Path = typer.Argument(..., help="JSON array of bindings or groups."),
        short: bool = typer.Option(False, "--short", help="Single-line summary."),
        boxed: bool = typer.Option(False, "--boxed", help="Draw a box around the help."),
        columns: int = typer.Option(0, "--columns", help="Column count (0 = auto)."),
        width: Optional[int] = typer.Option(
            None, "--width", help="Available width (env TW_WIDTH, default 80)."
        ),
    ) -> None:
        """Render key bindings as help text."""
        data = load_json(file)
        if not isinstance(data, list):
            fail(f"{file} must contain a JSON array")
        width = width or read_int_env("width") or DEFAULT_HELP_WIDTH
        grouped = bool(data) and all(isinstance(entry, dict) and "bindings" in entry for entry in data)
        try:
            if grouped:
                model = keyhelp.create(groups=data, columns=columns, width=width)
            else:
                model = keyhelp.create(bindings=data, columns=columns, width=width)
        except TWError as exc:
            fail_with(exc)
        if short:
            emit(keyhelp.view_short(model))
        elif boxed:
            emit(keyhelp.view_boxed(model))
        else:
            emit(keyhelp.view(model))

    @app.command("viewport")
    def render_viewport(
        file: Path = typer.Argument(..., help="Text file to display."),
        height: int = typer.Option(10, "--height", help="Visible lines."),
        width: int = typer.Option(0, "--width", help="Visible columns (0 = unlimited)."),
        line: int = typer.Option(0, "--line", help="Line to center in the window."),
    ) -> None:
        """Render a window of a text file with scroll indicators."""
        try:
            content = file.read_text(encoding="utf-8")
        except OSError as exc:
            fail(f"Cannot read {file}: {exc}")
        try:
            model = viewport.create(content=content, height=height, width=width)
        except TWError as exc:
            fail_with(exc)
        emit(viewport.view_with_indicators(viewport.scroll_to_center(model, line)))
