"""Table widget: content-sized columns drawn inside a configurable border grid.

Column widths are recomputed from scratch whenever the rows change. For each
column the width starts at the title length and grows to the longest
formatted cell. A fixed ``width`` then replaces that value outright (content
longer than the column is truncated when drawn); otherwise the width is
clamped into ``[min_width, max_width]``, each bound being optional.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Generic, Iterable, Literal, Mapping, Optional, TypeVar, Union

from pydantic import Field, InstanceOf, field_validator

from tw_widgets.core.options import WidgetOptions, resolve_options
from tw_widgets.core.presets import freeze, resolve_preset

logger = logging.getLogger(__name__)

T = TypeVar("T")

Align = Literal["left", "center", "right"]

DEFAULT_BORDER = "single"
UNSELECTED_PREFIX = "  "


@dataclass(frozen=True)
class TableColumn(Generic[T]):
    key: str
    title: str
    width: Optional[int] = None
    min_width: Optional[int] = None
    max_width: Optional[int] = None
    align: Align = "left"
    format: Optional[Callable[[Any, T], str]] = None


@dataclass(frozen=True)
class TableBorder:
    top: str
    top_left: str
    top_right: str
    top_mid: str
    bottom: str
    bottom_left: str
    bottom_right: str
    bottom_mid: str
    left: str
    right: str
    mid: str
    mid_left: str
    mid_right: str
    mid_mid: str
    horizontal: str
    vertical: str


TABLE_BORDERS = freeze(
    {
        "none": TableBorder(
            top="", top_left="", top_right="", top_mid="",
            bottom="", bottom_left="", bottom_right="", bottom_mid="",
            left="", right="", mid="",
            mid_left="", mid_right="", mid_mid="",
            horizontal="", vertical=" ",
        ),
        "simple": TableBorder(
            top="-", top_left="", top_right="", top_mid="",
            bottom="-", bottom_left="", bottom_right="", bottom_mid="",
            left="", right="", mid="-",
            mid_left="", mid_right="", mid_mid="",
            horizontal="-", vertical=" | ",
        ),
        "rounded": TableBorder(
            top="─", top_left="╭", top_right="╮", top_mid="┬",
            bottom="─", bottom_left="╰", bottom_right="╯", bottom_mid="┴",
            left="│", right="│", mid="─",
            mid_left="├", mid_right="┤", mid_mid="┼",
            horizontal="─", vertical="│",
        ),
        "single": TableBorder(
            top="─", top_left="┌", top_right="┐", top_mid="┬",
            bottom="─", bottom_left="└", bottom_right="┘", bottom_mid="┴",
            left="│", right="│", mid="─",
            mid_left="├", mid_right="┤", mid_mid="┼",
            horizontal="─", vertical="│",
        ),
        "double": TableBorder(
            top="═", top_left="╔", top_right="╗", top_mid="╦",
            bottom="═", bottom_left="╚", bottom_right="╝", bottom_mid="╩",
            left="║", right="║", mid="═",
            mid_left="╠", mid_right="╣", mid_mid="╬",
            horizontal="═", vertical="║",
        ),
        "thick": TableBorder(
            top="━", top_left="┏", top_right="┓", top_mid="┳",
            bottom="━", bottom_left="┗", bottom_right="┛", bottom_mid="┻",
            left="┃", right="┃", mid="━",
            mid_left="┣", mid_right="┫", mid_mid="╋",
            horizontal="━", vertical="┃",
        ),
    }
)


def coerce_column(raw: Any) -> TableColumn:
    if isinstance(raw, TableColumn):
        return raw
    if isinstance(raw, Mapping):
        return TableColumn(**raw)
    raise ValueError(f"cannot build a table column from {type(raw).__name__}")


class TableOptions(WidgetOptions):
    """Options for :func:`create`."""

    columns: tuple[InstanceOf[TableColumn], ...]
    rows: tuple[Any, ...] = ()
    border: Union[str, InstanceOf[TableBorder], None] = None
    show_header: bool = True
    show_header_separator: bool = True
    padding: int = Field(default=1, ge=0)
    selected: int = Field(default=-1, ge=-1, description="-1 means no selection")
    cursor: str = "→"
    selectable: bool = False

    @field_validator("columns", mode="before")
    @classmethod
    def _coerce_columns(cls, value: Any) -> Any:
        if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
            return value
        try:
            return tuple(coerce_column(raw) for raw in value)
        except TypeError as exc:
            raise ValueError(str(exc)) from exc


@dataclass(frozen=True)
class TableModel(Generic[T]):
    columns: tuple[TableColumn[T], ...]
    rows: tuple[T, ...]
    border: TableBorder
    show_header: bool
    show_header_separator: bool
    padding: int
    selected: int
    cursor: str
    selectable: bool
    column_widths: tuple[int, ...]


def resolve_border(border: Union[str, TableBorder, None]) -> TableBorder:
    if isinstance(border, TableBorder):
        return border
    return resolve_preset("border", TABLE_BORDERS, border, DEFAULT_BORDER)


def create(options: TableOptions | None = None, **overrides) -> TableModel:
    opts = resolve_options(TableOptions, options, overrides)
    columns = tuple(opts.columns)
    rows = tuple(opts.rows)
    return TableModel(
        columns=columns,
        rows=rows,
        border=resolve_border(opts.border),
        show_header=opts.show_header,
        show_header_separator=opts.show_header_separator,
        padding=opts.padding,
        selected=min(opts.selected, len(rows) - 1),
        cursor=opts.cursor,
        selectable=opts.selectable,
        column_widths=compute_column_widths(columns, rows),
    )


def _get_value(row: Any, key: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(key)
    return getattr(row, key, None)


def get_cell_text(column: TableColumn[T], row: T) -> str:
    """Text shown for ``row`` in ``column``: the formatter's output or the raw value."""
    value = _get_value(row, column.key)
    if column.format is not None:
        return column.format(value, row)
    return "" if value is None else str(value)


def compute_column_widths(
    columns: Iterable[TableColumn[T]], rows: Iterable[T]
) -> tuple[int, ...]:
    rows = tuple(rows)
    widths: list[int] = []
    for column in columns:
        width = len(column.title)
        for row in rows:
            width = max(width, len(get_cell_text(column, row)))

        if column.width:
            width = column.width
        else:
            if column.min_width:
                width = max(width, column.min_width)
            if column.max_width:
                width = min(width, column.max_width)
        widths.append(width)
    return tuple(widths)


def set_rows(model: TableModel[T], rows: Iterable[T]) -> TableModel[T]:
    """Replace the rows; widths are recomputed and the selection clamped."""
    new_rows = tuple(rows)
    return replace(
        model,
        rows=new_rows,
        column_widths=compute_column_widths(model.columns, new_rows),
        selected=min(model.selected, len(new_rows) - 1),
    )


def select_row(model: TableModel[T], index: int) -> TableModel[T]:
    """Select ``index``, or clear the selection with -1."""
    if index < -1 or index >= len(model.rows):
        logger.debug("Ignoring select of out-of-range row %d", index)
        return model
    return replace(model, selected=index)


def move_up(model: TableModel[T]) -> TableModel[T]:
    if not model.selectable or not model.rows:
        return model
    selected = len(model.rows) - 1 if model.selected <= 0 else model.selected - 1
    return replace(model, selected=selected)


def move_down(model: TableModel[T]) -> TableModel[T]:
    if not model.selectable or not model.rows:
        return model
    selected = 0 if model.selected >= len(model.rows) - 1 else model.selected + 1
    return replace(model, selected=selected)


def get_selected(model: TableModel[T]) -> Optional[T]:
    if 0 <= model.selected < len(model.rows):
        return model.rows[model.selected]
    return None


def _pad_cell(text: str, width: int, align: Align) -> str:
    if len(text) >= width:
        return text[:width]
    if align == "right":
        return text.rjust(width)
    if align == "center":
        left = (width - len(text)) // 2
        return " " * left + text + " " * (width - len(text) - left)
    return text.ljust(width)


def _border_line(
    model: TableModel[T], left: str, mid: str, right: str, horizontal: str
) -> Optional[str]:
    if not horizontal:
        return None
    segments = [horizontal * (width + model.padding * 2) for width in model.column_widths]
    line = left + mid.join(segments) + right
    if model.selectable:
        line = UNSELECTED_PREFIX + line
    return line


def _render_row(model: TableModel[T], cells: list[str], is_selected: bool) -> str:
    pad = " " * model.padding
    rendered = [
        pad + _pad_cell(cell, model.column_widths[i], model.columns[i].align) + pad
        for i, cell in enumerate(cells)
    ]
    line = model.border.left + model.border.vertical.join(rendered) + model.border.right
    if model.selectable:
        prefix = model.cursor + " " if is_selected else UNSELECTED_PREFIX
        line = prefix + line
    return line


def view(model: TableModel[T]) -> str:
    border = model.border
    lines: list[str] = []

    top = _border_line(model, border.top_left, border.top_mid, border.top_right, border.top)
    if top is not None:
        lines.append(top)

    if model.show_header:
        lines.append(_render_row(model, [column.title for column in model.columns], False))
        if model.show_header_separator:
            separator = _border_line(
                model, border.mid_left, border.mid_mid, border.mid_right, border.mid
            )
            if separator is not None:
                lines.append(separator)

    for index, row in enumerate(model.rows):
        cells = [get_cell_text(column, row) for column in model.columns]
        lines.append(_render_row(model, cells, index == model.selected))

    bottom = _border_line(
        model, border.bottom_left, border.bottom_mid, border.bottom_right, border.bottom
    )
    if bottom is not None:
        lines.append(bottom)

    return "\n".join(lines)
