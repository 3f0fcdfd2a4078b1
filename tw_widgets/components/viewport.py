"""Viewport widget: a scrollable window over a fixed block of text."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from pydantic import Field

from tw_widgets.core.options import WidgetOptions, resolve_options


class ViewportOptions(WidgetOptions):
    """Options for :func:`create`."""

    content: str = ""
    width: int = Field(default=0, ge=0, description="0 means as wide as the longest line")
    height: int = Field(default=10, ge=0)
    x_offset: int = Field(default=0, ge=0)
    y_offset: int = Field(default=0, ge=0)
    x_scroll_speed: int = Field(default=1, ge=0)
    y_scroll_speed: int = Field(default=1, ge=0)


@dataclass(frozen=True)
class ViewportModel:
    content: str
    lines: tuple[str, ...]
    width: int
    height: int
    x_offset: int
    y_offset: int
    x_scroll_speed: int
    y_scroll_speed: int


def _split(content: str) -> tuple[str, ...]:
    return tuple(content.split("\n"))


def _max_y_offset(lines: tuple[str, ...], height: int) -> int:
    return max(0, len(lines) - height)


def _max_x_offset(model: ViewportModel) -> int:
    longest = max((len(line) for line in model.lines), default=0)
    effective_width = model.width if model.width > 0 else longest
    return max(0, longest - effective_width)


def create(options: ViewportOptions | None = None, **overrides) -> ViewportModel:
    opts = resolve_options(ViewportOptions, options, overrides)
    lines = _split(opts.content)
    model = ViewportModel(
        content=opts.content,
        lines=lines,
        width=opts.width,
        height=opts.height,
        x_offset=opts.x_offset,
        y_offset=min(opts.y_offset, _max_y_offset(lines, opts.height)),
        x_scroll_speed=opts.x_scroll_speed,
        y_scroll_speed=opts.y_scroll_speed,
    )
    return _clamp_x(model)


def _clamp_x(model: ViewportModel) -> ViewportModel:
    x_offset = min(model.x_offset, _max_x_offset(model))
    return model if x_offset == model.x_offset else replace(model, x_offset=x_offset)


def set_content(model: ViewportModel, content: str) -> ViewportModel:
    """Replace the content, pulling the offsets back if it shrank."""
    lines = _split(content)
    updated = replace(
        model,
        content=content,
        lines=lines,
        y_offset=min(model.y_offset, _max_y_offset(lines, model.height)),
    )
    return _clamp_x(updated)


def set_size(model: ViewportModel, width: int, height: int) -> ViewportModel:
    updated = replace(
        model,
        width=width,
        height=height,
        y_offset=min(model.y_offset, _max_y_offset(model.lines, height)),
    )
    return _clamp_x(updated)


def scroll_up(model: ViewportModel, lines: Optional[int] = None) -> ViewportModel:
    amount = model.y_scroll_speed if lines is None else lines
    max_offset = _max_y_offset(model.lines, model.height)
    return replace(model, y_offset=max(0, min(max_offset, model.y_offset - amount)))


def scroll_down(model: ViewportModel, lines: Optional[int] = None) -> ViewportModel:
    amount = model.y_scroll_speed if lines is None else lines
    max_offset = _max_y_offset(model.lines, model.height)
    return replace(model, y_offset=max(0, min(max_offset, model.y_offset + amount)))


def scroll_left(model: ViewportModel, cols: Optional[int] = None) -> ViewportModel:
    amount = model.x_scroll_speed if cols is None else cols
    return replace(model, x_offset=max(0, min(_max_x_offset(model), model.x_offset - amount)))


def scroll_right(model: ViewportModel, cols: Optional[int] = None) -> ViewportModel:
    amount = model.x_scroll_speed if cols is None else cols
    return replace(model, x_offset=max(0, min(_max_x_offset(model), model.x_offset + amount)))


def scroll_to_top(model: ViewportModel) -> ViewportModel:
    return replace(model, y_offset=0)


def scroll_to_bottom(model: ViewportModel) -> ViewportModel:
    return replace(model, y_offset=_max_y_offset(model.lines, model.height))


def page_up(model: ViewportModel) -> ViewportModel:
    return scroll_up(model, model.height)


def page_down(model: ViewportModel) -> ViewportModel:
    return scroll_down(model, model.height)


def half_page_up(model: ViewportModel) -> ViewportModel:
    return scroll_up(model, model.height // 2)


def half_page_down(model: ViewportModel) -> ViewportModel:
    return scroll_down(model, model.height // 2)


def scroll_to_line(model: ViewportModel, line: int) -> ViewportModel:
    """Put ``line`` at the top of the window, as far as the content allows."""
    max_offset = _max_y_offset(model.lines, model.height)
    return replace(model, y_offset=max(0, min(max_offset, line)))


def scroll_to_center(model: ViewportModel, line: int) -> ViewportModel:
    return scroll_to_line(model, max(0, line - model.height // 2))


def get_scroll_percent(model: ViewportModel) -> int:
    """Percent scrolled; content that fits entirely reports 100."""
    max_offset = _max_y_offset(model.lines, model.height)
    if max_offset == 0:
        return 100
    return int(model.y_offset / max_offset * 100 + 0.5)


def at_top(model: ViewportModel) -> bool:
    return model.y_offset == 0


def at_bottom(model: ViewportModel) -> bool:
    return model.y_offset >= _max_y_offset(model.lines, model.height)


def get_visible_lines(model: ViewportModel) -> list[str]:
    return list(model.lines[model.y_offset : model.y_offset + model.height])


def get_line_count(model: ViewportModel) -> int:
    return len(model.lines)


def view(model: ViewportModel) -> str:
    rendered: list[str] = []
    for line in get_visible_lines(model):
        if model.x_offset > 0:
            line = line[model.x_offset :]
        if model.width > 0:
            line = line[: model.width]
        rendered.append(line)

    rendered.extend([""] * (model.height - len(rendered)))
    return "\n".join(rendered)


def view_with_indicators(model: ViewportModel) -> str:
    if at_top(model):
        indicator = "↑"
    elif at_bottom(model):
        indicator = "↓"
    else:
        indicator = "↕"
    return f"{view(model)}\n{indicator} {get_scroll_percent(model)}%"
