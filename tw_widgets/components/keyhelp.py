"""Help widget: renders key bindings as a list, grouped sections or columns."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Any, Iterable, Mapping, Optional

from pydantic import Field, InstanceOf, field_validator

from tw_widgets.core.options import WidgetOptions, resolve_options

logger = logging.getLogger(__name__)

# rough allowance for a description when estimating column widths
ESTIMATED_DESCRIPTION_WIDTH = 20
SHORT_SEPARATOR = "  •  "
GROUP_RULE = "─"


@dataclass(frozen=True)
class KeyBinding:
    key: str
    description: str


@dataclass(frozen=True)
class KeyBindingGroup:
    bindings: tuple[KeyBinding, ...]
    title: Optional[str] = None


def coerce_binding(raw: Any) -> KeyBinding:
    if isinstance(raw, KeyBinding):
        return raw
    if isinstance(raw, Mapping):
        missing = [name for name in ("key", "description") if name not in raw]
        if missing:
            raise ValueError(f"key binding is missing {', '.join(missing)}")
        return KeyBinding(key=raw["key"], description=raw["description"])
    if isinstance(raw, (tuple, list)) and len(raw) == 2:
        return KeyBinding(key=raw[0], description=raw[1])
    raise ValueError(f"cannot build a key binding from {raw!r}")


def coerce_group(raw: Any) -> KeyBindingGroup:
    if isinstance(raw, KeyBindingGroup):
        return raw
    if isinstance(raw, Mapping):
        bindings = raw.get("bindings", ())
        if isinstance(bindings, (str, bytes)) or not isinstance(bindings, Iterable):
            raise ValueError(f"group bindings must be a list, got {type(bindings).__name__}")
        return KeyBindingGroup(
            bindings=tuple(coerce_binding(b) for b in bindings),
            title=raw.get("title"),
        )
    raise ValueError(f"cannot build a key binding group from {raw!r}")


def _flatten(groups: Iterable[KeyBindingGroup]) -> tuple[KeyBinding, ...]:
    return tuple(binding for group in groups for binding in group.bindings)


class HelpOptions(WidgetOptions):
    """Options for :func:`create`."""

    bindings: tuple[InstanceOf[KeyBinding], ...] = ()
    groups: Optional[tuple[InstanceOf[KeyBindingGroup], ...]] = None
    width: int = Field(default=80, ge=0)
    separator: str = " → "
    column_gap: int = Field(default=4, ge=0)
    columns: int = Field(default=0, ge=0, description="0 derives the count from width")
    full_screen: bool = False

    @field_validator("bindings", mode="before")
    @classmethod
    def _coerce_bindings(cls, value: Any) -> Any:
        if isinstance(value, Iterable) and not isinstance(value, (str, bytes)):
            try:
                return tuple(coerce_binding(raw) for raw in value)
            except (KeyError, TypeError) as exc:
                raise ValueError(str(exc)) from exc
        return value

    @field_validator("groups", mode="before")
    @classmethod
    def _coerce_groups(cls, value: Any) -> Any:
        if isinstance(value, Iterable) and not isinstance(value, (str, bytes)):
            try:
                return tuple(coerce_group(raw) for raw in value)
            except (KeyError, TypeError) as exc:
                raise ValueError(str(exc)) from exc
        return value


@dataclass(frozen=True)
class HelpModel:
    bindings: tuple[KeyBinding, ...]
    groups: tuple[KeyBindingGroup, ...]
    width: int
    separator: str
    column_gap: int
    columns: int
    full_screen: bool


def create(options: HelpOptions | None = None, **overrides) -> HelpModel:
    opts = resolve_options(HelpOptions, options, overrides)
    if opts.groups is not None:
        groups = tuple(opts.groups)
        if opts.bindings:
            logger.debug("Both bindings and groups given; bindings mirror the groups")
        bindings = _flatten(groups)
    else:
        bindings = tuple(opts.bindings)
        groups = (KeyBindingGroup(bindings=bindings),) if bindings else ()
    return HelpModel(
        bindings=bindings,
        groups=groups,
        width=opts.width,
        separator=opts.separator,
        column_gap=opts.column_gap,
        columns=opts.columns,
        full_screen=opts.full_screen,
    )


def add_binding(model: HelpModel, key: str, description: str) -> HelpModel:
    """Append a binding to the last group (creating an untitled one if needed)."""
    binding = KeyBinding(key=key, description=description)
    if model.groups:
        last = model.groups[-1]
        groups = model.groups[:-1] + (replace(last, bindings=last.bindings + (binding,)),)
    else:
        groups = (KeyBindingGroup(bindings=(binding,)),)
    return replace(model, bindings=model.bindings + (binding,), groups=groups)


def add_bindings(model: HelpModel, bindings: Iterable[Any]) -> HelpModel:
    for binding in (coerce_binding(raw) for raw in bindings):
        model = add_binding(model, binding.key, binding.description)
    return model


def add_group(model: HelpModel, group: Any) -> HelpModel:
    group = coerce_group(group)
    return replace(
        model,
        groups=model.groups + (group,),
        bindings=model.bindings + group.bindings,
    )


def set_bindings(model: HelpModel, bindings: Iterable[Any]) -> HelpModel:
    new_bindings = tuple(coerce_binding(raw) for raw in bindings)
    groups = (KeyBindingGroup(bindings=new_bindings),) if new_bindings else ()
    return replace(model, bindings=new_bindings, groups=groups)


def set_groups(model: HelpModel, groups: Iterable[Any]) -> HelpModel:
    new_groups = tuple(coerce_group(raw) for raw in groups)
    return replace(model, groups=new_groups, bindings=_flatten(new_groups))


def _max_key_width(bindings: Iterable[KeyBinding]) -> int:
    return max((len(binding.key) for binding in bindings), default=0)


def _render_binding(binding: KeyBinding, key_width: int, separator: str) -> str:
    return binding.key.ljust(key_width) + separator + binding.description


def _column_count(model: HelpModel, key_width: int) -> int:
    if model.columns > 0:
        return model.columns
    item_width = key_width + len(model.separator) + ESTIMATED_DESCRIPTION_WIDTH
    return max(1, model.width // (item_width + model.column_gap))


def _render_columns(model: HelpModel, bindings: tuple[KeyBinding, ...]) -> list[str]:
    if not bindings:
        return []

    key_width = _max_key_width(bindings)
    columns = _column_count(model, key_width)
    row_count = math.ceil(len(bindings) / columns)
    rendered = [_render_binding(b, key_width, model.separator) for b in bindings]

    # column-major: column c holds rendered[c * row_count:(c + 1) * row_count]
    column_widths = [
        max((len(text) for text in rendered[c * row_count : (c + 1) * row_count]), default=0)
        for c in range(columns)
    ]
    gap = " " * model.column_gap

    lines: list[str] = []
    for row in range(row_count):
        cells = [
            (col, rendered[row + col * row_count])
            for col in range(columns)
            if row + col * row_count < len(rendered)
        ]
        parts = [
            text if i == len(cells) - 1 else text.ljust(column_widths[col])
            for i, (col, text) in enumerate(cells)
        ]
        lines.append(gap.join(parts))
    return lines


def view_simple(model: HelpModel) -> str:
    key_width = _max_key_width(model.bindings)
    return "\n".join(_render_binding(b, key_width, model.separator) for b in model.bindings)


def view_grouped(model: HelpModel) -> str:
    lines: list[str] = []
    for index, group in enumerate(model.groups):
        if index > 0:
            lines.append("")
        if group.title:
            lines.append(group.title)
            lines.append(GROUP_RULE * len(group.title))
        key_width = _max_key_width(group.bindings)
        lines.extend(_render_binding(b, key_width, model.separator) for b in group.bindings)
    return "\n".join(lines)


def view_columns(model: HelpModel) -> str:
    return "\n".join(_render_columns(model, _flatten(model.groups)))


def view(model: HelpModel) -> str:
    """Grouped view for titled or multiple groups, else columns (or simple for one column)."""
    if len(model.groups) > 1 or any(group.title for group in model.groups):
        return view_grouped(model)
    if model.columns != 1:
        return view_columns(model)
    return view_simple(model)


def view_short(model: HelpModel, max_bindings: int = 5) -> str:
    """Single-line summary of the first ``max_bindings`` bindings."""
    return SHORT_SEPARATOR.join(
        f"{binding.key} {binding.description}" for binding in model.bindings[:max_bindings]
    )


def view_boxed(model: HelpModel) -> str:
    lines = view(model).split("\n")
    inner = max((len(line) for line in lines), default=0)

    boxed = ["┌" + "─" * (inner + 2) + "┐"]
    boxed.extend("│ " + line.ljust(inner) + " │" for line in lines)
    boxed.append("└" + "─" * (inner + 2) + "┘")
    return "\n".join(boxed)
