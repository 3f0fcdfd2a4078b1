"""Progress bar widget: a clamped fraction rendered as a fixed-width bar."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Optional

from pydantic import Field

from tw_widgets.core.options import WidgetOptions, resolve_options
from tw_widgets.core.presets import freeze, resolve_preset


@dataclass(frozen=True)
class ProgressChars:
    full: str
    empty: str


PROGRESS_STYLES = freeze(
    {
        "default": ProgressChars(full="█", empty="░"),
        "ascii": ProgressChars(full="#", empty="-"),
        "dots": ProgressChars(full="●", empty="○"),
        "blocks": ProgressChars(full="▓", empty="░"),
        "line": ProgressChars(full="━", empty="─"),
        "thick": ProgressChars(full="█", empty="▁"),
    }
)

DEFAULT_STYLE = "default"
DEFAULT_STEP = 0.01


def default_format_percent(progress: float) -> str:
    return f" {_round_half_up(progress * 100)}%"


def _round_half_up(value: float) -> int:
    # round() uses banker's rounding; bars and labels round .5 up
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


class ProgressOptions(WidgetOptions):
    """Options for :func:`create`."""

    width: int = Field(default=40, ge=0, description="Bar width in cells")
    style: Optional[str] = Field(default=None, description="Name of a built-in style")
    chars: Optional[ProgressChars] = Field(default=None, description="Custom characters")
    show_percent: bool = True
    format_percent: Callable[[float], str] = default_format_percent
    left_bracket: str = ""
    right_bracket: str = ""


@dataclass(frozen=True)
class ProgressModel:
    progress: float
    width: int
    chars: ProgressChars
    show_percent: bool
    format_percent: Callable[[float], str]
    left_bracket: str
    right_bracket: str


def create(options: ProgressOptions | None = None, **overrides) -> ProgressModel:
    opts = resolve_options(ProgressOptions, options, overrides)
    chars = opts.chars or resolve_preset("progress", PROGRESS_STYLES, opts.style, DEFAULT_STYLE)
    return ProgressModel(
        progress=0.0,
        width=opts.width,
        chars=chars,
        show_percent=opts.show_percent,
        format_percent=opts.format_percent,
        left_bracket=opts.left_bracket,
        right_bracket=opts.right_bracket,
    )


def set(model: ProgressModel, progress: float) -> ProgressModel:  # noqa: A001
    """Set the progress fraction, clamped to [0, 1]."""
    return replace(model, progress=max(0.0, min(1.0, float(progress))))


def set_percent(model: ProgressModel, percent: float) -> ProgressModel:
    return set(model, percent / 100)


def increment(model: ProgressModel, amount: float = DEFAULT_STEP) -> ProgressModel:
    return set(model, model.progress + amount)


def decrement(model: ProgressModel, amount: float = DEFAULT_STEP) -> ProgressModel:
    return set(model, model.progress - amount)


def reset(model: ProgressModel) -> ProgressModel:
    return set(model, 0.0)


def complete(model: ProgressModel) -> ProgressModel:
    return set(model, 1.0)


def view(model: ProgressModel) -> str:
    filled_width = min(model.width, _round_half_up(model.progress * model.width))
    empty_width = model.width - filled_width

    bar = model.chars.full * filled_width + model.chars.empty * empty_width
    result = model.left_bracket + bar + model.right_bracket
    if model.show_percent:
        result += model.format_percent(model.progress)
    return result


def render(progress: float, options: ProgressOptions | None = None, **overrides) -> str:
    """Render a bar for ``progress`` without keeping a model around."""
    return view(set(create(options, **overrides), progress))
