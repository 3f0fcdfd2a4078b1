"""Spinner widget: cycles through a fixed set of frames on each tick."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from pydantic import Field

from tw_widgets.core.options import WidgetOptions, resolve_options
from tw_widgets.core.presets import freeze, resolve_preset

SPINNER_FRAMES = freeze(
    {
        "line": ("-", "\\", "|", "/"),
        "dot": ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"),
        "minidot": ("⠋", "⠙", "⠚", "⠞", "⠖", "⠦", "⠴", "⠲", "⠳", "⠓"),
        "jump": ("⢄", "⢂", "⢁", "⡁", "⡈", "⡐", "⡠"),
        "pulse": ("█", "▓", "▒", "░"),
        "points": ("∙∙∙", "●∙∙", "∙●∙", "∙∙●"),
        "globe": ("🌍", "🌎", "🌏"),
        "moon": ("🌑", "🌒", "🌓", "🌔", "🌕", "🌖", "🌗", "🌘"),
        "clock": (
            "🕐", "🕑", "🕒", "🕓", "🕔", "🕕",
            "🕖", "🕗", "🕘", "🕙", "🕚", "🕛",
        ),
        "arrow": ("←", "↖", "↑", "↗", "→", "↘", "↓", "↙"),
        "bounce": ("⠁", "⠂", "⠄", "⠂"),
        "meter": ("▱▱▱", "▰▱▱", "▰▰▱", "▰▰▰", "▰▰▱", "▰▱▱"),
    }
)

DEFAULT_TYPE = "dot"


class SpinnerOptions(WidgetOptions):
    """Options for :func:`create`."""

    type: Optional[str] = Field(default=None, description="Name of a built-in frame set")
    frames: Optional[tuple[str, ...]] = Field(
        default=None, description="Custom frames; take precedence over type"
    )
    fps: float = Field(default=10.0, gt=0, description="Suggested ticks per second")


@dataclass(frozen=True)
class SpinnerModel:
    frames: tuple[str, ...]
    frame: int = 0
    fps: float = 10.0


def create(options: SpinnerOptions | None = None, **overrides) -> SpinnerModel:
    """Create a spinner from a named frame set or custom frames."""
    opts = resolve_options(SpinnerOptions, options, overrides)
    if opts.frames is not None:
        frames = tuple(opts.frames)
    else:
        frames = resolve_preset("spinner", SPINNER_FRAMES, opts.type, DEFAULT_TYPE)
    return SpinnerModel(frames=frames, frame=0, fps=opts.fps)


def tick(model: SpinnerModel) -> SpinnerModel:
    """Advance to the next frame, wrapping at the end."""
    if not model.frames:
        return model
    return replace(model, frame=(model.frame + 1) % len(model.frames))


def reset(model: SpinnerModel) -> SpinnerModel:
    return replace(model, frame=0)


def interval(model: SpinnerModel) -> float:
    """Seconds a caller should wait between ticks."""
    return 1.0 / model.fps


def view(model: SpinnerModel) -> str:
    if not model.frames:
        return ""
    return model.frames[model.frame % len(model.frames)]
