"""Timer widget: a stopwatch or countdown driven by a monotonic clock.

Elapsed time is an accumulated duration plus, while running, the time since
``start_time``. Pausing folds that live span into ``elapsed``. The widget owns
no scheduler: callers invoke :func:`tick` periodically so a countdown can
notice it has run out.

All times are milliseconds. Clock-reading functions take an optional ``now``
so callers (and tests) can supply a consistent reading.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Literal, Optional, get_args

from pydantic import Field

from tw_widgets.core.options import WidgetOptions, resolve_options

TimerMode = Literal["stopwatch", "countdown"]


class TimerState(str, Enum):
    """Lifecycle states of a timer."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


STATE_INDICATORS: dict[TimerState, str] = {
    TimerState.IDLE: "⏹",
    TimerState.RUNNING: "▶",
    TimerState.PAUSED: "⏸",
    TimerState.FINISHED: "✓",
}


def _now_ms() -> int:
    return time.monotonic_ns() // 1_000_000


def _resolve_now(now: Optional[float]) -> float:
    return _now_ms() if now is None else now


class TimerOptions(WidgetOptions):
    """Options for :func:`create`."""

    mode: TimerMode = "stopwatch"
    duration: float = Field(default=0, ge=0, description="Countdown length in ms")
    elapsed: float = Field(default=0, ge=0, description="Initial elapsed time in ms")
    auto_start: bool = False


@dataclass(frozen=True)
class TimerModel:
    mode: TimerMode
    duration: float
    elapsed: float
    state: TimerState
    start_time: Optional[float] = None
    pause_time: Optional[float] = None

    def __post_init__(self) -> None:
        if self.mode not in get_args(TimerMode):
            raise ValueError(f"unknown timer mode: {self.mode!r}")
        # plain strings are accepted; unknown states raise ValueError
        object.__setattr__(self, "state", TimerState(self.state))


def create(
    options: TimerOptions | None = None, *, now: Optional[float] = None, **overrides
) -> TimerModel:
    opts = resolve_options(TimerOptions, options, overrides)
    model = TimerModel(
        mode=opts.mode,
        duration=opts.duration,
        elapsed=opts.elapsed,
        state=TimerState.IDLE,
    )
    if opts.auto_start:
        return start(model, now=now)
    return model


def create_countdown(
    duration: float, auto_start: bool = False, *, now: Optional[float] = None
) -> TimerModel:
    return create(mode="countdown", duration=duration, auto_start=auto_start, now=now)


def create_stopwatch(auto_start: bool = False, *, now: Optional[float] = None) -> TimerModel:
    return create(mode="stopwatch", auto_start=auto_start, now=now)


def start(model: TimerModel, *, now: Optional[float] = None) -> TimerModel:
    if model.state in (TimerState.RUNNING, TimerState.FINISHED):
        return model
    return replace(
        model,
        state=TimerState.RUNNING,
        start_time=_resolve_now(now),
        pause_time=None,
    )


def pause(model: TimerModel, *, now: Optional[float] = None) -> TimerModel:
    if model.state != TimerState.RUNNING:
        return model
    current = _resolve_now(now)
    live = current - model.start_time if model.start_time is not None else 0
    return replace(
        model,
        state=TimerState.PAUSED,
        elapsed=model.elapsed + live,
        start_time=None,
        pause_time=current,
    )


def resume(model: TimerModel, *, now: Optional[float] = None) -> TimerModel:
    if model.state != TimerState.PAUSED:
        return model
    return replace(
        model,
        state=TimerState.RUNNING,
        start_time=_resolve_now(now),
        pause_time=None,
    )


def toggle(model: TimerModel, *, now: Optional[float] = None) -> TimerModel:
    """idle starts, running pauses, paused resumes, finished stays finished."""
    if model.state == TimerState.IDLE:
        return start(model, now=now)
    if model.state == TimerState.RUNNING:
        return pause(model, now=now)
    if model.state == TimerState.PAUSED:
        return resume(model, now=now)
    return model


def stop(model: TimerModel) -> TimerModel:
    return replace(
        model,
        state=TimerState.IDLE,
        elapsed=0,
        start_time=None,
        pause_time=None,
    )


def reset(model: TimerModel, *, now: Optional[float] = None) -> TimerModel:
    """Zero the elapsed time; a running timer keeps running from now."""
    was_running = model.state == TimerState.RUNNING
    return replace(
        model,
        elapsed=0,
        start_time=_resolve_now(now) if was_running else None,
        pause_time=None,
        state=TimerState.RUNNING if was_running else TimerState.IDLE,
    )


def tick(model: TimerModel, *, now: Optional[float] = None) -> TimerModel:
    """Finish a countdown whose duration has elapsed."""
    if model.state != TimerState.RUNNING or model.mode != "countdown":
        return model
    if get_elapsed(model, now=now) >= model.duration:
        return replace(
            model,
            state=TimerState.FINISHED,
            elapsed=model.duration,
            start_time=None,
        )
    return model


def get_elapsed(model: TimerModel, *, now: Optional[float] = None) -> float:
    if model.state == TimerState.RUNNING and model.start_time is not None:
        return model.elapsed + (_resolve_now(now) - model.start_time)
    return model.elapsed


def get_remaining(model: TimerModel, *, now: Optional[float] = None) -> float:
    if model.mode != "countdown":
        return 0
    return max(0, model.duration - get_elapsed(model, now=now))


def get_progress(model: TimerModel, *, now: Optional[float] = None) -> float:
    if model.mode != "countdown" or model.duration == 0:
        return 0.0
    return min(1.0, get_elapsed(model, now=now) / model.duration)


def is_finished(model: TimerModel) -> bool:
    return model.state == TimerState.FINISHED


def is_running(model: TimerModel) -> bool:
    return model.state == TimerState.RUNNING


def is_paused(model: TimerModel) -> bool:
    return model.state == TimerState.PAUSED


def format_time(ms: float, show_ms: bool = False) -> str:
    """Format as MM:SS, or HH:MM:SS once there is at least one hour.

    With ``show_ms`` a centisecond suffix is added: ``00:01.23``.
    """
    ms = int(ms)
    total_seconds = ms // 1000
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60

    result = f"{hours:02d}:" if hours > 0 else ""
    result += f"{minutes:02d}:{seconds:02d}"
    if show_ms:
        result += f".{(ms % 1000) // 10:02d}"
    return result


def format_time_compact(ms: float) -> str:
    """Format using the two coarsest units: ``1h 23m``, ``4m 5s`` or ``12s``."""
    total_seconds = int(ms) // 1000
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60

    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"


def view(model: TimerModel, show_ms: bool = False, *, now: Optional[float] = None) -> str:
    """Remaining time for a countdown, elapsed time for a stopwatch."""
    if model.mode == "countdown":
        return format_time(get_remaining(model, now=now), show_ms)
    return format_time(get_elapsed(model, now=now), show_ms)


def view_with_state(
    model: TimerModel, show_ms: bool = False, *, now: Optional[float] = None
) -> str:
    return f"{STATE_INDICATORS[model.state]} {view(model, show_ms, now=now)}"
