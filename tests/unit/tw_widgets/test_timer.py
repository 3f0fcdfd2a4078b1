"""Tests for the timer widget."""

from __future__ import annotations

import pytest

from tw_widgets.components import timer
from tw_widgets.components.timer import TimerState

pytestmark = pytest.mark.unit_widgets


def test_create_defaults() -> None:
    model = timer.create()

    assert model.mode == "stopwatch"
    assert model.state == TimerState.IDLE
    assert model.elapsed == 0
    assert model.start_time is None


def test_auto_start_uses_now() -> None:
    model = timer.create_stopwatch(auto_start=True, now=500)

    assert model.state == TimerState.RUNNING
    assert model.start_time == 500


def test_stopwatch_elapsed() -> None:
    model = timer.start(timer.create_stopwatch(), now=1000)

    assert timer.get_elapsed(model, now=3500) == 2500
    assert timer.view(model, now=3500) == "00:02"


def test_pause_folds_live_time() -> None:
    model = timer.start(timer.create_stopwatch(), now=0)
    model = timer.pause(model, now=1500)

    assert model.state == TimerState.PAUSED
    assert model.elapsed == 1500
    assert timer.get_elapsed(model, now=99999) == 1500

    model = timer.resume(model, now=2000)
    assert timer.get_elapsed(model, now=2500) == 2000


def test_toggle_cycles_states() -> None:
    model = timer.create_stopwatch()

    model = timer.toggle(model, now=0)
    assert timer.is_running(model)
    model = timer.toggle(model, now=10)
    assert timer.is_paused(model)
    model = timer.toggle(model, now=20)
    assert timer.is_running(model)


def test_start_is_noop_when_running() -> None:
    model = timer.start(timer.create_stopwatch(), now=0)

    assert timer.start(model, now=50) is model


def test_countdown_finishes_and_pins_elapsed() -> None:
    model = timer.create_countdown(1000, auto_start=True, now=0)

    assert timer.tick(model, now=999) is model
    finished = timer.tick(model, now=1000)
    assert timer.is_finished(finished)
    assert finished.elapsed == 1000
    assert timer.get_remaining(finished) == 0
    assert timer.tick(finished, now=5000) is finished


def test_finished_timer_ignores_start_and_toggle() -> None:
    finished = timer.tick(timer.create_countdown(10, auto_start=True, now=0), now=20)

    assert timer.start(finished, now=30) is finished
    assert timer.toggle(finished, now=30) is finished


def test_tick_ignores_stopwatch() -> None:
    model = timer.start(timer.create_stopwatch(), now=0)

    assert timer.tick(model, now=10**9) is model


def test_countdown_remaining_and_progress() -> None:
    model = timer.create_countdown(4000, auto_start=True, now=0)

    assert timer.get_remaining(model, now=1000) == 3000
    assert timer.get_progress(model, now=1000) == pytest.approx(0.25)
    assert timer.get_progress(model, now=9000) == 1.0
    assert timer.view(model, now=1000) == "00:03"


def test_progress_for_stopwatch_and_zero_duration() -> None:
    assert timer.get_progress(timer.create_stopwatch()) == 0.0
    assert timer.get_progress(timer.create_countdown(0)) == 0.0
    assert timer.get_remaining(timer.create_stopwatch()) == 0


def test_stop_and_reset() -> None:
    running = timer.start(timer.create_stopwatch(), now=0)

    stopped = timer.stop(running)
    assert stopped.state == TimerState.IDLE
    assert stopped.elapsed == 0

    reset = timer.reset(running, now=700)
    assert reset.state == TimerState.RUNNING
    assert reset.start_time == 700
    assert timer.get_elapsed(reset, now=800) == 100

    paused = timer.pause(running, now=100)
    assert timer.reset(paused).state == TimerState.IDLE


def test_clock_defaults_to_monotonic() -> None:
    model = timer.start(timer.create_stopwatch())

    assert model.start_time is not None
    assert timer.get_elapsed(model) >= 0


@pytest.mark.parametrize(
    ("ms", "show_ms", "expected"),
    [
        (0, False, "00:00"),
        (65000, False, "01:05"),
        (3665000, False, "01:01:05"),
        (1234, True, "00:01.23"),
        (59999, False, "00:59"),
    ],
)
def test_format_time(ms: int, show_ms: bool, expected: str) -> None:
    assert timer.format_time(ms, show_ms) == expected


@pytest.mark.parametrize(
    ("ms", "expected"),
    [(125000, "2m 5s"), (12000, "12s"), (4980000, "1h 23m"), (0, "0s")],
)
def test_format_time_compact(ms: int, expected: str) -> None:
    assert timer.format_time_compact(ms) == expected


def test_view_with_state() -> None:
    model = timer.create_stopwatch()

    assert timer.view_with_state(model) == "⏹ 00:00"
    running = timer.start(model, now=0)
    assert timer.view_with_state(running, now=1000) == "▶ 00:01"
    assert timer.view_with_state(timer.pause(running, now=1000)) == "⏸ 00:01"
    finished = timer.tick(timer.create_countdown(10, auto_start=True, now=0), now=10)
    assert timer.view_with_state(finished) == "✓ 00:00"


def test_state_is_an_enum() -> None:
    model = timer.start(timer.create_stopwatch(), now=0)

    assert model.state is TimerState.RUNNING
    assert model.state == "running"


def test_model_coerces_plain_state_strings() -> None:
    model = timer.TimerModel(mode="countdown", duration=10, elapsed=0, state="paused")

    assert model.state is TimerState.PAUSED
    assert timer.is_paused(model)


@pytest.mark.parametrize(
    ("mode", "state"), [("stopwatch", "sleeping"), ("hourglass", "idle")]
)
def test_model_rejects_unknown_state_or_mode(mode: str, state: str) -> None:
    with pytest.raises(ValueError):
        timer.TimerModel(mode=mode, duration=0, elapsed=0, state=state)  # type: ignore[arg-type]
