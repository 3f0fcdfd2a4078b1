"""Tests for the spinner widget."""

from __future__ import annotations

import pytest

from tw_common.errors import ConfigurationError, UnknownPresetError
from tw_widgets.components import spinner
from tw_widgets.components.spinner import SPINNER_FRAMES

pytestmark = pytest.mark.unit_widgets


@pytest.mark.parametrize(
    ("name", "length"),
    [("line", 4), ("dot", 10), ("minidot", 10), ("moon", 8), ("clock", 12), ("globe", 3)],
)
def test_preset_frame_counts(name: str, length: int) -> None:
    assert len(SPINNER_FRAMES[name]) == length


def test_create_defaults_to_dot() -> None:
    model = spinner.create()

    assert model.frames == SPINNER_FRAMES["dot"]
    assert model.frame == 0
    assert spinner.view(model) == "⠋"


def test_custom_frames_take_precedence() -> None:
    model = spinner.create(type="moon", frames=["a", "b"])

    assert model.frames == ("a", "b")


def test_tick_wraps_after_last_frame() -> None:
    model = spinner.create(type="line")
    seen = []
    for _ in range(5):
        seen.append(spinner.view(model))
        model = spinner.tick(model)

    assert seen == ["-", "\\", "|", "/", "-"]


def test_tick_does_not_mutate() -> None:
    model = spinner.create(type="line")
    spinner.tick(model)

    assert model.frame == 0


def test_reset_returns_to_first_frame() -> None:
    model = spinner.tick(spinner.tick(spinner.create(type="arrow")))

    assert spinner.reset(model).frame == 0


def test_empty_frames() -> None:
    model = spinner.create(frames=[])

    assert spinner.tick(model) is model
    assert spinner.view(model) == ""


def test_interval_follows_fps() -> None:
    assert spinner.interval(spinner.create()) == pytest.approx(0.1)
    assert spinner.interval(spinner.create(fps=4)) == pytest.approx(0.25)


def test_unknown_type_raises() -> None:
    with pytest.raises(UnknownPresetError):
        spinner.create(type="nope")


def test_invalid_fps_raises() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        spinner.create(fps=0)

    assert excinfo.value.context["options"] == "SpinnerOptions"
    assert any(error.startswith("fps") for error in excinfo.value.context["errors"])
