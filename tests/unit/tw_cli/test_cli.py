"""CLI rendering commands."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from tw_widgets.cli.main import app


pytestmark = pytest.mark.unit_cli

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _write_json(tmp_path: Path, name: str, payload: object) -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_table_renders_rows(tmp_path: Path) -> None:
    path = _write_json(tmp_path, "rows.json", [{"name": "Alice", "age": 30}, {"name": "Bob", "age": 25}])

    result = runner.invoke(app, ["table", str(path)])

    assert result.exit_code == 0, result.output
    assert "┌" in result.output
    assert "Alice" in result.output
    assert "age" in result.output


def test_table_border_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = _write_json(tmp_path, "rows.json", [{"name": "Alice"}])
    monkeypatch.setenv("TW_BORDER", "double")

    result = runner.invoke(app, ["table", str(path)])

    assert result.exit_code == 0, result.output
    assert "╔" in result.output


def test_table_unknown_border_fails(tmp_path: Path) -> None:
    path = _write_json(tmp_path, "rows.json", [{"name": "Alice"}])

    result = runner.invoke(app, ["table", str(path), "--border", "wavy"])

    assert result.exit_code == 1
    assert "Unknown border preset" in result.output


def test_table_rejects_non_object_rows(tmp_path: Path) -> None:
    path = _write_json(tmp_path, "rows.json", [1, 2])

    result = runner.invoke(app, ["table", str(path)])

    assert result.exit_code == 1
    assert "array of objects" in result.output


def test_table_reports_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    result = runner.invoke(app, ["table", str(path)])

    assert result.exit_code == 1
    assert "Invalid JSON" in result.output


def test_list_select_and_filter(tmp_path: Path) -> None:
    path = _write_json(tmp_path, "items.json", ["apple", "banana", "cherry"])

    selected = runner.invoke(app, ["list", str(path), "--select", "1"])
    assert selected.exit_code == 0, selected.output
    assert "> banana" in selected.output
    assert "  apple" in selected.output

    filtered = runner.invoke(app, ["list", str(path), "--filter", "an"])
    assert filtered.exit_code == 0, filtered.output
    assert "> banana" in filtered.output
    assert "apple" not in filtered.output


def test_keys_short(tmp_path: Path) -> None:
    path = _write_json(tmp_path, "keys.json", [["q", "quit"], {"key": "?", "description": "help"}])

    result = runner.invoke(app, ["keys", str(path), "--short"])

    assert result.exit_code == 0, result.output
    assert "q quit  •  ? help" in result.output


def test_keys_grouped(tmp_path: Path) -> None:
    path = _write_json(
        tmp_path,
        "keys.json",
        [{"title": "Navigation", "bindings": [["j", "down"], ["k", "up"]]}],
    )

    result = runner.invoke(app, ["keys", str(path)])

    assert result.exit_code == 0, result.output
    assert "Navigation" in result.output
    assert "j → down" in result.output


def test_viewport_centers_line(tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    path.write_text("\n".join(f"line {i}" for i in range(30)), encoding="utf-8")

    result = runner.invoke(app, ["viewport", str(path), "--height", "5", "--line", "20"])

    assert result.exit_code == 0, result.output
    assert "line 18" in result.output
    assert "line 17" not in result.output
    assert "↕" in result.output


def test_progress_bar() -> None:
    result = runner.invoke(app, ["progress", "0.5", "--width", "10"])

    assert result.exit_code == 0, result.output
    assert "█████░░░░░ 50%" in result.output


def test_progress_percent_without_label() -> None:
    result = runner.invoke(app, ["progress", "75", "--percent", "--width", "4", "--no-percent"])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "███░"


def test_progress_unknown_style_fails() -> None:
    result = runner.invoke(app, ["progress", "0.5", "--style", "sparkles"])

    assert result.exit_code == 1


def test_spinner_frames() -> None:
    result = runner.invoke(app, ["spinner", "--type", "line", "--frames"])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "- \\ | /"


def test_time_formats() -> None:
    compact = runner.invoke(app, ["time", "125000", "--compact"])
    precise = runner.invoke(app, ["--debug", "time", "1234", "--ms"])

    assert compact.output.strip() == "2m 5s"
    assert precise.exit_code == 0, precise.output
    assert "00:01.23" in precise.output


def test_keys_malformed_binding_fails_cleanly(tmp_path: Path) -> None:
    path = _write_json(tmp_path, "keys.json", [{"key": "q"}])

    result = runner.invoke(app, ["keys", str(path)])

    assert result.exit_code == 1
    assert "✖ Invalid HelpOptions" in result.output
    assert "description" in result.output
    assert not isinstance(result.exception, KeyError)


def test_failure_lists_available_presets(tmp_path: Path) -> None:
    path = _write_json(tmp_path, "rows.json", [{"name": "Alice"}])

    result = runner.invoke(app, ["table", str(path), "--border", "wavy"])

    assert result.exit_code == 1
    assert "name=wavy" in result.output
    assert "rounded" in result.output
