# tests/test_cli.py

from __future__ import annotations

from pathlib import Path

import pytest

from dodo import cli
from dodo.schema import today


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DODO_DATA_DIR", "DODO_EDITOR", "DODO_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def _run(data_dir: Path, *argv: str) -> int:
    return cli.main(["--dir", str(data_dir), *argv])


def test_show_seeds_first_run(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    data_dir = tmp_path / "data"
    assert _run(data_dir, "show") == 0

    out = capsys.readouterr().out
    assert "1. [ ] Fill out my tasks [HIGH]" in out
    assert (data_dir / "README").exists()
    assert (data_dir / f"{today().isoformat()}.json").exists()


def test_default_command_edits(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    seen = []

    def fake_edit(text: str, editor: str | None = None) -> str:
        seen.append(text)
        return "1. [x] Done already [LOW]\ntrailing junk"

    monkeypatch.setattr(cli, "edit", fake_edit)
    assert _run(tmp_path) == 0

    out = capsys.readouterr().out
    assert seen and "Fill out my tasks" in seen[0]
    assert "Saved 1 task(s)" in out
    assert "trailing junk" in out

    assert _run(tmp_path, "show") == 0
    assert "1. [x] Done already [LOW]" in capsys.readouterr().out


def test_add_toggle_rm_and_log(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "add", "Call mom", "-p", "high") == 0
    assert "Added: Call mom [HIGH]" in capsys.readouterr().out

    assert _run(tmp_path, "toggle", "2") == 0
    assert "Call mom: done" in capsys.readouterr().out

    assert _run(tmp_path, "toggle", "1", "1") == 0
    assert "[x] Figure out how to use dodo" in capsys.readouterr().out

    assert _run(tmp_path, "rm", "1", "1") == 0
    assert "Removed: Figure out how to use dodo" in capsys.readouterr().out

    assert _run(tmp_path, "log") == 0
    assert capsys.readouterr().out.strip() == today().isoformat()


def test_user_errors_exit_non_zero(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "toggle", "9") == 1
    assert "No task #9" in capsys.readouterr().err


def test_corrupt_log_is_reported(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "bookkeeper").write_bytes(b"2024-03-1")
    assert _run(tmp_path, "show") == 1
    assert "bookkeeping file is invalid" in capsys.readouterr().err


def test_data_dir_from_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("DODO_DATA_DIR", str(tmp_path / "from-env"))
    assert cli.main(["show"]) == 0
    assert (tmp_path / "from-env" / "bookkeeper").exists()


def test_log_on_fresh_dir_records_today(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "log") == 0
    assert capsys.readouterr().out.strip() == today().isoformat()
    assert (tmp_path / f"{today().isoformat()}.json").exists()


def test_add_rejects_name_with_bracket(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "add", "Buy [organic] milk") == 1
    assert "Invalid task name" in capsys.readouterr().err


def test_edit_without_changes_saves_nothing(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(cli, "edit", lambda text, editor=None: text)
    assert _run(tmp_path, "edit") == 0
    assert "No changes" in capsys.readouterr().out
