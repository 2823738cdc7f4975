from __future__ import annotations

"""
Unit tests for the CLI Application Controller.

Runs the controller in-process and verifies stdout/stderr separation,
exit codes, header policy and the configuration resolution order
(defaults < saved preferences < flags).
"""

import json
import os
import sys
from pathlib import Path

import pytest

from dirlist.domain.config import get_default_config, load_config, save_preferences
from dirlist.interface.cli.app import (
    EXIT_FAILURE,
    EXIT_INTERRUPTED,
    EXIT_NO_ROOTS,
    EXIT_OK,
    _merge_config,
    main,
)


@pytest.fixture
def listing_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("COLUMNS", "80")
    root = tmp_path / "listing"
    root.mkdir()
    (root / "a.txt").write_text("aaaa", encoding="utf-8")
    (root / "b.txt").write_text("b", encoding="utf-8")
    (root / ".hidden").write_text("h", encoding="utf-8")
    (root / "sub").mkdir()
    return root


def test_single_root_grid_output(listing_dir: Path, capsys) -> None:
    code = main(["--use-defaults", "--color", "never", str(listing_dir)])
    out, err = capsys.readouterr()

    assert code == EXIT_OK
    assert out.splitlines() == [f"{listing_dir}:", "a.txt  b.txt  sub/"]
    assert "dirlist:" not in err


def test_show_hidden_and_size_sort(listing_dir: Path, capsys) -> None:
    code = main(["--use-defaults", "--color", "never", "-a", "-S", "--width", "1", str(listing_dir)])
    lines = capsys.readouterr().out.splitlines()

    assert code == EXIT_OK
    assert lines[1:] == ["a.txt", ".hidden", "b.txt", "sub/"]


def test_long_format_lines(listing_dir: Path, capsys) -> None:
    main(["--use-defaults", "--color", "never", "-l", str(listing_dir)])
    lines = capsys.readouterr().out.splitlines()[1:]

    assert len(lines) == 3
    assert lines[0].startswith("a.txt")
    assert "4B" in lines[0]
    assert lines[2].startswith("sub/")


def test_missing_root_only_exits_with_no_roots(tmp_path: Path, capsys) -> None:
    missing = tmp_path / "missing"
    code = main(["--use-defaults", "--color", "never", str(missing)])
    out, err = capsys.readouterr()

    assert code == EXIT_NO_ROOTS
    assert f"dirlist: cannot access '{missing}'" in err
    assert "no readable directories" in err


def test_partial_failure_still_succeeds(listing_dir: Path, tmp_path: Path, capsys) -> None:
    missing = tmp_path / "missing"
    code = main(["--use-defaults", "--color", "never", str(listing_dir), str(missing)])
    out, err = capsys.readouterr()

    assert code == EXIT_OK
    assert out.splitlines() == [f"{listing_dir}:", "a.txt  b.txt  sub/", "", f"{missing}:"]
    assert f"cannot access '{missing}'" in err


def test_color_always_emphasizes_directories(listing_dir: Path, capsys) -> None:
    main(["--use-defaults", "--color", "always", str(listing_dir)])
    out = capsys.readouterr().out

    assert "\x1b[" in out
    assert "a.txt  b.txt  " in out


def test_dump_config_prints_resolved_json(capsys) -> None:
    code = main(["--use-defaults", "--dump-config", "-R", "-t", "docs"])
    dumped = json.loads(capsys.readouterr().out)

    assert code == EXIT_OK
    assert dumped["recursive"] is True
    assert dumped["sort_by"] == "time"
    assert dumped["paths"] == ["docs"]


def test_saved_preferences_apply_without_flags(listing_dir: Path, capsys) -> None:
    prefs = get_default_config()
    prefs.update({"long_format": True, "color": "never"})
    assert save_preferences(prefs)

    main([str(listing_dir)])
    lines = capsys.readouterr().out.splitlines()[1:]
    assert lines[0].startswith("a.txt") and "4B" in lines[0]

    main(["--use-defaults", "--color", "never", str(listing_dir)])
    assert capsys.readouterr().out.splitlines()[1:] == ["a.txt  b.txt  sub/"]


def test_save_defaults_persists_flags(listing_dir: Path, capsys) -> None:
    code = main(["--use-defaults", "--save-defaults", "-H", "--color", "never", str(listing_dir)])
    err = capsys.readouterr().err

    assert code == EXIT_OK
    assert "Preferences saved to" in err
    stored = load_config()
    assert stored["human_readable"] is True
    assert stored["paths"] == []


def test_unexpected_failure_exit_code(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    def _boom(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr("dirlist.interface.cli.app.run_listing", _boom)
    code = main(["--use-defaults", "--color", "never"])

    assert code == EXIT_FAILURE
    assert "dirlist: unexpected failure: boom" in capsys.readouterr().err


def test_interrupt_exit_code(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    def _interrupt(*args, **kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr("dirlist.interface.cli.app.run_listing", _interrupt)

    assert main(["--use-defaults", "--color", "never"]) == EXIT_INTERRUPTED
    assert "interrupted" in capsys.readouterr().err


def test_merge_config_ignores_none_and_unknown_keys() -> None:
    base = get_default_config()
    merged = _merge_config(base, {"recursive": None, "long_format": True, "bogus": 1})

    assert merged["recursive"] is False
    assert merged["long_format"] is True
    assert "bogus" not in merged
    assert base["long_format"] is False


def test_negated_flags_override_saved_preferences(listing_dir: Path, capsys) -> None:
    prefs = get_default_config()
    prefs.update({"reverse": True, "long_format": True, "sort_by": "size", "color": "never"})
    assert save_preferences(prefs)

    main([str(listing_dir)])
    assert capsys.readouterr().out.splitlines()[1].startswith("sub/")

    code = main(["--no-reverse", "--no-long-format", "--sort", "name", str(listing_dir)])
    assert code == EXIT_OK
    assert capsys.readouterr().out.splitlines()[1:] == ["a.txt  b.txt  sub/"]
    assert load_config()["reverse"] is True


@pytest.mark.skipif(sys.platform != "linux", reason="Requires a filesystem accepting arbitrary bytes")
def test_undecodable_name_does_not_abort_listing(listing_dir: Path, tmp_path: Path, capsys) -> None:
    with open(os.path.join(os.fsencode(str(listing_dir)), b"bad\xffname"), "wb") as f:
        f.write(b"x")
    other = tmp_path / "other"
    other.mkdir()
    (other / "ok.txt").write_text("ok", encoding="utf-8")

    code = main(["--use-defaults", "--color", "never", "--width", "1", str(listing_dir), str(other)])
    lines = capsys.readouterr().out.splitlines()

    assert code == EXIT_OK
    assert "bad\ufffdname" in lines
    assert lines[-2:] == [f"{other}:", "ok.txt"]
