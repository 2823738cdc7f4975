from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
script via subprocess. These tests validate argument parsing, exit codes,
stream output (stdout/stderr) and the persisted preferences file.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "dirlist" / "main.py"


def run_cli(args: List[str], home: Path, cwd: Optional[Path] = None) -> subprocess.CompletedProcess[str]:
    """
    Helper to execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH and points the user data
    directory at a temporary home so real preferences are never touched.

    Args:
        args: List of command line arguments (excluding 'python' and script path).
        home: Directory used as HOME / LOCALAPPDATA for the subprocess.
        cwd: Optional working directory for the subprocess.

    Returns:
        subprocess.CompletedProcess: The result object containing returncode, stdout, and stderr.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env["HOME"] = str(home)
    env["USERPROFILE"] = str(home)
    env["LOCALAPPDATA"] = str(home)
    env["COLUMNS"] = "80"
    env.pop("DIRLIST_LOCALE", None)

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


@pytest.fixture
def home(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


def test_cli_lists_current_directory(cargo_project: Path, home: Path) -> None:
    """TC-01: Verify the default root is the working directory, without header."""
    result = run_cli(["--color", "never"], home, cwd=cargo_project)

    assert result.returncode == 0, result.stderr
    assert result.stdout.splitlines() == ["Cargo.lock  Cargo.toml  README.md  src/  target/"]
    assert result.stderr == ""


def test_cli_recursive_hidden_listing(cargo_project: Path, home: Path) -> None:
    """TC-02: Verify recursion flattens nested entries and hidden ones need -a."""
    plain = run_cli(["--color", "never", "-R", "--width", "1"], home, cwd=cargo_project)
    # Sorting applies to the whole flattened listing, by base name
    assert plain.stdout.splitlines() == [
        "Cargo.lock",
        "Cargo.toml",
        "README.md",
        "target/app",
        "src/main.rs",
        "src/",
        "target/",
    ]

    everything = run_cli(["--color", "never", "-R", "-a", "--width", "1"], home, cwd=cargo_project)
    lines = everything.stdout.splitlines()
    assert ".env" in lines
    assert "src/.secret" in lines
    assert "src/.cache/blob.bin" in lines


def test_cli_long_human_readable(cargo_project: Path, home: Path) -> None:
    """TC-03: Verify the long format carries size, time and attributes."""
    (cargo_project / "big.bin").write_bytes(b"\x00" * 2621440)
    result = run_cli(["--color", "never", "-l", "-H", "-S", str(cargo_project)], home)

    lines = result.stdout.splitlines()
    assert lines[0] == f"{cargo_project}:"
    assert lines[1].startswith("big.bin")
    assert "2.5M" in lines[1]
    assert all(line.rstrip() == line for line in lines)


def test_cli_missing_root_exit_code(home: Path, tmp_path: Path) -> None:
    """TC-04: Verify nothing listable yields exit code 2 and stderr diagnostics."""
    result = run_cli(["--color", "never", str(tmp_path / "nope")], home)

    assert result.returncode == 2
    assert result.stdout.strip() == f"{tmp_path / 'nope'}:"
    assert "dirlist: cannot access" in result.stderr


def test_cli_save_defaults_roundtrip(cargo_project: Path, home: Path) -> None:
    """TC-05: Verify saved preferences shape later runs."""
    saved = run_cli(["--save-defaults", "--dump-config", "-l"], home)
    assert saved.returncode == 0

    dumped = json.loads(saved.stdout)
    assert dumped["long_format"] is True

    config_files = list(home.rglob("config.json"))
    assert len(config_files) == 1
    stored = json.loads(config_files[0].read_text(encoding="utf-8"))
    assert stored["preferences"]["long_format"] is True

    result = run_cli(["--color", "never"], home, cwd=cargo_project)
    assert result.stdout.splitlines()[0].startswith("Cargo.lock")
    assert len(result.stdout.splitlines()) == 5


def test_cli_help_lists_flags(home: Path) -> None:
    """TC-06: Verify help renders the localized option descriptions."""
    result = run_cli(["--help"], home)

    assert result.returncode == 0
    assert "--recursive" in result.stdout
    assert "--sort-by-time" in result.stdout
