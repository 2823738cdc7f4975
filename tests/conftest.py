from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Isolation of the persistent preferences file.
3. Shared builders for raw metadata and in-memory directory scanners.
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Union

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from dirlist.domain.entry_models import (  # noqa: E402
    Entry,
    EntryKind,
    PlatformMeta,
    RawMetadata,
    UnixPermissions,
)

ScanTable = Dict[str, Union[List[RawMetadata], OSError]]


# -----------------------------------------------------------------------------
# Shared Helpers
# -----------------------------------------------------------------------------
def make_raw(
        name: str,
        parent: str = "/root",
        *,
        is_dir: bool = False,
        size: Optional[int] = 0,
        mtime: Optional[float] = 1_700_000_000.0,
        mode: Optional[int] = 0o100644,
        file_attributes: Optional[int] = None,
        is_symlink: bool = False,
) -> RawMetadata:
    """Build a RawMetadata record rooted at 'parent'."""
    return RawMetadata(
        name=name,
        path=f"{parent}/{name}",
        is_dir=is_dir,
        is_symlink=is_symlink,
        size=size,
        mtime=mtime,
        mode=mode,
        file_attributes=file_attributes,
    )


def make_entry(
        name: str,
        *,
        size: int = 0,
        modified: Optional[datetime] = None,
        kind: EntryKind = EntryKind.FILE,
        rel_path: Optional[str] = None,
        hidden: bool = False,
        platform_meta: Optional[PlatformMeta] = None,
) -> Entry:
    """Build an Entry directly, bypassing the collector."""
    return Entry(
        name=name,
        path=f"/root/{rel_path or name}",
        rel_path=rel_path or name,
        kind=kind,
        size=0 if kind is EntryKind.DIRECTORY else size,
        modified=modified if modified is not None else datetime(2024, 3, 5, 14, 7),
        hidden=hidden,
        platform_meta=platform_meta if platform_meta is not None else UnixPermissions(0o644),
    )


class FakeScanner:
    """In-memory replacement for infra.fs.scan_directory."""

    def __init__(self, table: ScanTable):
        self.table = table
        self.calls: List[str] = []

    def __call__(self, path: str) -> List[RawMetadata]:
        self.calls.append(path)
        if path not in self.table:
            raise FileNotFoundError(2, "No such file or directory", path)
        value = self.table[path]
        if isinstance(value, OSError):
            raise value
        return list(value)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def isolated_user_data(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect the preferences file into the test's temporary directory."""
    data_dir = tmp_path / "user_data"
    monkeypatch.setattr(
        "dirlist.domain.config.get_user_data_dir",
        lambda: str(data_dir),
    )
    return data_dir


@pytest.fixture
def cargo_project(tmp_path: Path) -> Path:
    """
    Create a small project directory.

    Structure:
    /project
      .env
      Cargo.lock
      Cargo.toml
      README.md
      /src
        main.rs
        .secret
        /.cache
          blob.bin
      /target
        app
    """
    root = tmp_path / "project"
    root.mkdir()
    (root / ".env").write_text("KEY=1", encoding="utf-8")
    (root / "Cargo.lock").write_text("lock", encoding="utf-8")
    (root / "Cargo.toml").write_text("[package]\n", encoding="utf-8")
    (root / "README.md").write_text("# Readme\n", encoding="utf-8")

    src = root / "src"
    src.mkdir()
    (src / "main.rs").write_text("fn main() {}\n", encoding="utf-8")
    (src / ".secret").write_text("s", encoding="utf-8")
    cache = src / ".cache"
    cache.mkdir()
    (cache / "blob.bin").write_bytes(b"\x00" * 16)

    target = root / "target"
    target.mkdir()
    (target / "app").write_bytes(b"\x7fELF")

    return root


@pytest.fixture
def raw():
    """Factory fixture for RawMetadata records (see make_raw)."""
    return make_raw


@pytest.fixture
def entry():
    """Factory fixture for Entry objects (see make_entry)."""
    return make_entry


@pytest.fixture
def fake_scanner():
    """Factory fixture building a FakeScanner from a path table."""
    return FakeScanner
