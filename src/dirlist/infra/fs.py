from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path resolution and the thin abstraction over
'os.scandir'/'os.stat' that the collector consumes. Every OS call that
returns per-entry metadata lives here, so the listing core never touches
the filesystem directly.
"""

import os
from typing import List, Optional

from dirlist.domain.entry_models import RawMetadata

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "Dirlist"
UNIX_APP_DIR_NAME = ".dirlist"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/Dirlist
    - Linux/Mac: ~/.dirlist

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    # Windows specific resolution
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    # Posix fallback (Linux/Mac)
    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str = ".") -> str:
    """
    Expand the user home shortcut in a path string.

    The result keeps relative paths relative so that reports echo what the
    user typed. Empty input reverts to the fallback.

    Args:
        path: Raw input path string.
        fallback: Path to use if the input is empty.

    Returns:
        str: Expanded path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    # Variables are left alone: '$' may belong to a real directory name
    return os.path.expanduser(p)


def to_display_text(value: str) -> str:
    """
    Make an OS-provided name printable.

    Bytes that are not valid UTF-8 reach Python as lone surrogates, which
    no text stream can encode. They are shown as U+FFFD instead; the
    original string must still be used for filesystem access.

    Args:
        value: Name or path as returned by the OS.

    Returns:
        str: Text safe to write to any UTF-8 stream.
    """
    try:
        raw = value.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        # Unpaired surrogates from Windows names
        raw = value.encode("utf-8", "replace")
    return raw.decode("utf-8", "replace")

# -----------------------------------------------------------------------------
# METADATA ACCESS API
# -----------------------------------------------------------------------------

def scan_directory(path: str) -> List[RawMetadata]:
    """
    Enumerate the direct children of a directory with their raw metadata.

    Errors opening the directory itself propagate as OSError. Errors reading
    one child's metadata are absorbed into a partially-populated record.

    Args:
        path: Directory to enumerate.

    Returns:
        List[RawMetadata]: One record per child, in OS order.
    """
    records: List[RawMetadata] = []
    with os.scandir(path) as it:
        for dir_entry in it:
            records.append(read_entry_metadata(dir_entry))
    return records


def read_entry_metadata(dir_entry: os.DirEntry) -> RawMetadata:
    """
    Build a RawMetadata record from a scandir entry.

    Symbolic links are followed for classification and size, matching the
    default behavior of a plain directory listing.

    Args:
        dir_entry: Entry yielded by os.scandir.

    Returns:
        RawMetadata: Metadata record; stat fields are None when unavailable.
    """
    try:
        is_symlink = dir_entry.is_symlink()
    except OSError:
        is_symlink = False

    try:
        is_dir = dir_entry.is_dir()
    except OSError:
        is_dir = False

    try:
        st = dir_entry.stat()
    except OSError:
        # Dangling links still describe themselves
        try:
            st = dir_entry.stat(follow_symlinks=False)
        except OSError:
            return RawMetadata(
                name=dir_entry.name,
                path=dir_entry.path,
                is_dir=is_dir,
                is_symlink=is_symlink,
            )

    return RawMetadata(
        name=dir_entry.name,
        path=dir_entry.path,
        is_dir=is_dir,
        is_symlink=is_symlink,
        size=st.st_size,
        mtime=st.st_mtime,
        mode=st.st_mode,
        file_attributes=getattr(st, "st_file_attributes", None),
    )
