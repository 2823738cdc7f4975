from __future__ import annotations

"""
Directory Entry Domain Models.

Defines the normalized, immutable representation of a single filesystem
entry together with the platform-tagged metadata variants produced by the
metadata adapter. Also declares the raw metadata record returned by the
filesystem abstraction and the enumerations that drive sorting and output.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple, Union

# -----------------------------------------------------------------------------
# ENUMERATIONS
# -----------------------------------------------------------------------------

class EntryKind(str, Enum):
    """Classification of a filesystem entry."""
    FILE = "file"
    DIRECTORY = "directory"


class SortKey(str, Enum):
    """Primary ordering criterion for a listing."""
    NAME = "name"
    SIZE = "size"
    TIME = "time"


class OutputMode(str, Enum):
    """Rendering layout for a listing."""
    GRID = "grid"
    LONG = "long"

# -----------------------------------------------------------------------------
# PLATFORM METADATA VARIANTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class WindowsAttributes:
    """
    Windows file attribute flags relevant to the listing.

    Attributes:
        readonly: FILE_ATTRIBUTE_READONLY is set.
        hidden: FILE_ATTRIBUTE_HIDDEN is set.
        system: FILE_ATTRIBUTE_SYSTEM is set.
        archive: FILE_ATTRIBUTE_ARCHIVE is set.
    """
    readonly: bool = False
    hidden: bool = False
    system: bool = False
    archive: bool = False

    @property
    def flag_names(self) -> Tuple[str, ...]:
        """Names of the set flags, or ('NORMAL',) when none is set."""
        names = tuple(
            label for label, enabled in (
                ("READONLY", self.readonly),
                ("HIDDEN", self.hidden),
                ("SYSTEM", self.system),
                ("ARCHIVE", self.archive),
            )
            if enabled
        )
        return names or ("NORMAL",)


@dataclass(frozen=True)
class UnixPermissions:
    """
    Unix permission bits (owner/group/other).

    Attributes:
        mode: Permission bits already masked with 0o777.
    """
    mode: int

    @property
    def octal(self) -> str:
        return f"{self.mode & 0o777:03o}"


@dataclass(frozen=True)
class UnknownMeta:
    """Metadata placeholder for platforms without a supported adapter."""


PlatformMeta = Union[WindowsAttributes, UnixPermissions, UnknownMeta]

# -----------------------------------------------------------------------------
# RAW FILESYSTEM RECORD
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RawMetadata:
    """
    Unprocessed metadata for one path as returned by the filesystem layer.

    Any of the stat-derived fields may be None when the operating system
    refused to provide them.

    Attributes:
        name: Base name of the entry.
        path: Full path of the entry.
        is_dir: True if the entry resolves to a directory.
        is_symlink: True if the entry itself is a symbolic link.
        size: Size in bytes.
        mtime: Modification time as seconds since the epoch.
        mode: Raw st_mode value.
        file_attributes: Raw Windows st_file_attributes value.
    """
    name: str
    path: str
    is_dir: bool = False
    is_symlink: bool = False
    size: Optional[int] = None
    mtime: Optional[float] = None
    mode: Optional[int] = None
    file_attributes: Optional[int] = None

    @property
    def stat_available(self) -> bool:
        return self.size is not None and self.mtime is not None

# -----------------------------------------------------------------------------
# NORMALIZED ENTRY
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Entry:
    """
    Normalized, immutable view of one discovered filesystem entry.

    Attributes:
        name: Display base name.
        path: Full path used for recursion and metadata lookup.
        rel_path: Path relative to the listed root, '/' separated.
        kind: File or directory.
        size: Byte count (always 0 for directories).
        modified: Local modification time, None if unavailable.
        hidden: Resolved visibility flag.
        platform_meta: Platform-tagged attribute or permission data.
    """
    name: str
    path: str
    rel_path: str
    kind: EntryKind
    size: int
    modified: Optional[datetime]
    hidden: bool
    platform_meta: PlatformMeta

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY
