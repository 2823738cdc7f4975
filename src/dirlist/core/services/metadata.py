from __future__ import annotations

"""
Platform Metadata Adapter.

Pure per-entry classification: turns the raw metadata returned by the
filesystem layer into the resolved hidden flag and the platform-tagged
metadata variant. The platform is chosen once per process by a runtime
capability check and can be overridden for testing.
"""

import os
import stat
from typing import Optional, Tuple

from dirlist.domain.entry_models import (
    PlatformMeta,
    RawMetadata,
    UnixPermissions,
    UnknownMeta,
    WindowsAttributes,
)

PLATFORM_WINDOWS = "windows"
PLATFORM_UNIX = "unix"
PLATFORM_UNKNOWN = "unknown"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def detect_platform() -> str:
    """
    Identify which metadata adapter applies to the running interpreter.

    Returns:
        str: 'windows', 'unix' or 'unknown'.
    """
    if os.name == "nt":
        return PLATFORM_WINDOWS
    if os.name == "posix":
        return PLATFORM_UNIX
    return PLATFORM_UNKNOWN


def classify_metadata(
        raw: RawMetadata,
        platform: Optional[str] = None,
) -> Tuple[bool, PlatformMeta]:
    """
    Resolve visibility and platform metadata for one entry.

    Dot-prefixed names are hidden everywhere. On Windows the HIDDEN
    attribute also hides an entry. When the platform-specific raw field is
    missing the entry falls back to UnknownMeta.

    Args:
        raw: Raw metadata for the entry.
        platform: Adapter to use; detected when omitted.

    Returns:
        Tuple[bool, PlatformMeta]: (hidden, platform_meta).
    """
    platform = platform or detect_platform()
    dot_hidden = raw.name.startswith(".")

    if platform == PLATFORM_WINDOWS and raw.file_attributes is not None:
        attrs = windows_attributes(raw.file_attributes)
        return dot_hidden or attrs.hidden, attrs

    if platform == PLATFORM_UNIX and raw.mode is not None:
        return dot_hidden, UnixPermissions(mode=stat.S_IMODE(raw.mode) & 0o777)

    return dot_hidden, UnknownMeta()


def windows_attributes(file_attributes: int) -> WindowsAttributes:
    """Decode the attribute bitmask into the flags shown by the listing."""
    return WindowsAttributes(
        readonly=bool(file_attributes & stat.FILE_ATTRIBUTE_READONLY),
        hidden=bool(file_attributes & stat.FILE_ATTRIBUTE_HIDDEN),
        system=bool(file_attributes & stat.FILE_ATTRIBUTE_SYSTEM),
        archive=bool(file_attributes & stat.FILE_ATTRIBUTE_ARCHIVE),
    )
