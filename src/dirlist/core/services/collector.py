from __future__ import annotations

"""
Entry Collection Service.

Walks a root directory (optionally recursively), turns every discovered
path into an immutable Entry through the metadata adapter and applies the
hidden-entry filter. Recursive traversal is depth-first pre-order and the
result is flattened: nested entries carry their root-relative path.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from dirlist.core.services.metadata import classify_metadata, detect_platform
from dirlist.domain.entry_models import Entry, EntryKind, RawMetadata
from dirlist.domain.errors import (
    METADATA_UNAVAILABLE,
    SUBDIRECTORY_UNREADABLE,
    ListingIssue,
    RootNotFoundError,
    RootUnreadableError,
)
from dirlist.domain.listing_models import CollectionResult
from dirlist.infra.fs import scan_directory, to_display_text

logger = logging.getLogger(__name__)

Scanner = Callable[[str], List[RawMetadata]]

# ==============================================================================
# PUBLIC API
# ==============================================================================

def collect_entries(
        root: str,
        recursive: bool = False,
        show_hidden: bool = False,
        *,
        scanner: Scanner = scan_directory,
        platform: Optional[str] = None,
) -> CollectionResult:
    """
    Collect the visible entries below a root directory.

    An entry is dropped when it is hidden and hidden entries were not
    requested. Hidden directories that are dropped are not descended into.
    Unreadable subdirectories and entries without metadata are reported as
    issues instead of aborting the walk.

    Args:
        root: Directory to list.
        recursive: Descend into subdirectories.
        show_hidden: Keep hidden entries.
        scanner: Callable returning the raw children of a directory.
        platform: Metadata adapter override ('windows', 'unix', 'unknown').

    Returns:
        CollectionResult: Entries in discovery order plus issues.

    Raises:
        RootNotFoundError: The root does not exist.
        RootUnreadableError: The root is not a directory or cannot be read.
    """
    platform = platform or detect_platform()

    try:
        children = scanner(root)
    except FileNotFoundError as e:
        raise RootNotFoundError(root, _reason(e)) from e
    except OSError as e:
        raise RootUnreadableError(root, _reason(e)) from e

    entries: List[Entry] = []
    issues: List[ListingIssue] = []
    _collect_level(
        children,
        rel_prefix="",
        recursive=recursive,
        show_hidden=show_hidden,
        scanner=scanner,
        platform=platform,
        entries=entries,
        issues=issues,
    )

    logger.debug(f"Collected {len(entries)} entries from '{root}' ({len(issues)} issues)")
    return CollectionResult(entries=entries, issues=issues)


def build_entry(raw: RawMetadata, rel_prefix: str = "", platform: Optional[str] = None) -> Entry:
    """
    Construct the normalized Entry for one raw metadata record.

    Args:
        raw: Raw metadata for the path.
        rel_prefix: Root-relative path of the parent, '/' terminated or empty.
        platform: Metadata adapter override.

    Returns:
        Entry: Fully resolved immutable entry.
    """
    hidden, platform_meta = classify_metadata(raw, platform)
    kind = EntryKind.DIRECTORY if raw.is_dir else EntryKind.FILE
    name = to_display_text(raw.name)

    return Entry(
        name=name,
        path=raw.path,
        rel_path=f"{rel_prefix}{name}",
        kind=kind,
        size=0 if raw.is_dir else max(raw.size or 0, 0),
        modified=_to_datetime(raw.mtime),
        hidden=hidden,
        platform_meta=platform_meta,
    )

# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _collect_level(
        children: List[RawMetadata],
        rel_prefix: str,
        recursive: bool,
        show_hidden: bool,
        scanner: Scanner,
        platform: str,
        entries: List[Entry],
        issues: List[ListingIssue],
) -> None:
    """Append one directory level (and, if recursive, its subtree) to the accumulators."""
    for raw in children:
        entry = build_entry(raw, rel_prefix, platform)
        if entry.hidden and not show_hidden:
            continue

        entries.append(entry)

        if not raw.stat_available:
            issues.append(ListingIssue(
                path=raw.path,
                kind=METADATA_UNAVAILABLE,
                message=f"cannot read metadata for '{to_display_text(raw.path)}'",
            ))

        # Symlinked directories are listed but never followed
        if not (recursive and entry.is_dir) or raw.is_symlink:
            continue

        try:
            nested = scanner(raw.path)
        except OSError as e:
            logger.debug(f"Skipping unreadable subdirectory '{raw.path}': {e}")
            issues.append(ListingIssue(
                path=raw.path,
                kind=SUBDIRECTORY_UNREADABLE,
                message=f"cannot open directory '{to_display_text(raw.path)}': {_reason(e)}",
            ))
            continue

        _collect_level(
            nested,
            rel_prefix=f"{entry.rel_path}/",
            recursive=recursive,
            show_hidden=show_hidden,
            scanner=scanner,
            platform=platform,
            entries=entries,
            issues=issues,
        )


def _to_datetime(mtime: Optional[float]) -> Optional[datetime]:
    """Convert an epoch timestamp to local time, None when not representable."""
    if mtime is None:
        return None
    try:
        return datetime.fromtimestamp(mtime)
    except (OverflowError, OSError, ValueError):
        return None


def _reason(error: OSError) -> str:
    return error.strerror or str(error)
