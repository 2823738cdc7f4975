from __future__ import annotations

"""
Listing orchestration engine.

Coordinates one listing invocation:
1. Validates the configuration.
2. For every root, in argument order: collects, sorts and formats entries.
3. Converts root-level failures into reported issues.
4. Aggregates the per-root sections into a ListingResult.

Roots are processed sequentially; a failing root never aborts the others.
"""

import logging
from typing import Any, Dict, Optional

from dirlist.core.listing.validator import validate_config
from dirlist.core.services.collector import Scanner, collect_entries
from dirlist.core.services.formatter import Emphasize, format_entries
from dirlist.core.services.sorter import sort_entries
from dirlist.domain.entry_models import OutputMode, SortKey
from dirlist.domain.errors import DirlistError, ListingIssue
from dirlist.domain.listing_models import (
    ListingResult,
    ListingSection,
    create_failed_section,
    create_listing_result,
)
from dirlist.infra.fs import normalize_path, scan_directory

logger = logging.getLogger(__name__)

DEFAULT_ROOT = "."


def run_listing(
        config: Optional[Dict[str, Any]],
        *,
        emphasize: Optional[Emphasize] = None,
        terminal_width: int = 80,
        scanner: Scanner = scan_directory,
        platform: Optional[str] = None,
) -> ListingResult:
    """
    Execute a full listing over every configured root.

    Args:
        config: The configuration dictionary (raw or partial).
        emphasize: Styling applied to directory names.
        terminal_width: Grid width used when the config does not fix one.
        scanner: Filesystem abstraction returning the children of a directory.
        platform: Metadata adapter override.

    Returns:
        ListingResult: Per-root sections and the global status.
    """
    cfg, warnings = validate_config(config, strict=False)

    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    roots = cfg["paths"] or [DEFAULT_ROOT]
    logger.debug(f"Listing started for {len(roots)} root(s).")

    sections = [
        list_root(
            root,
            cfg,
            emphasize=emphasize,
            terminal_width=terminal_width,
            scanner=scanner,
            platform=platform,
        )
        for root in roots
    ]

    result = create_listing_result(sections, show_headers=bool(cfg["paths"]))
    if not result.ok:
        logger.info(result.error)
    return result


def list_root(
        root: str,
        cfg: Dict[str, Any],
        *,
        emphasize: Optional[Emphasize] = None,
        terminal_width: int = 80,
        scanner: Scanner = scan_directory,
        platform: Optional[str] = None,
) -> ListingSection:
    """
    Collect, sort and render a single root.

    Args:
        root: Root path as requested by the user.
        cfg: Validated configuration.
        emphasize: Styling applied to directory names.
        terminal_width: Grid width used when the config does not fix one.
        scanner: Filesystem abstraction.
        platform: Metadata adapter override.

    Returns:
        ListingSection: Rendered section, or a failed one if the root is unusable.
    """
    try:
        collected = collect_entries(
            normalize_path(root, DEFAULT_ROOT),
            recursive=cfg["recursive"],
            show_hidden=cfg["show_hidden"],
            scanner=scanner,
            platform=platform,
        )
    except DirlistError as e:
        logger.debug(f"Root '{root}' skipped: {e}")
        return create_failed_section(root, ListingIssue.from_error(e))

    entries = sort_entries(
        collected.entries,
        key=SortKey(cfg["sort_by"]),
        reverse=cfg["reverse"],
    )
    lines = format_entries(
        entries,
        mode=OutputMode.LONG if cfg["long_format"] else OutputMode.GRID,
        human_readable=cfg["human_readable"],
        emphasize=emphasize,
        width=cfg["grid_width"] or terminal_width,
        time_format=cfg["time_format"],
    )

    return ListingSection(
        root=root,
        ok=True,
        entries=entries,
        lines=lines,
        issues=list(collected.issues),
    )
