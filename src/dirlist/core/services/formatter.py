from __future__ import annotations

"""
Listing Formatter.

Renders an ordered sequence of entries as a multi-column grid or as a
long-format report (name, size, modification time, attributes). The
formatter only decides which text is emphasized; the caller supplies the
'emphasize' callable that performs the actual styling, and all alignment
is computed on the unstyled text.
"""

from datetime import datetime
from typing import Callable, List, Optional, Sequence

from dirlist.domain.config import DEFAULT_TIME_FORMAT
from dirlist.domain.entry_models import (
    Entry,
    OutputMode,
    PlatformMeta,
    UnixPermissions,
    WindowsAttributes,
)

Emphasize = Callable[[str], str]

_SIZE_UNITS = ("B", "K", "M", "G", "T", "P")
_COLUMN_GAP = 2
_SIZE_COLUMN_WIDTH = 10
_MISSING_FIELD = "-"
_MISSING_TIME = "?"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def format_entries(
        entries: Sequence[Entry],
        mode: OutputMode = OutputMode.GRID,
        human_readable: bool = False,
        *,
        emphasize: Optional[Emphasize] = None,
        width: int = 80,
        time_format: str = DEFAULT_TIME_FORMAT,
) -> List[str]:
    """
    Render entries into output lines.

    Args:
        entries: Entries in final display order.
        mode: Grid or long layout.
        human_readable: Scale sizes to K/M/G units (long layout only).
        emphasize: Styling applied to directory names.
        width: Available terminal columns for the grid layout.
        time_format: strftime pattern for the long layout.

    Returns:
        List[str]: Rendered lines, empty for an empty listing.
    """
    style = emphasize or _plain
    if mode is OutputMode.LONG:
        return format_long(entries, human_readable, style, time_format)
    return format_grid(entries, style, width)


def format_grid(entries: Sequence[Entry], emphasize: Emphasize, width: int = 80) -> List[str]:
    """
    Lay names out column-major in as many columns as fit in 'width'.

    A single column is used when even two columns would overflow.
    """
    names = [display_name(e) for e in entries]
    if not names:
        return []

    rows, col_widths = _fit_columns(names, width)
    lines: List[str] = []

    for r in range(rows):
        cells: List[str] = []
        for c, col_width in enumerate(col_widths):
            idx = c * rows + r
            if idx >= len(names):
                break
            entry, name = entries[idx], names[idx]
            cell = _styled(entry, name, emphasize)
            is_last = c == len(col_widths) - 1 or (c + 1) * rows + r >= len(names)
            if not is_last:
                cell += " " * (col_width - len(name) + _COLUMN_GAP)
            cells.append(cell)
        lines.append("".join(cells))

    return lines


def format_long(
        entries: Sequence[Entry],
        human_readable: bool,
        emphasize: Emphasize,
        time_format: str = DEFAULT_TIME_FORMAT,
) -> List[str]:
    """
    Render one aligned line per entry: name, size, modified time, attributes.
    """
    if not entries:
        return []

    names = [display_name(e) for e in entries]
    times = [format_timestamp(e.modified, time_format) for e in entries]
    name_width = max(len(n) for n in names)
    time_width = max(len(t) for t in times)

    lines: List[str] = []
    for entry, name, stamp in zip(entries, names, times):
        padding = " " * (name_width - len(name))
        size = format_size(entry.size, human_readable)
        attributes = describe_platform_meta(entry.platform_meta) or _MISSING_FIELD
        lines.append(
            f"{_styled(entry, name, emphasize)}{padding}  "
            f"{size:>{_SIZE_COLUMN_WIDTH}}  "
            f"{stamp:<{time_width}}  "
            f"{attributes}"
        )
    return lines

# -----------------------------------------------------------------------------
# FIELD RENDERING
# -----------------------------------------------------------------------------

def format_size(num_bytes: int, human_readable: bool = False) -> str:
    """
    Render a byte count.

    Human-readable sizes use binary scaling and keep one decimal place only
    when the scaled value is not integral (2621440 -> '2.5M', 2048 -> '2K').
    The 'B' suffix is always present for unscaled values.

    Args:
        num_bytes: Size in bytes.
        human_readable: Scale to the largest fitting unit.

    Returns:
        str: Rendered size.
    """
    if not human_readable or num_bytes < 1024:
        return f"{num_bytes}B"

    value = float(num_bytes)
    unit = 0
    while value >= 1024 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1

    rounded = round(value, 1)
    if rounded >= 1024 and unit < len(_SIZE_UNITS) - 1:
        rounded = round(rounded / 1024, 1)
        unit += 1

    if rounded.is_integer():
        return f"{int(rounded)}{_SIZE_UNITS[unit]}"
    return f"{rounded:.1f}{_SIZE_UNITS[unit]}"


def format_timestamp(value: Optional[datetime], time_format: str = DEFAULT_TIME_FORMAT) -> str:
    """Render a modification time, '?' when unknown."""
    if value is None:
        return _MISSING_TIME
    return value.strftime(time_format)


def describe_platform_meta(meta: PlatformMeta) -> str:
    """
    Render attributes or permissions.

    Windows flags are joined with '|', Unix permissions are a three-digit
    octal mode and unknown metadata renders as an empty string.
    """
    if isinstance(meta, WindowsAttributes):
        return "|".join(meta.flag_names)
    if isinstance(meta, UnixPermissions):
        return meta.octal
    return ""


def display_name(entry: Entry) -> str:
    """Root-relative name, with a trailing '/' for directories."""
    return f"{entry.rel_path}/" if entry.is_dir else entry.rel_path

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _fit_columns(names: List[str], width: int) -> tuple:
    """Find the widest column-major layout that fits; returns (rows, col_widths)."""
    count = len(names)
    max_cols = max(1, min(count, width // (1 + _COLUMN_GAP)))

    for cols in range(max_cols, 0, -1):
        rows = -(-count // cols)
        # Recompute so that no trailing column is empty
        cols = -(-count // rows)
        col_widths = [
            max(len(n) for n in names[c * rows:(c + 1) * rows])
            for c in range(cols)
        ]
        total = sum(col_widths) + _COLUMN_GAP * (cols - 1)
        if total <= width or cols == 1:
            return rows, col_widths

    return count, [max(len(n) for n in names)]


def _styled(entry: Entry, text: str, emphasize: Emphasize) -> str:
    return emphasize(text) if entry.is_dir else text


def _plain(text: str) -> str:
    return text
