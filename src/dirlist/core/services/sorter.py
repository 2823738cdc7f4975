from __future__ import annotations

"""
Entry Ordering Service.

Orders collected entries by name, size or modification time. Name sorts
ascending by default while size and time sort largest/most recent first;
'reverse' flips the primary direction only. Ties always fall back to name
then root-relative path, ascending, so the order is total and reproducible.
"""

from datetime import datetime
from typing import Callable, Iterable, List, Union

from dirlist.domain.entry_models import Entry, SortKey

_PrimaryKey = Callable[[Entry], Union[str, int, float]]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def sort_entries(
        entries: Iterable[Entry],
        key: SortKey = SortKey.NAME,
        reverse: bool = False,
) -> List[Entry]:
    """
    Return a new list of entries in listing order.

    Args:
        entries: Entries to order (not modified).
        key: Primary ordering criterion.
        reverse: Invert the default direction of the primary key.

    Returns:
        List[Entry]: Ordered entries.
    """
    # Stable two-pass sort: the tie-break order survives the primary pass
    ordered = sorted(entries, key=_tie_break)

    if key is SortKey.NAME:
        return sorted(ordered, key=_by_name, reverse=reverse)

    primary: _PrimaryKey = _by_size if key is SortKey.SIZE else _by_time
    return sorted(ordered, key=primary, reverse=not reverse)


def resolve_sort_key(sort_by_time: bool = False, sort_by_size: bool = False) -> SortKey:
    """Map the CLI flags to a key; time takes precedence over size."""
    if sort_by_time:
        return SortKey.TIME
    if sort_by_size:
        return SortKey.SIZE
    return SortKey.NAME

# -----------------------------------------------------------------------------
# KEY FUNCTIONS
# -----------------------------------------------------------------------------

def _tie_break(entry: Entry) -> tuple:
    return entry.name, entry.rel_path


def _by_name(entry: Entry) -> str:
    return entry.name


def _by_size(entry: Entry) -> int:
    return entry.size


def _by_time(entry: Entry) -> float:
    # Missing timestamps order as the oldest possible entry
    if entry.modified is None:
        return float("-inf")
    return _timestamp(entry.modified)


def _timestamp(value: datetime) -> float:
    try:
        return value.timestamp()
    except (OverflowError, OSError, ValueError):
        return float("-inf")
