from __future__ import annotations

"""
Listing Error Types.

Exceptions raised by the collection layer for conditions that prevent a
root from being listed, and the issue record used to report every
recoverable problem back to the interface layer.
"""

from dataclasses import dataclass

# -----------------------------------------------------------------------------
# ISSUE KINDS
# -----------------------------------------------------------------------------

ROOT_NOT_FOUND = "root_not_found"
ROOT_UNREADABLE = "root_unreadable"
SUBDIRECTORY_UNREADABLE = "subdirectory_unreadable"
METADATA_UNAVAILABLE = "metadata_unavailable"

# -----------------------------------------------------------------------------
# EXCEPTIONS
# -----------------------------------------------------------------------------

class DirlistError(Exception):
    """Base class for listing failures tied to a path."""

    kind: str = ROOT_UNREADABLE

    def __init__(self, path: str, reason: str):
        super().__init__(f"cannot access '{path}': {reason}")
        self.path = path
        self.reason = reason


class RootNotFoundError(DirlistError):
    """The requested root path does not exist."""
    kind = ROOT_NOT_FOUND


class RootUnreadableError(DirlistError):
    """The requested root exists but cannot be enumerated."""
    kind = ROOT_UNREADABLE

# -----------------------------------------------------------------------------
# ISSUE TRACKING MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ListingIssue:
    """
    Non-fatal problem encountered while listing a root.

    Attributes:
        path: Path the problem refers to.
        kind: One of the issue kind constants of this module.
        message: Human-readable description.
    """
    path: str
    kind: str
    message: str

    @property
    def is_fatal_for_root(self) -> bool:
        return self.kind in (ROOT_NOT_FOUND, ROOT_UNREADABLE)

    @classmethod
    def from_error(cls, error: DirlistError) -> "ListingIssue":
        return cls(path=error.path, kind=error.kind, message=str(error))
