from __future__ import annotations

"""
Listing Domain Data Models.

Defines the data structures and factory functions used to communicate
listing results between the listing engine and the interface layer.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from dirlist.domain.entry_models import Entry
from dirlist.domain.errors import ListingIssue

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CollectionResult:
    """
    Raw output of a collector pass over one root (pre-sort).

    Attributes:
        entries: Visible entries in discovery order.
        issues: Recoverable problems found during traversal.
    """
    entries: List[Entry] = field(default_factory=list)
    issues: List[ListingIssue] = field(default_factory=list)


@dataclass(frozen=True)
class ListingSection:
    """
    Rendered listing for a single root argument.

    Attributes:
        root: The root path exactly as requested.
        ok: False when the root itself could not be listed.
        entries: Sorted entries that were rendered.
        lines: Rendered output lines.
        issues: Problems reported for this root.
    """
    root: str
    ok: bool
    entries: List[Entry] = field(default_factory=list)
    lines: List[str] = field(default_factory=list)
    issues: List[ListingIssue] = field(default_factory=list)


@dataclass(frozen=True)
class ListingResult:
    """
    Aggregate result of one listing invocation.

    Attributes:
        ok: True when at least one root was listed.
        error: Description of the global failure, empty on success.
        sections: Per-root sections in argument order.
        show_headers: Whether sections should be printed with a 'root:' header.
    """
    ok: bool
    error: str
    sections: List[ListingSection] = field(default_factory=list)
    show_headers: bool = False

    @property
    def issues(self) -> List[ListingIssue]:
        return [issue for section in self.sections for issue in section.issues]

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_failed_section(root: str, issue: ListingIssue) -> ListingSection:
    """
    Create a section for a root that could not be listed at all.

    Args:
        root: Requested root path.
        issue: The root-level problem.

    Returns:
        ListingSection: An immutable failed section.
    """
    return ListingSection(root=root, ok=False, issues=[issue])


def create_listing_result(
        sections: List[ListingSection],
        show_headers: bool = False,
        error: Optional[str] = None,
) -> ListingResult:
    """
    Create the aggregate result, deriving the global status from the sections.

    The run only fails when no section could be listed.

    Args:
        sections: Per-root sections in argument order.
        show_headers: Whether headers should be printed.
        error: Optional override for the failure description.

    Returns:
        ListingResult: An immutable result object.
    """
    ok = any(section.ok for section in sections)
    if ok:
        return ListingResult(ok=True, error="", sections=sections, show_headers=show_headers)
    return ListingResult(
        ok=False,
        error=error or "No readable directories to list.",
        sections=sections,
        show_headers=show_headers,
    )
