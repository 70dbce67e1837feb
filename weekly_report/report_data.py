"""Structured report data model, consumed by the classifier, grouping and formatters."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple

UNCATEGORIZED = "uncategorized"

_MONTHS = (
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
)


def format_date(value: datetime) -> str:
    """Render a datetime as 'January 8, 2024' independent of the locale."""
    return f"{_MONTHS[value.month - 1]} {value.day}, {value.year}"


@dataclass(frozen=True)
class ItemContent:
    """The issue or pull request linked from a project board card."""
    number: int
    title: str
    url: str
    repository: str                # "owner/name"
    author: Optional[str]          # None for deleted accounts
    kind: str                      # "Issue" or "PullRequest"
    labels: Tuple[str, ...] = ()
    merged_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None

    @property
    def completed_at(self) -> Optional[datetime]:
        return self.merged_at or self.closed_at

    @property
    def type_label(self) -> str:
        return "PR" if self.merged_at else "Issue"


@dataclass(frozen=True)
class TrackedItem:
    """A single card on the project board."""
    item_id: str
    status: Optional[str]          # value of the "Status" field, if set
    content: Optional[ItemContent]  # None for draft cards


@dataclass(frozen=True)
class ReportingWindow:
    """The trailing interval a report covers."""
    start: datetime
    end: datetime

    @property
    def start_formatted(self) -> str:
        return format_date(self.start)

    @property
    def end_formatted(self) -> str:
        return format_date(self.end)


@dataclass(frozen=True)
class ClassifiedItem:
    """A qualifying item together with the section it was assigned to."""
    content: ItemContent
    labels: Tuple[str, ...]
    section: str                   # section id or UNCATEGORIZED


@dataclass(frozen=True)
class Contribution:
    """One qualifying item credited to a contributor."""
    number: int
    title: str
    url: str
    repository: str
    kind: str                      # "change" or "issue"


@dataclass
class Contributor:
    """A distinct author handle and everything credited to it."""
    login: str
    contributions: List[Contribution] = field(default_factory=list)


@dataclass
class CategorizedItems:
    """Qualifying items bucketed per section, in configuration order."""
    sections: Dict[str, List[ClassifiedItem]] = field(default_factory=dict)
    uncategorized: List[ClassifiedItem] = field(default_factory=list)
    # Every item, in board order.
    items: List[ClassifiedItem] = field(default_factory=list)

    def listed(self, include_uncategorized: bool = True) -> List[ClassifiedItem]:
        """Items the report shows, in board order."""
        if include_uncategorized:
            return list(self.items)
        return [item for item in self.items if item.section != UNCATEGORIZED]

    def total(self, include_uncategorized: bool = True) -> int:
        return len(self.listed(include_uncategorized))
