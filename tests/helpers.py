"""Factories for board items shared by the unit tests."""

from __future__ import annotations

from datetime import datetime, timezone

from weekly_report.report_data import ItemContent, TrackedItem

CANONICAL_REPO = "projectbluefin/common"


def ts(value: str) -> datetime:
    """Parse 'YYYY-MM-DD' or 'YYYY-MM-DDTHH:MM' as a UTC datetime."""
    fmt = "%Y-%m-%dT%H:%M" if "T" in value else "%Y-%m-%d"
    return datetime.strptime(value, fmt).replace(tzinfo=timezone.utc)


def make_item(
    number: int = 1,
    title: str = "Some change",
    status="Done",
    labels=(),
    author="alice",
    merged_at=None,
    closed_at=None,
    repository: str = CANONICAL_REPO,
    with_content: bool = True,
) -> TrackedItem:
    """Create a TrackedItem with sensible defaults.

    Timestamps may be given as strings understood by ts().
    """
    if isinstance(merged_at, str):
        merged_at = ts(merged_at)
    if isinstance(closed_at, str):
        closed_at = ts(closed_at)

    content = None
    if with_content:
        content = ItemContent(
            number=number,
            title=title,
            url=f"https://github.com/{repository}/pull/{number}",
            repository=repository,
            author=author,
            labels=tuple(labels),
            merged_at=merged_at,
            closed_at=closed_at,
            kind="PullRequest" if merged_at else "Issue",
        )
    return TrackedItem(item_id=f"PVTI_{number}", status=status, content=content)
