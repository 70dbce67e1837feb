"""Selection of board items completed within the reporting window."""

from __future__ import annotations

import logging
from typing import Iterable, List

from weekly_report.config import DONE_STATUS
from weekly_report.report_data import ReportingWindow, TrackedItem

logger = logging.getLogger("weekly_report.classify")


def is_completed_in_window(
    item: TrackedItem,
    window: ReportingWindow,
    done_status: str = DONE_STATUS,
) -> bool:
    """Check whether a board item counts as completed in ``window``.

    An item qualifies when it links to an issue or PR, its Status field is
    exactly ``done_status``, and it was merged (or, failing that, closed) at
    or after the window start. There is no upper bound: anything completed
    after the window was computed still counts.
    """
    if item.content is None:
        logger.debug("Skipping %s: no linked content", item.item_id)
        return False

    if item.status != done_status:
        logger.debug(
            "Skipping #%d: status %r", item.content.number, item.status,
        )
        return False

    completed_at = item.content.completed_at
    if completed_at is None:
        logger.debug("Skipping #%d: never merged or closed", item.content.number)
        return False

    return completed_at >= window.start


def select_completed(
    items: Iterable[TrackedItem],
    window: ReportingWindow,
    done_status: str = DONE_STATUS,
) -> List[TrackedItem]:
    """Filter ``items`` down to those completed in ``window``, keeping order."""
    return [
        item for item in items
        if is_completed_in_window(item, window, done_status)
    ]
