"""Reporting window resolution."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from weekly_report.report_data import ReportingWindow

WINDOW_DAYS = 7


def resolve_window(now: Optional[datetime] = None) -> ReportingWindow:
    """Return the trailing 7-day window ending at ``now``.

    Args:
        now: The report generation instant. Defaults to the current UTC
            time; a naive datetime is taken to be UTC.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return ReportingWindow(start=now - timedelta(days=WINDOW_DAYS), end=now)
