"""Shared pytest configuration and fixtures."""

from __future__ import annotations

import pytest

from weekly_report.config import ReportConfig
from weekly_report.report_data import ReportingWindow

from helpers import ts


@pytest.fixture
def window() -> ReportingWindow:
    return ReportingWindow(start=ts("2024-01-01"), end=ts("2024-01-08"))


@pytest.fixture
def config() -> ReportConfig:
    return ReportConfig()
