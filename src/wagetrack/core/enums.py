from __future__ import annotations

from enum import Enum


class ReportWindow(str, Enum):
    """Named date windows used by the dashboard and reports."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"
