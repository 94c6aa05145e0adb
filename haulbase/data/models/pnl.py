"""
P&L data model - reporting period presets and date ranges.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class PnlPeriod(str, Enum):
    """Reporting period preset."""

    THIS_MONTH = "this_month"
    LAST_MONTH = "last_month"
    THIS_QUARTER = "this_quarter"
    YTD = "ytd"
    CUSTOM = "custom"

    @property
    def label(self) -> str:
        """Display label."""
        return PERIOD_LABELS[self]


PERIOD_LABELS = {
    PnlPeriod.THIS_MONTH: "This Month",
    PnlPeriod.LAST_MONTH: "Last Month",
    PnlPeriod.THIS_QUARTER: "This Quarter",
    PnlPeriod.YTD: "Year to Date",
    PnlPeriod.CUSTOM: "Custom",
}


class DateRange(BaseModel):
    """Inclusive ISO date bounds; either side may be open."""

    date_from: Optional[str] = None
    date_to: Optional[str] = None

    @property
    def is_open(self) -> bool:
        """True when neither bound is set."""
        return not self.date_from and not self.date_to
