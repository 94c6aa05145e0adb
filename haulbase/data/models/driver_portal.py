"""
Driver portal data model - summaries the driver-facing views compute.
"""

from pydantic import BaseModel


class DriverExpenseStats(BaseModel):
    """Counts and money over a driver's own expenses."""

    pending: int = 0
    approved: int = 0
    total: float = 0.0


class EarningsSummary(BaseModel):
    """Earnings headline numbers; missing values read as zero."""

    month_to_date: float = 0.0
    year_to_date: float = 0.0
    completed_loads: int = 0
    total_miles: int = 0
