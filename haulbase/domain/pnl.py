"""
P&L view - period presets and the report/trend pair for the chosen range.
"""

import calendar
from datetime import date
from typing import Any, Callable, Optional

from haulbase.api.client import HaulbaseClient
from haulbase.core.config import ConfigManager, get_config
from haulbase.data.models.pnl import DateRange, PnlPeriod
from haulbase.state import ApiState


def _month_end(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def date_range_for(preset: str, today: Optional[date] = None) -> DateRange:
    """
    Date range covered by a period preset.

    Args:
        preset: One of the PnlPeriod values
        today: Reference date (defaults to today)

    Returns:
        DateRange with ISO dates; both bounds None for custom or unknown presets
    """
    today = today or date.today()
    year, month = today.year, today.month

    if preset == PnlPeriod.THIS_MONTH:
        start, end = date(year, month, 1), _month_end(year, month)
    elif preset == PnlPeriod.LAST_MONTH:
        if month == 1:
            year, month = year - 1, 12
        else:
            month -= 1
        start, end = date(year, month, 1), _month_end(year, month)
    elif preset == PnlPeriod.THIS_QUARTER:
        first_month = (month - 1) // 3 * 3 + 1
        start, end = date(year, first_month, 1), _month_end(year, first_month + 2)
    elif preset == PnlPeriod.YTD:
        start, end = date(year, 1, 1), today
    else:
        return DateRange()

    return DateRange(date_from=start.isoformat(), date_to=end.isoformat())


class PnlView:
    """
    Profit and loss for a period.

    The report and trend are fetched together, and only when the range has
    at least one bound. Changing the period or the custom dates refetches.
    """

    def __init__(
        self,
        client: HaulbaseClient,
        period: Optional[str] = None,
        config: Optional[ConfigManager] = None,
        today: Optional[date] = None,
    ) -> None:
        self.client = client
        self.today = today
        self.period = period or (config or get_config()).get_default_period()
        self.custom_date_from = ""
        self.custom_date_to = ""
        self.report_state = ApiState(client.pnl.get_pnl)
        self.trend_state = ApiState(client.pnl.get_pnl_trend)

    @property
    def date_range(self) -> DateRange:
        if self.period == PnlPeriod.CUSTOM:
            return DateRange(
                date_from=self.custom_date_from or None, date_to=self.custom_date_to or None
            )
        return date_range_for(self.period, self.today)

    @property
    def report(self) -> Any:
        return self.report_state.data

    @property
    def trend(self) -> Any:
        return self.trend_state.data

    @property
    def loading(self) -> bool:
        return self.report_state.loading or self.trend_state.loading

    @property
    def error(self) -> Optional[str]:
        return self.report_state.error or self.trend_state.error

    def fetch(self) -> bool:
        """Fetch report and trend for the current range; False when the range is open."""
        date_range = self.date_range
        if date_range.is_open:
            return False
        self.report_state.fetch(date_range.date_from, date_range.date_to)
        self.trend_state.fetch(date_range.date_from, date_range.date_to)
        return True

    def refetch(self) -> bool:
        return self.fetch()

    def set_period(self, period: str) -> None:
        self._apply(lambda: setattr(self, "period", period))

    def set_custom_dates(
        self, date_from: Optional[str] = None, date_to: Optional[str] = None
    ) -> None:
        def update() -> None:
            if date_from is not None:
                self.custom_date_from = date_from
            if date_to is not None:
                self.custom_date_to = date_to

        self._apply(update)

    def _apply(self, change: Callable[[], None]) -> None:
        before = self.date_range
        change()
        if self.date_range != before:
            self.fetch()
