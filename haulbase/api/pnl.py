"""
P&L API - profit and loss report and trend.
"""

from typing import Any, Optional

from haulbase.api.base import ResourceApi


class PnlApi(ResourceApi):
    def get_pnl(self, date_from: Optional[str] = None, date_to: Optional[str] = None) -> Any:
        return self.client.get("/v1/pnl", params={"date_from": date_from, "date_to": date_to})

    def get_pnl_trend(self, date_from: Optional[str] = None, date_to: Optional[str] = None) -> Any:
        return self.client.get(
            "/v1/pnl/trend", params={"date_from": date_from, "date_to": date_to}
        )
