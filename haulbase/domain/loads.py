"""
Loads views - search, filter, sort and statistics over the loads list, plus
the single-load view with its stops.
"""

from typing import Any, Callable, Optional

from haulbase.api.client import HaulbaseClient
from haulbase.core.config import ConfigManager, get_config
from haulbase.data.models.common import SortDirection, SortState
from haulbase.data.models.load import (
    FilteredLoadStats,
    LoadFilters,
    LoadStats,
    QuickFilter,
)
from haulbase.domain.base import (
    DetailView,
    ListView,
    count_by,
    matches_search,
    text,
    to_float,
    to_int,
)
from haulbase.state import ApiState

LOAD_SEARCH_FIELDS = (
    "reference_number",
    "customer_load_number",
    "broker.name",
    "broker_name",
    "shipper.city",
    "consignee.city",
    "driver.first_name",
    "driver.last_name",
)


def _financial(load: dict[str, Any], field: str) -> Any:
    financials = load.get("financials")
    return financials.get(field) if isinstance(financials, dict) else None


def _revenue(load: dict[str, Any]) -> float:
    return to_float(_financial(load, "revenue"))


def _broker_name(load: dict[str, Any]) -> str:
    return text(load, "broker.name") or text(load, "broker_name")


LOAD_SORT_KEYS: dict[str, Callable[[dict[str, Any]], Any]] = {
    "reference_number": lambda load: text(load, "reference_number"),
    "pickup_date": lambda load: text(load, "schedule.pickup_date"),
    "delivery_date": lambda load: text(load, "schedule.delivery_date"),
    "revenue": _revenue,
    "status": lambda load: text(load, "status"),
    "broker": _broker_name,
}


def load_sort_key(field: str) -> Callable[[dict[str, Any]], Any]:
    """Key function for a sort field; unknown fields sort by created_at."""
    return LOAD_SORT_KEYS.get(field, lambda load: text(load, "created_at"))


def sort_loads(loads: list[dict[str, Any]], sort: SortState) -> list[dict[str, Any]]:
    """Stable sort; loads with equal keys keep their fetched order."""
    return sorted(loads, key=load_sort_key(sort.field), reverse=sort.descending)


def filter_loads(loads: list[dict[str, Any]], filters: LoadFilters) -> list[dict[str, Any]]:
    result = [load for load in loads if matches_search(load, filters.search, LOAD_SEARCH_FIELDS)]
    if filters.status != "all":
        result = [load for load in result if load.get("status") == filters.status]
    if filters.billing != "all":
        result = [load for load in result if load.get("billing_status") == filters.billing]
    return result


def compute_load_stats(loads: list[dict[str, Any]], filtered_count: int) -> LoadStats:
    """
    Statistics over all loads.

    Args:
        loads: Every fetched load (unfiltered)
        filtered_count: Number of loads passing the current filters

    Returns:
        LoadStats with revenue, driver pay, miles, margin and RPM
    """
    total_revenue = sum(_revenue(load) for load in loads)
    total_driver_pay = sum(to_float(_financial(load, "driver_pay")) for load in loads)
    total_miles = sum(to_int(_financial(load, "miles")) for load in loads)

    return LoadStats(
        total=len(loads),
        filtered=filtered_count,
        by_status=count_by(loads, lambda load: text(load, "status")),
        total_revenue=total_revenue,
        total_driver_pay=total_driver_pay,
        total_miles=total_miles,
        margin=total_revenue - total_driver_pay,
        rpm=total_revenue / total_miles if total_miles > 0 else 0.0,
    )


def compute_filtered_load_stats(loads: list[dict[str, Any]]) -> FilteredLoadStats:
    return FilteredLoadStats(
        count=len(loads),
        total_revenue=sum(_revenue(load) for load in loads),
        total_miles=sum(to_int(_financial(load, "miles")) for load in loads),
    )


class LoadsView(ListView):
    """
    The loads list.

    Example:
        view = LoadsView(client)
        view.fetch()
        view.set_filters(status="in_transit")
        for load in view.loads: ...
    """

    def __init__(
        self,
        client: HaulbaseClient,
        filters: Optional[LoadFilters] = None,
        config: Optional[ConfigManager] = None,
    ) -> None:
        super().__init__(client, client.loads.get_loads, "loads")
        self.config = config or get_config()
        defaults = self.config.get_list_defaults("loads")
        self.default_sort = SortState(
            field=defaults.sort_field, direction=SortDirection(defaults.sort_direction)
        )
        self.filters = filters or LoadFilters()
        self.sort = self.default_sort

    @property
    def loads(self) -> list[dict[str, Any]]:
        """Filtered and sorted loads."""
        return sort_loads(filter_loads(self.all_records, self.filters), self.sort)

    @property
    def stats(self) -> LoadStats:
        return compute_load_stats(self.all_records, len(filter_loads(self.all_records, self.filters)))

    @property
    def filtered_stats(self) -> FilteredLoadStats:
        return compute_filtered_load_stats(filter_loads(self.all_records, self.filters))

    @property
    def quick_filters(self) -> list[QuickFilter]:
        """Status chips with counts; statuses with no loads are left out."""
        by_status = self.stats.by_status
        chips = [
            QuickFilter(status=status, count=by_status.get(status, 0))
            for status in self.config.get_quick_filter_statuses()
        ]
        return [chip for chip in chips if chip.count > 0]

    def set_filters(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
        billing: Optional[str] = None,
        sort: Optional[SortState] = None,
    ) -> None:
        """Update only the filters that are passed."""
        updates = {"search": search, "status": status, "billing": billing}
        self.filters = self.filters.model_copy(
            update={key: value for key, value in updates.items() if value is not None}
        )
        if sort is not None:
            self.sort = sort

    def reset_filters(self) -> None:
        self.filters = LoadFilters()
        self.sort = self.default_sort

    def toggle_sort(self, field: str) -> SortState:
        self.sort = self.sort.toggled(field)
        return self.sort

    def create_load(self, data: dict[str, Any]) -> Any:
        result = self.mutations.mutate(lambda: self.client.loads.create_load(data))
        self.logger.info("load_created")
        self.refetch()
        return result

    def update_load(self, load_id: str, data: dict[str, Any]) -> Any:
        return self.mutations.mutate(lambda: self.client.loads.update_load(load_id, data))

    def delete_load(self, load_id: str) -> Any:
        return self.mutations.mutate(lambda: self.client.loads.delete_load(load_id))

    def update_load_status(self, load_id: str, status: str) -> Any:
        """Change a load's status and reflect it locally once the server accepts it."""
        result = self.mutations.mutate(
            lambda: self.client.loads.update_load_status(load_id, status)
        )
        self._merge_local(load_id, {"status": status})
        self.logger.info("load_status_updated", load_id=load_id, status=status)
        return result

    def update_billing_status(self, load_id: str, billing_status: str) -> Any:
        return self.mutations.mutate(
            lambda: self.client.loads.update_billing_status(load_id, billing_status)
        )


class LoadView(DetailView):
    """A single load with its stops."""

    def __init__(self, client: HaulbaseClient, load_id: str) -> None:
        super().__init__(client, load_id, lambda: client.loads.get_load(load_id), "load")
        self.stops_state = ApiState(lambda: client.loads.get_stops(load_id), initial_data=[])

    @property
    def load(self) -> Optional[dict[str, Any]]:
        return self.record

    @property
    def stops(self) -> list[dict[str, Any]]:
        stops = self.stops_state.data
        return stops if isinstance(stops, list) else []

    @property
    def loading(self) -> bool:
        return self.detail_state.loading or self.stops_state.loading

    @property
    def error(self) -> Optional[str]:
        return self.detail_state.error or self.stops_state.error

    @property
    def mutating(self) -> bool:
        return self.mutations.loading or self.stops_state.loading

    def fetch(self) -> Any:
        load = self.detail_state.fetch()
        self.stops_state.fetch()
        return load

    def refetch(self) -> Any:
        return self.fetch()

    def clear_error(self) -> None:
        self.detail_state.clear_error()
        self.stops_state.clear_error()

    def detach(self) -> None:
        super().detach()
        self.stops_state.detach()

    def _update(self, updates: dict[str, Any]) -> Any:
        return self.client.loads.update_load(self.record_id, updates)

    def update_status(self, status: str) -> Any:
        result = self.mutations.mutate(
            lambda: self.client.loads.update_load_status(self.record_id, status)
        )
        self._merge_local({"status": status})
        self.logger.info("load_status_updated", status=status)
        return result

    def update_billing_status(self, billing_status: str) -> Any:
        return self.mutations.mutate(
            lambda: self.client.loads.update_billing_status(self.record_id, billing_status)
        )

    # Stops

    def add_stop(self, data: dict[str, Any]) -> Any:
        result = self.mutations.mutate(lambda: self.client.loads.add_stop(self.record_id, data))
        self.stops_state.refetch()
        return result

    def update_stop(self, stop_id: str, data: dict[str, Any]) -> Any:
        result = self.mutations.mutate(
            lambda: self.client.loads.update_stop(self.record_id, stop_id, data)
        )
        self.stops_state.refetch()
        return result

    def delete_stop(self, stop_id: str) -> Any:
        result = self.mutations.mutate(
            lambda: self.client.loads.delete_stop(self.record_id, stop_id)
        )
        self.stops_state.refetch()
        return result

    def reorder_stops(self, stop_order: list[str]) -> Any:
        result = self.mutations.mutate(
            lambda: self.client.loads.reorder_stops(self.record_id, stop_order)
        )
        self.stops_state.refetch()
        return result
