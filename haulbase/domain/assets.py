"""
Asset views - trucks, trailers and the combined fleet.

Status counts are seeded with every AssetStatus at zero; records carrying a
status outside that vocabulary are not counted.
"""

from datetime import date, timedelta
from typing import Any, Callable, Optional

from haulbase.api.client import HaulbaseClient
from haulbase.core.config import ConfigManager, get_config
from haulbase.data.models.asset import (
    TRAILER_EXPIRY_FIELDS,
    TRUCK_EXPIRY_FIELDS,
    AssetFilters,
    AssetStatus,
    FleetStats,
    TrailerStats,
    TrailerType,
    TruckStats,
    empty_status_counts,
)
from haulbase.domain.base import DetailView, ListView, count_by, matches_search, text

TRUCK_SEARCH_FIELDS = ("unit_number", "vin", "make", "model")
TRAILER_SEARCH_FIELDS = ("unit_number", "vin", "make")


def parse_date(value: Any) -> Optional[date]:
    """Parse the date part of an ISO date or datetime string; None when unparseable."""
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def is_expiring_soon(value: Any, days: int = 30, today: Optional[date] = None) -> bool:
    """
    True when `value` falls within `days` from today or is already past.

    Missing or unparseable dates are never expiring.
    """
    expiry = parse_date(value)
    if expiry is None:
        return False
    today = today or date.today()
    return expiry <= today + timedelta(days=days)


def status_counts(records: list[dict[str, Any]]) -> dict[str, int]:
    counts = empty_status_counts()
    for record in records:
        status = record.get("status")
        if status in counts:
            counts[status] += 1
    return counts


def filter_assets(
    records: list[dict[str, Any]],
    filters: AssetFilters,
    search_fields: tuple[str, ...],
    type_field: Optional[str] = None,
) -> list[dict[str, Any]]:
    result = list(records)
    if filters.status != "all":
        result = [r for r in result if r.get("status") == filters.status]
    if type_field and filters.type != "all":
        result = [r for r in result if r.get(type_field) == filters.type]
    return [r for r in result if matches_search(r, filters.search, search_fields)]


def compute_truck_stats(trucks: list[dict[str, Any]], filtered_count: int) -> TruckStats:
    by_status = status_counts(trucks)
    return TruckStats(
        total=len(trucks),
        filtered=filtered_count,
        by_status=by_status,
        active=by_status[AssetStatus.ACTIVE.value],
        maintenance=by_status[AssetStatus.MAINTENANCE.value],
        inactive=by_status[AssetStatus.INACTIVE.value],
        with_drivers=sum(1 for truck in trucks if truck.get("current_driver_id")),
        with_trailers=sum(1 for truck in trucks if truck.get("current_trailer_id")),
    )


def compute_trailer_stats(trailers: list[dict[str, Any]], filtered_count: int) -> TrailerStats:
    by_status = status_counts(trailers)
    by_type = count_by(trailers, lambda trailer: text(trailer, "type"))
    return TrailerStats(
        total=len(trailers),
        filtered=filtered_count,
        by_status=by_status,
        by_type=by_type,
        active=by_status[AssetStatus.ACTIVE.value],
        maintenance=by_status[AssetStatus.MAINTENANCE.value],
        inactive=by_status[AssetStatus.INACTIVE.value],
        available=sum(
            1
            for trailer in trailers
            if trailer.get("status") == AssetStatus.ACTIVE.value
            and not trailer.get("current_truck_id")
        ),
        reefers=by_type.get(TrailerType.REEFER.value, 0),
    )


class _AssetListView(ListView):
    search_fields: tuple[str, ...] = ()
    type_field: Optional[str] = None

    def __init__(
        self,
        client: HaulbaseClient,
        fetcher: Callable[..., Any],
        name: str,
        filters: Optional[AssetFilters] = None,
    ) -> None:
        super().__init__(client, fetcher, name)
        self.filters = filters or AssetFilters()

    @property
    def filtered_records(self) -> list[dict[str, Any]]:
        return filter_assets(self.all_records, self.filters, self.search_fields, self.type_field)

    def set_filters(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
        type: Optional[str] = None,
    ) -> None:
        updates = {"search": search, "status": status, "type": type}
        self.filters = self.filters.model_copy(
            update={key: value for key, value in updates.items() if value is not None}
        )

    def reset_filters(self) -> None:
        self.filters = AssetFilters()

    def _create(self, call: Callable[[], Any]) -> Any:
        result = self.mutations.mutate(call)
        self.refetch()
        return result

    def _update(self, record_id: str, data: dict[str, Any], call: Callable[[], Any]) -> Any:
        result = self.mutations.mutate(call)
        self._merge_local(record_id, data)
        return result

    def _delete(self, record_id: str, call: Callable[[], Any]) -> None:
        self.mutations.mutate(call)
        self._remove_local(record_id)

    def _assign(self, call: Callable[[], Any], **context: Any) -> Any:
        result = self.mutations.mutate(call)
        self.logger.info("asset_assignment_changed", **context)
        self.refetch()
        return result


class TrucksView(_AssetListView):
    """The trucks list."""

    search_fields = TRUCK_SEARCH_FIELDS

    def __init__(self, client: HaulbaseClient, filters: Optional[AssetFilters] = None) -> None:
        super().__init__(client, client.trucks.get_trucks, "trucks", filters)

    @property
    def trucks(self) -> list[dict[str, Any]]:
        return self.filtered_records

    @property
    def stats(self) -> TruckStats:
        return compute_truck_stats(self.all_records, len(self.filtered_records))

    def create_truck(self, data: dict[str, Any]) -> Any:
        return self._create(lambda: self.client.trucks.create_truck(data))

    def update_truck(self, truck_id: str, data: dict[str, Any]) -> Any:
        return self._update(truck_id, data, lambda: self.client.trucks.update_truck(truck_id, data))

    def delete_truck(self, truck_id: str) -> None:
        self._delete(truck_id, lambda: self.client.trucks.delete_truck(truck_id))

    def assign_driver(self, truck_id: str, driver_id: Optional[str]) -> Any:
        return self._assign(
            lambda: self.client.trucks.assign_driver(truck_id, driver_id),
            truck_id=truck_id,
            driver_id=driver_id,
        )

    def assign_trailer(self, truck_id: str, trailer_id: Optional[str]) -> Any:
        return self._assign(
            lambda: self.client.trucks.assign_trailer(truck_id, trailer_id),
            truck_id=truck_id,
            trailer_id=trailer_id,
        )


class TrailersView(_AssetListView):
    """The trailers list, filterable by trailer type."""

    search_fields = TRAILER_SEARCH_FIELDS
    type_field = "type"

    def __init__(self, client: HaulbaseClient, filters: Optional[AssetFilters] = None) -> None:
        super().__init__(client, client.trailers.get_trailers, "trailers", filters)

    @property
    def trailers(self) -> list[dict[str, Any]]:
        return self.filtered_records

    @property
    def stats(self) -> TrailerStats:
        return compute_trailer_stats(self.all_records, len(self.filtered_records))

    def create_trailer(self, data: dict[str, Any]) -> Any:
        return self._create(lambda: self.client.trailers.create_trailer(data))

    def update_trailer(self, trailer_id: str, data: dict[str, Any]) -> Any:
        return self._update(
            trailer_id, data, lambda: self.client.trailers.update_trailer(trailer_id, data)
        )

    def delete_trailer(self, trailer_id: str) -> None:
        self._delete(trailer_id, lambda: self.client.trailers.delete_trailer(trailer_id))

    def assign_to_truck(self, trailer_id: str, truck_id: Optional[str]) -> Any:
        return self._assign(
            lambda: self.client.trailers.assign_to_truck(trailer_id, truck_id),
            trailer_id=trailer_id,
            truck_id=truck_id,
        )


class _AssetDetailView(DetailView):
    expiry_fields: tuple[str, ...] = ()

    def __init__(
        self,
        client: HaulbaseClient,
        record_id: str,
        fetcher: Callable[[], Any],
        name: str,
        config: Optional[ConfigManager] = None,
    ) -> None:
        super().__init__(client, record_id, fetcher, name)
        self.config = config or get_config()

    def is_expiring_soon(self, value: Any, today: Optional[date] = None) -> bool:
        return is_expiring_soon(value, self.config.get_expiry_warning_days(), today)

    def expiring_documents(self, today: Optional[date] = None) -> list[str]:
        """Compliance date fields on this asset that are expired or about to be."""
        record = self.record or {}
        return [
            field for field in self.expiry_fields if self.is_expiring_soon(record.get(field), today)
        ]

    def update_fields(self, updates: dict[str, Any]) -> Any:
        """Asset updates reload the record, since assignments are server-derived."""
        result = self.mutations.mutate(lambda: self._update(updates))
        self.refetch()
        return result

    def _after_assignment(self, result: Any, **context: Any) -> Any:
        self.logger.info("asset_assignment_changed", **context)
        self.refetch()
        return result


class TruckView(_AssetDetailView):
    """A single truck."""

    expiry_fields = TRUCK_EXPIRY_FIELDS

    def __init__(
        self, client: HaulbaseClient, truck_id: str, config: Optional[ConfigManager] = None
    ) -> None:
        super().__init__(client, truck_id, lambda: client.trucks.get_truck(truck_id), "truck", config)

    @property
    def truck(self) -> Optional[dict[str, Any]]:
        return self.record

    def _update(self, updates: dict[str, Any]) -> Any:
        return self.client.trucks.update_truck(self.record_id, updates)

    def delete(self) -> Any:
        return self.mutations.mutate(lambda: self.client.trucks.delete_truck(self.record_id))

    def assign_driver(self, driver_id: Optional[str]) -> Any:
        result = self.mutations.mutate(
            lambda: self.client.trucks.assign_driver(self.record_id, driver_id)
        )
        return self._after_assignment(result, driver_id=driver_id)

    def assign_trailer(self, trailer_id: Optional[str]) -> Any:
        result = self.mutations.mutate(
            lambda: self.client.trucks.assign_trailer(self.record_id, trailer_id)
        )
        return self._after_assignment(result, trailer_id=trailer_id)


class TrailerView(_AssetDetailView):
    """A single trailer."""

    expiry_fields = TRAILER_EXPIRY_FIELDS

    def __init__(
        self, client: HaulbaseClient, trailer_id: str, config: Optional[ConfigManager] = None
    ) -> None:
        super().__init__(
            client, trailer_id, lambda: client.trailers.get_trailer(trailer_id), "trailer", config
        )

    @property
    def trailer(self) -> Optional[dict[str, Any]]:
        return self.record

    def _update(self, updates: dict[str, Any]) -> Any:
        return self.client.trailers.update_trailer(self.record_id, updates)

    def delete(self) -> Any:
        return self.mutations.mutate(lambda: self.client.trailers.delete_trailer(self.record_id))

    def assign_to_truck(self, truck_id: Optional[str]) -> Any:
        result = self.mutations.mutate(
            lambda: self.client.trailers.assign_to_truck(self.record_id, truck_id)
        )
        return self._after_assignment(result, truck_id=truck_id)


class FleetAssets:
    """Trucks and trailers together, for fleet overviews."""

    def __init__(self, client: HaulbaseClient) -> None:
        self.trucks = TrucksView(client)
        self.trailers = TrailersView(client)

    def fetch(self) -> None:
        self.trucks.fetch()
        self.trailers.fetch()

    def refetch(self) -> None:
        self.trucks.refetch()
        self.trailers.refetch()

    @property
    def stats(self) -> FleetStats:
        trucks = self.trucks.stats
        trailers = self.trailers.stats
        return FleetStats(total_assets=trucks.total + trailers.total, trucks=trucks, trailers=trailers)

    @property
    def loading(self) -> bool:
        return self.trucks.loading or self.trailers.loading

    @property
    def error(self) -> Optional[str]:
        return self.trucks.error or self.trailers.error

    @property
    def mutating(self) -> bool:
        return self.trucks.mutating or self.trailers.mutating
