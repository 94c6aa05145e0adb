"""
Customer views - brokers and facilities.
"""

from typing import Any, Optional

from haulbase.api.client import HaulbaseClient
from haulbase.data.models.customer import (
    BrokerFilters,
    BrokerStats,
    CustomerStats,
    FacilityFilters,
    FacilityStats,
    FacilityType,
)
from haulbase.domain.base import DetailView, ListView, matches_search
from haulbase.state import ApiRequest

BROKER_SEARCH_FIELDS = ("name", "mc_number", "contact.name", "address.city")
FACILITY_SEARCH_FIELDS = ("company_name", "address.city", "address.state", "contact.name")


def filter_brokers(brokers: list[dict[str, Any]], filters: BrokerFilters) -> list[dict[str, Any]]:
    result = list(brokers)
    if filters.active != "all":
        wanted = filters.active == "active"
        result = [broker for broker in result if bool(broker.get("is_active")) == wanted]
    return [b for b in result if matches_search(b, filters.search, BROKER_SEARCH_FIELDS)]


def compute_broker_stats(brokers: list[dict[str, Any]], filtered_count: int) -> BrokerStats:
    active = sum(1 for broker in brokers if broker.get("is_active"))
    return BrokerStats(
        total=len(brokers),
        filtered=filtered_count,
        active=active,
        inactive=len(brokers) - active,
        preferred=sum(1 for broker in brokers if broker.get("is_preferred")),
    )


def facility_matches_type(facility: dict[str, Any], wanted: str) -> bool:
    """Shipper and receiver filters also match facilities that are both."""
    facility_type = facility.get("facility_type")
    if wanted == "all":
        return True
    if wanted in (FacilityType.SHIPPER.value, FacilityType.RECEIVER.value):
        return facility_type in (wanted, FacilityType.BOTH.value)
    return facility_type == wanted


def filter_facilities(
    facilities: list[dict[str, Any]], filters: FacilityFilters
) -> list[dict[str, Any]]:
    return [
        facility
        for facility in facilities
        if facility_matches_type(facility, filters.type)
        and matches_search(facility, filters.search, FACILITY_SEARCH_FIELDS)
    ]


def compute_facility_stats(facilities: list[dict[str, Any]], filtered_count: int) -> FacilityStats:
    by_type = {facility_type.value: 0 for facility_type in FacilityType}
    for facility in facilities:
        facility_type = facility.get("facility_type")
        if facility_type in by_type:
            by_type[facility_type] += 1

    return FacilityStats(
        total=len(facilities),
        filtered=filtered_count,
        by_type=by_type,
        shippers=by_type[FacilityType.SHIPPER.value] + by_type[FacilityType.BOTH.value],
        receivers=by_type[FacilityType.RECEIVER.value] + by_type[FacilityType.BOTH.value],
    )


class FmcsaSearch:
    """FMCSA lookups with their own loading state."""

    def __init__(self, client: HaulbaseClient) -> None:
        self.client = client
        self.request = ApiRequest()

    @property
    def loading(self) -> bool:
        return self.request.loading

    def search(self, query: str) -> Any:
        return self.request.execute(lambda: self.client.brokers.fmcsa_lookup(query=query))


class BrokersView(ListView):
    """
    The brokers list.

    The first fetch asks the server for active brokers only; later refetches
    follow the active filter.
    """

    def __init__(self, client: HaulbaseClient, filters: Optional[BrokerFilters] = None) -> None:
        super().__init__(client, client.brokers.get_brokers, "brokers")
        self.filters = filters or BrokerFilters()
        self.fmcsa = FmcsaSearch(client)

    def fetch(self, *args: Any, **kwargs: Any) -> Any:
        if not args and not kwargs:
            args = ({"is_active": True},)
        return super().fetch(*args, **kwargs)

    def refetch(self) -> Any:
        is_active = None if self.filters.active == "all" else self.filters.active == "active"
        return self.list_state.fetch({"is_active": is_active})

    @property
    def brokers(self) -> list[dict[str, Any]]:
        return filter_brokers(self.all_records, self.filters)

    @property
    def stats(self) -> BrokerStats:
        return compute_broker_stats(self.all_records, len(self.brokers))

    def set_filters(self, search: Optional[str] = None, active: Optional[str] = None) -> None:
        updates = {"search": search, "active": active}
        self.filters = self.filters.model_copy(
            update={key: value for key, value in updates.items() if value is not None}
        )

    def reset_filters(self) -> None:
        self.filters = BrokerFilters()

    def create_broker(self, data: dict[str, Any]) -> Any:
        result = self.mutations.mutate(lambda: self.client.brokers.create_broker(data))
        self.refetch()
        return result

    def update_broker(self, broker_id: str, data: dict[str, Any]) -> Any:
        result = self.mutations.mutate(lambda: self.client.brokers.update_broker(broker_id, data))
        self._merge_local(broker_id, data)
        return result

    def delete_broker(self, broker_id: str) -> None:
        self.mutations.mutate(lambda: self.client.brokers.delete_broker(broker_id))
        self._remove_local(broker_id)

    def search_fmcsa(self, query: str) -> Any:
        return self.fmcsa.search(query)


class BrokerView(DetailView):
    """A single broker."""

    def __init__(self, client: HaulbaseClient, broker_id: str) -> None:
        super().__init__(client, broker_id, lambda: client.brokers.get_broker(broker_id), "broker")
        self.fmcsa = FmcsaSearch(client)

    @property
    def broker(self) -> Optional[dict[str, Any]]:
        return self.record

    @property
    def error(self) -> Optional[str]:
        return self.detail_state.error or self.mutations.error

    def _update(self, updates: dict[str, Any]) -> Any:
        return self.client.brokers.update_broker(self.record_id, updates)

    def delete(self) -> Any:
        return self.mutations.mutate(lambda: self.client.brokers.delete_broker(self.record_id))

    def search_fmcsa(self, query: str) -> Any:
        return self.fmcsa.search(query)


class FacilitiesView(ListView):
    """The facilities list; only active facilities are fetched."""

    def __init__(self, client: HaulbaseClient, filters: Optional[FacilityFilters] = None) -> None:
        super().__init__(client, client.facilities.get_facilities, "facilities")
        self.filters = filters or FacilityFilters()

    def fetch(self, *args: Any, **kwargs: Any) -> Any:
        if not args and not kwargs:
            args = ({"is_active": True},)
        return super().fetch(*args, **kwargs)

    @property
    def facilities(self) -> list[dict[str, Any]]:
        return filter_facilities(self.all_records, self.filters)

    @property
    def stats(self) -> FacilityStats:
        return compute_facility_stats(self.all_records, len(self.facilities))

    def set_filters(self, search: Optional[str] = None, type: Optional[str] = None) -> None:
        updates = {"search": search, "type": type}
        self.filters = self.filters.model_copy(
            update={key: value for key, value in updates.items() if value is not None}
        )

    def reset_filters(self) -> None:
        self.filters = FacilityFilters()

    def create_facility(self, data: dict[str, Any]) -> Any:
        result = self.mutations.mutate(lambda: self.client.facilities.create_facility(data))
        self.refetch()
        return result

    def update_facility(self, facility_id: str, data: dict[str, Any]) -> Any:
        result = self.mutations.mutate(
            lambda: self.client.facilities.update_facility(facility_id, data)
        )
        self._merge_local(facility_id, data)
        return result

    def delete_facility(self, facility_id: str) -> None:
        self.mutations.mutate(lambda: self.client.facilities.delete_facility(facility_id))
        self._remove_local(facility_id)


class FacilityView(DetailView):
    """A single facility."""

    def __init__(self, client: HaulbaseClient, facility_id: str) -> None:
        super().__init__(
            client, facility_id, lambda: client.facilities.get_facility(facility_id), "facility"
        )

    @property
    def facility(self) -> Optional[dict[str, Any]]:
        return self.record

    @property
    def error(self) -> Optional[str]:
        return self.detail_state.error or self.mutations.error

    def _update(self, updates: dict[str, Any]) -> Any:
        return self.client.facilities.update_facility(self.record_id, updates)

    def delete(self) -> Any:
        return self.mutations.mutate(lambda: self.client.facilities.delete_facility(self.record_id))


class Customers:
    """Brokers and facilities together."""

    def __init__(self, client: HaulbaseClient) -> None:
        self.brokers = BrokersView(client)
        self.facilities = FacilitiesView(client)

    def fetch(self) -> None:
        self.brokers.fetch()
        self.facilities.fetch()

    @property
    def stats(self) -> CustomerStats:
        brokers = self.brokers.stats
        facilities = self.facilities.stats
        return CustomerStats(
            total_customers=brokers.total + facilities.total,
            brokers=brokers,
            facilities=facilities,
        )

    @property
    def loading(self) -> bool:
        return self.brokers.loading or self.facilities.loading

    @property
    def mutating(self) -> bool:
        return self.brokers.mutating or self.facilities.mutating
