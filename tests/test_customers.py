"""Tests for the broker and facility views."""

import pytest

from haulbase.domain.customers import BrokersView, Customers, FacilitiesView

BROKERS = [
    {"id": "b1", "name": "TQL", "mc_number": "411443", "is_active": True, "is_preferred": True, "address": {"city": "Cincinnati"}},
    {"id": "b2", "name": "Echo Global", "mc_number": "469461", "is_active": True, "contact": {"name": "Jo Reyes"}},
    {"id": "b3", "name": "Old Broker", "is_active": False},
]

FACILITIES = [
    {"id": "f1", "company_name": "Tyson Foods", "facility_type": "shipper", "address": {"city": "Springdale", "state": "AR"}},
    {"id": "f2", "company_name": "Kroger DC", "facility_type": "receiver", "address": {"city": "Memphis", "state": "TN"}},
    {"id": "f3", "company_name": "Cross Dock", "facility_type": "both", "contact": {"name": "Pat"}},
    {"id": "f4", "company_name": "Yard", "facility_type": "yard"},
]


@pytest.fixture
def brokers(api, client):
    api.add("GET", "/v1/brokers", {"success": True, "data": BROKERS})
    view = BrokersView(client)
    view.fetch()
    return view


@pytest.fixture
def facilities(api, client):
    api.add("GET", "/v1/facilities", {"success": True, "data": FACILITIES})
    view = FacilitiesView(client)
    view.fetch()
    return view


def test_first_broker_fetch_asks_for_active_only(api, brokers):
    assert api.requests[0].url.params["is_active"] == "true"


def test_broker_refetch_follows_active_filter(api, brokers):
    brokers.set_filters(active="all")
    brokers.refetch()
    assert "is_active" not in api.requests[-1].url.params

    brokers.set_filters(active="inactive")
    brokers.refetch()
    assert api.requests[-1].url.params["is_active"] == "false"


def test_broker_search_and_stats(brokers):
    brokers.set_filters(search="jo reyes")
    assert [b["id"] for b in brokers.brokers] == ["b2"]

    stats = brokers.stats
    assert (stats.total, stats.filtered, stats.active, stats.inactive, stats.preferred) == (3, 1, 2, 1, 1)


def test_fmcsa_search_has_its_own_loading_state(api, brokers):
    api.add("GET", "/v1/brokers/fmcsa-lookup", {"success": True, "data": {"legal_name": "TQL"}})

    result = brokers.search_fmcsa("411443")

    assert result == {"legal_name": "TQL"}
    assert api.requests[-1].url.params["query"] == "411443"
    assert brokers.fmcsa.loading is False
    assert brokers.loading is False


def test_facility_type_filter_includes_both(facilities):
    facilities.set_filters(type="shipper")
    assert [f["id"] for f in facilities.facilities] == ["f1", "f3"]

    facilities.set_filters(type="receiver")
    assert [f["id"] for f in facilities.facilities] == ["f2", "f3"]

    facilities.set_filters(type="both")
    assert [f["id"] for f in facilities.facilities] == ["f3"]


def test_facility_search_covers_address(facilities):
    facilities.set_filters(search="tn")
    assert [f["id"] for f in facilities.facilities] == ["f2"]


def test_facility_stats(facilities):
    stats = facilities.stats

    assert stats.by_type == {"shipper": 1, "receiver": 1, "both": 1}
    assert stats.shippers == 2
    assert stats.receivers == 2
    assert stats.total == 4


def test_customer_totals(api, client):
    api.add("GET", "/v1/brokers", {"success": True, "data": BROKERS})
    api.add("GET", "/v1/facilities", {"success": True, "data": FACILITIES})

    customers = Customers(client)
    customers.fetch()

    assert customers.stats.total_customers == 7
    assert api.calls("GET", "/v1/facilities")[0].url.params["is_active"] == "true"
