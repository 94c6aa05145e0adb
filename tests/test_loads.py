"""Tests for the loads views."""

import pytest

from haulbase.core.errors import ApiError
from haulbase.data.models.common import SortDirection, SortState
from haulbase.data.models.load import LoadFilters
from haulbase.domain.base import to_float, to_int
from haulbase.domain.loads import (
    LoadsView,
    LoadView,
    compute_load_stats,
    filter_loads,
    sort_loads,
)

LOADS = [
    {
        "id": "l1",
        "reference_number": "FO-1001",
        "status": "dispatched",
        "billing_status": "pending",
        "broker": {"name": "TQL"},
        "shipper": {"city": "Tulsa"},
        "consignee": {"city": "Dallas"},
        "driver": {"first_name": "Maria", "last_name": "Lopez"},
        "schedule": {"pickup_date": "2026-10-02"},
        "financials": {"revenue": "2400.00", "driver_pay": "800", "miles": 600},
        "created_at": "2026-10-01T08:00:00Z",
    },
    {
        "id": "l2",
        "reference_number": "FO-1002",
        "status": "in_transit",
        "billing_status": "pending",
        "broker_name": "Echo Global",
        "shipper": {"city": "Joplin"},
        "consignee": {"city": "Memphis"},
        "schedule": {"pickup_date": "2026-10-05"},
        "financials": {"revenue": 1800, "driver_pay": 600, "miles": 400},
        "created_at": "2026-10-03T08:00:00Z",
    },
    {
        "id": "l3",
        "reference_number": "FO-1003",
        "status": "delivered",
        "billing_status": "invoiced",
        "broker": {"name": "Coyote"},
        "schedule": {"pickup_date": "2026-09-28"},
        "financials": {"revenue": "1800", "miles": "bad"},
        "created_at": "2026-09-27T08:00:00Z",
    },
    {
        "id": "l4",
        "reference_number": "FO-1004",
        "status": "dispatched",
        "billing_status": "pending",
        "created_at": "2026-10-04T08:00:00Z",
    },
]


@pytest.fixture
def view(api, client, config):
    api.add("GET", "/v1/loads", {"success": True, "data": LOADS})
    view = LoadsView(client, config=config)
    view.fetch()
    return view


def _refs(loads):
    return [load["reference_number"] for load in loads]


def test_default_sort_is_newest_first(view):
    assert _refs(view.loads) == ["FO-1004", "FO-1002", "FO-1001", "FO-1003"]


def test_search_matches_nested_fields_case_insensitively(view):
    view.set_filters(search="lopez")
    assert _refs(view.loads) == ["FO-1001"]

    view.set_filters(search="MEMPHIS")
    assert _refs(view.loads) == ["FO-1002"]

    view.set_filters(search="echo")
    assert _refs(view.loads) == ["FO-1002"]


def test_status_and_billing_filters_combine(view):
    view.set_filters(status="dispatched")
    assert set(_refs(view.loads)) == {"FO-1001", "FO-1004"}

    view.set_filters(status="all", billing="invoiced")
    assert _refs(view.loads) == ["FO-1003"]


def test_revenue_sort_is_stable_for_ties():
    loads = [
        {"id": "a", "financials": {"revenue": "1800"}},
        {"id": "b", "financials": {"revenue": "2400"}},
        {"id": "c", "financials": {"revenue": 1800}},
        {"id": "d"},
    ]

    desc = sort_loads(loads, SortState(field="revenue"))
    asc = sort_loads(loads, SortState(field="revenue", direction=SortDirection.ASC))

    assert [load["id"] for load in desc] == ["b", "a", "c", "d"]
    assert [load["id"] for load in asc] == ["d", "a", "c", "b"]


def test_unknown_sort_field_falls_back_to_created_at():
    loads = [{"id": "old", "created_at": "2026-01-01"}, {"id": "new", "created_at": "2026-02-01"}]
    assert [load["id"] for load in sort_loads(loads, SortState(field="nope"))] == ["new", "old"]


def test_toggle_sort(view):
    assert view.toggle_sort("revenue") == SortState(field="revenue", direction=SortDirection.DESC)
    assert view.toggle_sort("revenue") == SortState(field="revenue", direction=SortDirection.ASC)
    assert view.toggle_sort("revenue") == SortState(field="revenue", direction=SortDirection.DESC)
    assert view.toggle_sort("status").direction == SortDirection.DESC


def test_reset_filters_restores_defaults(view):
    view.set_filters(search="x", status="paid", sort=SortState(field="revenue"))
    view.reset_filters()

    assert view.filters == LoadFilters()
    assert view.sort == view.default_sort


def test_stats_cover_all_loads_with_lenient_numbers(view):
    view.set_filters(status="dispatched")
    stats = view.stats

    assert stats.total == 4
    assert stats.filtered == 2
    assert stats.by_status == {"dispatched": 2, "in_transit": 1, "delivered": 1}
    assert stats.total_revenue == 6000.0
    assert stats.total_driver_pay == 1400.0
    assert stats.total_miles == 1000
    assert stats.margin == 4600.0
    assert stats.rpm == 6.0


def test_filtered_stats_cover_only_matching_loads(view):
    view.set_filters(status="dispatched")
    filtered = view.filtered_stats

    assert filtered.count == 2
    assert filtered.total_revenue == 2400.0
    assert filtered.total_miles == 600


def test_rpm_is_zero_without_miles():
    stats = compute_load_stats([{"financials": {"revenue": 500}}], 1)
    assert stats.rpm == 0.0


@pytest.mark.parametrize("raw", ["NaN", "inf", "-Infinity", "1e400", float("nan")])
def test_non_finite_numbers_count_as_zero(raw):
    assert to_float(raw) == 0.0
    assert to_int(raw) == 0


def test_stats_survive_non_finite_financials():
    loads = [
        {"status": "delivered", "financials": {"revenue": "inf", "miles": "NaN"}},
        {"status": "delivered", "financials": {"revenue": "900", "miles": "1e400"}},
    ]

    stats = compute_load_stats(loads, 2)

    assert stats.total_miles == 0
    assert stats.total_revenue == 900.0
    assert stats.rpm == 0.0


def test_quick_filters_skip_empty_statuses(view):
    chips = {chip.status: chip.count for chip in view.quick_filters}
    assert chips == {"dispatched": 2, "in_transit": 1, "delivered": 1}


def test_update_status_merges_locally_after_success(api, view):
    api.add("PATCH", "/v1/loads/l1/status", {"success": True, "data": {"id": "l1"}})

    view.update_load_status("l1", "in_transit")

    assert next(load for load in view.all_records if load["id"] == "l1")["status"] == "in_transit"
    assert api.json_of(api.requests[-1]) == {"status": "in_transit"}


def test_failed_status_update_leaves_list_untouched(api, view):
    api.add("PATCH", "/v1/loads/l1/status", {"error": {"message": "Load is locked"}}, status=409)

    with pytest.raises(ApiError):
        view.update_load_status("l1", "paid")

    assert view.mutation_error == "Load is locked"
    assert next(load for load in view.all_records if load["id"] == "l1")["status"] == "dispatched"


def test_create_load_refetches_list(api, view):
    api.add("POST", "/v1/loads", {"success": True, "data": {"id": "l5"}})

    view.create_load({"reference_number": "FO-1005"})

    assert len(api.calls("GET", "/v1/loads")) == 2


def test_fetch_error_is_kept_on_view(api, client, config):
    api.add("GET", "/v1/loads", {"message": "Organization not found"}, status=404)
    view = LoadsView(client, config=config)

    assert view.fetch() is None
    assert view.error == "Organization not found"
    assert view.loads == []


def test_filter_loads_without_filters_keeps_everything():
    assert filter_loads(LOADS, LoadFilters()) == LOADS


def test_load_view_stop_changes_reload_stops(api, client):
    api.add("GET", "/v1/loads/l1", {"success": True, "data": LOADS[0]})
    api.add("GET", "/v1/loads/l1/stops", {"success": True, "data": [{"id": "s1"}]})
    api.add("GET", "/v1/loads/l1/stops", {"success": True, "data": [{"id": "s1"}, {"id": "s2"}]})
    api.add("POST", "/v1/loads/l1/stops", {"success": True, "data": {"id": "s2"}})
    api.add("PATCH", "/v1/loads/l1/status", {"success": True})

    view = LoadView(client, "l1")
    view.fetch()
    assert view.load["reference_number"] == "FO-1001"
    assert [stop["id"] for stop in view.stops] == ["s1"]

    view.add_stop({"stop_type": "delivery"})
    assert [stop["id"] for stop in view.stops] == ["s1", "s2"]

    view.update_status("in_transit")
    assert view.load["status"] == "in_transit"
