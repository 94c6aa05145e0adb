"""Tests for truck and trailer views, expiry checks and fleet statistics."""

from datetime import date

import pytest

from haulbase.domain.assets import (
    FleetAssets,
    TrailersView,
    TrucksView,
    TruckView,
    is_expiring_soon,
)

TODAY = date(2026, 10, 19)

TRUCKS = [
    {"id": "t1", "unit_number": "101", "make": "Freightliner", "vin": "1FUJ", "status": "active", "current_driver_id": "d1", "current_trailer_id": "r1"},
    {"id": "t2", "unit_number": "102", "make": "Peterbilt", "model": "579", "status": "maintenance"},
    {"id": "t3", "unit_number": "103", "make": "Kenworth", "status": "active", "current_driver_id": "d2"},
    {"id": "t4", "unit_number": "104", "make": "Volvo", "status": "available"},
]

TRAILERS = [
    {"id": "r1", "unit_number": "5301", "type": "reefer", "status": "active", "current_truck_id": "t1"},
    {"id": "r2", "unit_number": "5302", "type": "dry_van", "status": "active"},
    {"id": "r3", "unit_number": "5303", "type": "reefer", "status": "inactive"},
]


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2026-11-18", True),
        ("2026-11-19", False),
        ("2026-10-01", True),
        ("2026-10-25T00:00:00Z", True),
        (None, False),
        ("", False),
        ("not a date", False),
    ],
)
def test_is_expiring_soon(value, expected):
    assert is_expiring_soon(value, 30, today=TODAY) is expected


@pytest.fixture
def trucks(api, client):
    api.add("GET", "/v1/trucks", {"success": True, "data": TRUCKS})
    view = TrucksView(client)
    view.fetch()
    return view


@pytest.fixture
def trailers(api, client):
    api.add("GET", "/v1/trailers", {"success": True, "data": TRAILERS})
    view = TrailersView(client)
    view.fetch()
    return view


def test_truck_stats_ignore_unknown_statuses(trucks):
    stats = trucks.stats

    assert stats.total == 4
    assert stats.by_status == {"active": 2, "maintenance": 1, "inactive": 0}
    assert stats.with_drivers == 2
    assert stats.with_trailers == 1


def test_truck_filters(trucks):
    trucks.set_filters(status="active")
    assert [t["id"] for t in trucks.trucks] == ["t1", "t3"]

    trucks.set_filters(status="all", search="579")
    assert [t["id"] for t in trucks.trucks] == ["t2"]
    assert trucks.stats.filtered == 1


def test_trailer_stats_and_type_filter(trailers):
    stats = trailers.stats
    assert stats.available == 1
    assert stats.reefers == 2
    assert stats.by_type == {"reefer": 2, "dry_van": 1}

    trailers.set_filters(type="reefer", status="active")
    assert [t["id"] for t in trailers.trailers] == ["r1"]


def test_assigning_driver_refetches_trucks(api, trucks):
    api.add("POST", "/v1/trucks/t2/assign-driver", {"success": True})

    trucks.assign_driver("t2", None)

    assert api.json_of(api.calls("POST", "/v1/trucks/t2/assign-driver")[0]) == {"driver_id": None}
    assert len(api.calls("GET", "/v1/trucks")) == 2


def test_fleet_stats_combine_trucks_and_trailers(api, client):
    api.add("GET", "/v1/trucks", {"success": True, "data": TRUCKS})
    api.add("GET", "/v1/trailers", {"success": True, "data": TRAILERS})

    fleet = FleetAssets(client)
    fleet.fetch()

    assert fleet.stats.total_assets == 7
    assert fleet.error is None


def test_truck_view_lists_expiring_documents(api, client, config):
    api.add(
        "GET",
        "/v1/trucks/t1",
        {
            "success": True,
            "data": {
                "id": "t1",
                "registration_expiry": "2026-10-30",
                "insurance_expiry": "2027-06-01",
                "annual_inspection_expiry": "2026-09-01",
            },
        },
    )

    view = TruckView(client, "t1", config=config)
    view.fetch()

    assert view.expiring_documents(today=TODAY) == [
        "registration_expiry",
        "annual_inspection_expiry",
    ]


def test_truck_view_update_refetches_record(api, client, config):
    api.add("GET", "/v1/trucks/t1", {"success": True, "data": {"id": "t1", "status": "active"}})
    api.add("GET", "/v1/trucks/t1", {"success": True, "data": {"id": "t1", "status": "maintenance"}})
    api.add("PATCH", "/v1/trucks/t1", {"success": True})

    view = TruckView(client, "t1", config=config)
    view.fetch()
    view.update_field("status", "maintenance")

    assert view.truck["status"] == "maintenance"
    assert len(api.calls("GET", "/v1/trucks/t1")) == 2
