"""Tests for driver account status derivation and the drivers views."""

import pytest

from haulbase.data.models.driver import DriverAccountStatus, account_status_for
from haulbase.domain.drivers import DriversView, DriverView

DRIVERS = [
    {
        "id": "d1",
        "first_name": "Maria",
        "last_name": "Lopez",
        "email": "maria@acme.test",
        "status": "available",
        "user_id": "u1",
        "membership": {"status": "active"},
    },
    {
        "id": "d2",
        "first_name": "Sam",
        "last_name": "Okafor",
        "phone": "918-555-0101",
        "status": "driving",
        "membership": {"status": "invited"},
    },
    {"id": "d3", "first_name": "Lee", "last_name": "Park", "status": "off_duty"},
    {
        "id": "d4",
        "first_name": "Ana",
        "last_name": "Silva",
        "status": "inactive",
        "user_id": "u4",
        "membership": {"status": "left"},
    },
]


@pytest.mark.parametrize(
    "driver, expected",
    [
        (DRIVERS[0], DriverAccountStatus.ACTIVE),
        (DRIVERS[1], DriverAccountStatus.PENDING),
        (DRIVERS[2], DriverAccountStatus.UNCLAIMED),
        (DRIVERS[3], DriverAccountStatus.LEFT),
        ({"user_id": "u5"}, DriverAccountStatus.ACTIVE),
    ],
)
def test_account_status_for(driver, expected):
    assert account_status_for(driver) == expected


def test_pending_label_reads_invited():
    assert DriverAccountStatus.PENDING.label == "Invited"
    assert DriverAccountStatus.UNCLAIMED.label == "Unclaimed"


@pytest.fixture
def view(api, client):
    api.add("GET", "/v1/drivers", {"success": True, "data": DRIVERS})
    view = DriversView(client)
    view.fetch()
    return view


def test_records_are_enriched_with_account_status(view):
    assert [d["account_status"] for d in view.drivers] == ["active", "pending", "unclaimed", "left"]


def test_search_covers_full_name_email_and_phone(view):
    view.set_filters(search="maria lopez")
    assert [d["id"] for d in view.drivers] == ["d1"]

    view.set_filters(search="555-0101")
    assert [d["id"] for d in view.drivers] == ["d2"]


def test_account_filter(view):
    view.set_filters(account="pending")
    assert [d["id"] for d in view.drivers] == ["d2"]

    view.reset_filters()
    assert len(view.drivers) == 4


def test_stats(view):
    view.set_filters(status="driving")
    stats = view.stats

    assert stats.total == 4
    assert stats.filtered == 1
    assert (stats.active, stats.pending, stats.unclaimed, stats.left) == (1, 1, 1, 1)
    assert (stats.available, stats.driving, stats.off_duty, stats.inactive) == (1, 1, 1, 1)


def test_assignable_drivers_are_available_ones_within_filters(view):
    assert [d["id"] for d in view.assignable_drivers] == ["d1"]

    view.set_filters(search="park")
    assert view.assignable_drivers == []


def test_update_merges_and_delete_removes_locally(api, view):
    api.add("PATCH", "/v1/drivers/d3", {"success": True})
    api.add("DELETE", "/v1/drivers/d4", {"success": True})

    view.update_driver("d3", {"status": "available"})
    view.delete_driver("d4")

    assert [d["id"] for d in view.all_records] == ["d1", "d2", "d3"]
    assert view.all_records[2]["status"] == "available"
    assert view.stats.available == 2


def test_send_invite_reloads_driver_and_invite_status(api, client):
    api.add("GET", "/v1/drivers/d3", {"success": True, "data": DRIVERS[2]})
    api.add("GET", "/v1/drivers/d3", {"success": True, "data": {**DRIVERS[2], "membership": {"status": "invited"}}})
    api.add("GET", "/v1/drivers/d3/invite-status", {"success": True, "data": {"invited": False}})
    api.add("GET", "/v1/drivers/d3/invite-status", {"success": True, "data": {"invited": True}})
    api.add("POST", "/v1/drivers/d3/invite", {"success": True})

    view = DriverView(client, "d3")
    view.fetch()
    assert view.driver["account_status"] == "unclaimed"

    view.send_invite()

    assert view.driver["account_status"] == "pending"
    assert view.invite_status == {"invited": True}
