"""Request shapes of pass-through resource endpoints."""

from haulbase.data.models.document import DocumentType, missing_invoice_documents
from haulbase.data.models.load import can_transition_load_to


def test_reorder_stops_uses_put(api, client):
    api.add("PUT", "/v1/loads/l1/stops/reorder", {"success": True})

    client.loads.reorder_stops("l1", ["s2", "s1"])

    assert api.json_of(api.requests[0]) == {"stop_order": ["s2", "s1"]}


def test_dispatch_assignment_filters(api, client):
    api.add("GET", "/v1/dispatch", {"success": True, "data": []})
    api.add("POST", "/v1/dispatch/a1/cancel", {"success": True})

    client.loads.get_assignments({"status": ["pending", "accepted"], "page": 2})
    client.loads.cancel_assignment("a1", "Driver unavailable")

    params = api.requests[0].url.params
    assert params.get_list("status") == ["pending", "accepted"]
    assert "page" not in params
    assert api.json_of(api.requests[1]) == {"reason": "Driver unavailable"}


def test_driver_portal_trip_flow(api, client):
    api.add("POST", "/v1/driver-portal/loads/l1/start", {"success": True})
    api.add("POST", "/v1/driver-portal/loads/l1/update-status", {"success": True})
    api.add("POST", "/v1/driver-portal/loads/l1/complete", {"success": True})
    api.add("GET", "/v1/driver-portal/dashboard", {"success": True, "data": {}})

    client.driver_portal.start_trip("l1")
    client.driver_portal.update_load_status("l1", "at_pickup", notes="Door 12")
    client.driver_portal.complete_trip("l1")
    client.driver_portal.get_dashboard()

    assert api.json_of(api.requests[1]) == {"status": "at_pickup", "notes": "Door 12"}
    assert "organization_id" not in api.requests[3].url.params


def test_ava_settings_use_camel_case_keys(api, client):
    api.add("POST", "/v1/ava/settings/test", {"success": True})
    api.add("POST", "/v1/ava/trucks/t1/link", {"success": True})

    client.ava.test_connection("motive-key")
    client.ava.link_truck("t1", "veh-88")

    assert api.json_of(api.requests[0]) == {"apiKey": "motive-key"}
    assert api.json_of(api.requests[1]) == {"motiveVehicleId": "veh-88"}


def test_missing_invoice_documents():
    documents = [{"type": "bol"}, {"doc_type": "rate_con"}, {"type": "lumper"}]
    assert missing_invoice_documents(documents) == [DocumentType.POD]


def test_load_transitions_are_advisory_lookups():
    assert can_transition_load_to("in_transit", "delivered")
    assert not can_transition_load_to("paid", "draft")
    assert not can_transition_load_to("unknown", "draft")


def test_driver_settings_endpoints(api, client):
    api.add("POST", "/v1/driver-settings/organizations/org-1/disconnect", {"success": True})
    api.add("GET", "/v1/driver-settings/profiles", {"success": True, "data": []})

    client.driver_settings.disconnect_from_org("org-1")
    client.driver_settings.get_profiles()

    assert [r.url.path for r in api.requests] == [
        "/api/v1/driver-settings/organizations/org-1/disconnect",
        "/api/v1/driver-settings/profiles",
    ]


def test_driver_connection_requests_from_the_driver_side(api, client):
    api.add("GET", "/v1/driver-connection/find-org", {"success": True, "data": {"name": "Acme"}})
    api.add("POST", "/v1/driver-connection/request", {"success": True})
    api.add("DELETE", "/v1/driver-connection/requests/r1", {"success": True})
    api.add("GET", "/v1/driver-connection/org-directory", {"success": True, "data": []})

    client.driver_connection.find_org("ACME42")
    client.driver_connection.request_connection("ACME42")
    client.driver_connection.cancel_request("r1")
    client.driver_connection.search_org_directory("reefer", state="TX")

    assert api.requests[0].url.params["code"] == "ACME42"
    assert api.json_of(api.requests[1]) == {"org_code": "ACME42"}
    assert api.requests[2].method == "DELETE"
    directory = api.requests[3].url.params
    assert (directory["query"], directory["state"], directory["limit"]) == ("reefer", "TX", "20")


def test_driver_connection_requests_from_the_organization_side(api, client):
    api.add("POST", "/v1/drivers/connection-requests/r1/approve", {"success": True})
    api.add("PATCH", "/v1/drivers/d1/sharing-level", {"success": True})
    api.add("GET", "/v1/drivers/search-network", {"success": True, "data": []})
    api.add("POST", "/v1/drivers/invite-driver", {"success": True})

    client.driver_connection.approve_request("r1")
    client.driver_connection.update_sharing_level("d1", "full")
    client.driver_connection.search_driver_network("lopez", limit=5)
    client.driver_connection.invite_driver("u7")

    assert api.json_of(api.requests[1]) == {"data_sharing_level": "full"}
    assert api.requests[2].url.params["limit"] == "5"
    assert api.json_of(api.requests[3]) == {"user_id": "u7"}


def test_driver_portal_expense_and_earnings_filters(api, client):
    api.add("GET", "/v1/driver-portal/expenses", {"success": True, "data": {"expenses": []}})
    api.add("GET", "/v1/driver-portal/earnings/history", {"success": True, "data": {"history": []}})
    api.add("POST", "/v1/driver-portal/location", {"success": True})

    client.driver_portal.get_expenses({"status": "approved", "category": "fuel", "limit": 10})
    client.driver_portal.get_earnings_history({"organization_id": "org-1", "offset": 20})
    client.driver_portal.update_location({"latitude": 36.15, "longitude": -95.99})

    assert dict(api.requests[0].url.params) == {"status": "approved", "limit": "10"}
    assert dict(api.requests[1].url.params) == {"organization_id": "org-1", "offset": "20"}
    assert api.json_of(api.requests[2]) == {"latitude": 36.15, "longitude": -95.99}
