"""Tests for the command line front end, run against the fake API."""

import httpx
import pytest
from typer.testing import CliRunner

from haulbase import cli
from haulbase.api.client import HaulbaseClient

runner = CliRunner()


@pytest.fixture(autouse=True)
def fake_client(monkeypatch, client, api, settings):
    # Each CLI invocation closes its client, so hand out a fresh one per call
    # that shares the fixture's token store and fake transport.
    monkeypatch.setattr(
        cli,
        "build_client",
        lambda: HaulbaseClient(
            settings, tokens=client.tokens, transport=httpx.MockTransport(api.handler)
        ),
    )
    return client


def test_loads_list_prints_table_and_totals(api):
    api.add(
        "GET",
        "/v1/loads",
        {
            "success": True,
            "data": [
                {"id": "l1", "reference_number": "FO-1001", "status": "dispatched", "financials": {"revenue": 2400, "miles": 600}},
                {"id": "l2", "reference_number": "FO-1002", "status": "delivered", "financials": {"revenue": 1800, "miles": 400}},
            ],
        },
    )

    result = runner.invoke(cli.app, ["loads", "list", "--status", "dispatched"])

    assert result.exit_code == 0, result.output
    assert "FO-1001" in result.output
    assert "FO-1002" not in result.output
    assert "1 of 2 loads" in result.output


def test_api_error_exits_with_message(api):
    api.add("GET", "/v1/drivers", {"error": {"message": "Organization suspended"}}, status=403)

    result = runner.invoke(cli.app, ["drivers", "list"])

    assert result.exit_code == 1
    assert "Organization suspended" in result.output


def test_loads_status_updates_load(api):
    api.add("PATCH", "/v1/loads/l1/status", {"success": True})

    result = runner.invoke(cli.app, ["loads", "status", "l1", "in_transit"])

    assert result.exit_code == 0, result.output
    assert api.json_of(api.requests[0]) == {"status": "in_transit"}
    assert "In Transit" in result.output


def test_cancel_assignment_sends_reason(api):
    api.add("GET", "/v1/dispatch/a1", {"success": True, "data": {"id": "a1", "status": "accepted"}})
    api.add("POST", "/v1/dispatch/a1/cancel", {"success": True})

    result = runner.invoke(cli.app, ["loads", "cancel-assignment", "a1", "--reason", "Truck down"])

    assert result.exit_code == 0, result.output
    assert api.json_of(api.calls("POST", "/v1/dispatch/a1/cancel")[0]) == {"reason": "Truck down"}


def test_completed_assignment_is_not_cancelled(api):
    api.add("GET", "/v1/dispatch/a2", {"success": True, "data": {"id": "a2", "status": "completed"}})

    result = runner.invoke(cli.app, ["loads", "cancel-assignment", "a2"])

    assert result.exit_code == 1
    assert "cannot be cancelled" in result.output
    assert api.calls("POST", "/v1/dispatch/a2/cancel") == []


def test_drivers_list_assignable_only(api):
    api.add(
        "GET",
        "/v1/drivers",
        {
            "success": True,
            "data": [
                {"id": "d1", "first_name": "Maria", "last_name": "Lopez", "status": "available"},
                {"id": "d2", "first_name": "Sam", "last_name": "Okafor", "status": "driving"},
            ],
        },
    )

    result = runner.invoke(cli.app, ["drivers", "list", "--assignable"])

    assert result.exit_code == 0, result.output
    assert "Maria Lopez" in result.output
    assert "Sam Okafor" not in result.output


def test_expenses_list_reads_envelope_and_sorts_explicitly(api):
    api.add(
        "GET",
        "/v1/expenses",
        {
            "success": True,
            "data": {
                "expenses": [
                    {"id": "e1", "vendor": "Pilot", "status": "approved", "amount": "120", "date": "2026-10-02"},
                    {"id": "e2", "vendor": "Love's", "status": "pending_approval", "amount": "80", "date": "2026-10-05"},
                ],
                "total": 7,
            },
        },
    )
    api.add("GET", "/v1/expenses/stats", {"success": True, "data": {}})

    descending = runner.invoke(cli.app, ["expenses", "list", "--sort", "date"])
    ascending = runner.invoke(cli.app, ["expenses", "list", "--sort", "date", "--asc"])

    assert descending.exit_code == 0, descending.output
    assert descending.output.index("Love") < descending.output.index("Pilot")
    assert ascending.output.index("Pilot") < ascending.output.index("Love")
    assert "2 of 7 expenses" in descending.output


def test_expenses_reject_sends_reason(api):
    api.add("POST", "/v1/expenses/e1/reject", {"success": True})

    result = runner.invoke(cli.app, ["expenses", "reject", "e1", "--reason", "Duplicate"])

    assert result.exit_code == 0, result.output
    assert api.json_of(api.requests[0]) == {"reason": "Duplicate"}


def test_expenses_export_writes_file(api, tmp_path):
    api.add("GET", "/v1/expenses/export", content=b"id,amount\ne1,10\n")
    target = tmp_path / "out.csv"

    result = runner.invoke(cli.app, ["expenses", "export", "-o", str(target), "--status", "approved"])

    assert result.exit_code == 0, result.output
    assert target.read_bytes() == b"id,amount\ne1,10\n"


def test_custom_pnl_needs_a_date(api):
    result = runner.invoke(cli.app, ["pnl", "--period", "custom"])

    assert result.exit_code == 1
    assert api.requests == []


def test_documents_upload(api, tmp_path):
    api.add("POST", "/v1/uploads/presign", {"success": True, "data": {"uploadUrl": "https://storage.test/b/bol.pdf", "key": "k1"}})
    api.add("PUT", "/b/bol.pdf", external=True)
    api.add("POST", "/v1/uploads/confirm", {"success": True, "data": {"id": "doc-7"}})
    path = tmp_path / "bol.pdf"
    path.write_bytes(b"%PDF bill of lading")

    result = runner.invoke(cli.app, ["documents", "upload", str(path), "--load", "l1", "--type", "bol"])

    assert result.exit_code == 0, result.output
    assert "doc-7" in result.output
    assert api.json_of(api.calls("POST", "/v1/uploads/confirm")[0])["type"] == "bol"


def test_driver_dashboard_without_organization(api):
    api.add("GET", "/v1/driver-portal/dashboard", {"error": {"message": "Not a member of any organization"}}, status=403)

    result = runner.invoke(cli.app, ["driver", "dashboard"])

    assert result.exit_code == 0, result.output
    assert "driver join" in result.output


def test_driver_complete_lists_missing_paperwork(api):
    api.add("POST", "/v1/driver-portal/loads/l1/complete", {"success": True})
    api.add("GET", "/v1/driver-portal/loads/l1", {"success": True, "data": {"id": "l1", "status": "delivered"}})
    api.add("GET", "/v1/driver-portal/loads/l1/documents", {"success": True, "data": [{"type": "bol"}, {"type": "rate_con"}]})

    result = runner.invoke(cli.app, ["driver", "complete", "l1", "--notes", "Signed by J. Ruiz"])

    assert result.exit_code == 0, result.output
    assert "Proof of Delivery" in result.output
    assert api.json_of(api.calls("POST", "/v1/driver-portal/loads/l1/complete")[0]) == {"notes": "Signed by J. Ruiz"}


def test_driver_orgs_marks_left_organizations(api):
    api.add(
        "GET",
        "/v1/driver-settings/organizations",
        {"success": True, "data": [{"name": "Acme Freight"}, {"name": "Old Carrier", "is_readonly": True}]},
    )
    api.add("GET", "/v1/driver-settings/invites", {"success": True, "data": []})
    api.add("GET", "/v1/driver-settings/history", {"success": True, "data": []})

    result = runner.invoke(cli.app, ["driver", "orgs"])

    assert result.exit_code == 0, result.output
    assert "Old Carrier" in result.output
    assert "read-only" in result.output


def test_logout_forgets_tokens(api, fake_client):
    api.add("POST", "/v1/auth/logout", {"success": True})

    result = runner.invoke(cli.app, ["logout"])

    assert result.exit_code == 0, result.output
    assert fake_client.tokens.access_token is None
