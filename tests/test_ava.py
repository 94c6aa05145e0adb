"""Tests for AVA severity helpers, fleet health and truck diagnostics."""

import pytest

from haulbase.data.models.diagnostic import DiagnosticSeverity
from haulbase.domain.ava import (
    CHAT_ERROR_REPLY,
    FleetHealthView,
    TruckDiagnosticsView,
    severity_counts,
    truck_health,
)

DIAGNOSTICS = [
    {"id": "dg1", "code": "P0420", "severity": "warning", "truck": {"id": "t1", "unit_number": "101"}},
    {"id": "dg2", "code": "SPN 3364", "severity": "critical"},
    {"id": "dg3", "code": "P0128", "severity": "mystery"},
]


def test_unknown_severity_parses_as_info():
    assert DiagnosticSeverity.parse("mystery") is DiagnosticSeverity.INFO
    assert DiagnosticSeverity.parse(None) is DiagnosticSeverity.INFO


def test_severity_counts():
    counts = severity_counts(DIAGNOSTICS)
    assert (counts.critical, counts.warning, counts.info, counts.total) == (1, 1, 1, 3)


@pytest.mark.parametrize(
    "diagnostics, expected",
    [
        (DIAGNOSTICS, "critical"),
        (DIAGNOSTICS[:1], "warning"),
        (DIAGNOSTICS[2:], "healthy"),
        ([], "healthy"),
    ],
)
def test_truck_health(diagnostics, expected):
    assert truck_health({"diagnostics": diagnostics}) == expected


def test_fleet_health_view(api, client):
    api.add(
        "GET",
        "/v1/ava/fleet",
        {
            "success": True,
            "data": {
                "summary": {"totalTrucks": 2, "criticalCount": 1},
                "trucks": [{"id": "t1", "diagnostics": DIAGNOSTICS}],
                "recentAlerts": [{"id": "dg2"}],
            },
        },
    )
    api.add("GET", "/v1/ava/settings", {"success": True, "data": {"configured": True}})

    view = FleetHealthView(client)
    view.fetch()

    assert view.configured is True
    assert view.summary["criticalCount"] == 1
    assert [t["id"] for t in view.trucks] == ["t1"]
    assert view.recent_alerts == [{"id": "dg2"}]


@pytest.fixture
def truck_view(api, client):
    api.add("GET", "/v1/ava/trucks/t1", {"success": True, "data": {"diagnostics": DIAGNOSTICS}})
    api.add("GET", "/v1/ava/trucks/t1/history", {"success": True, "data": {"history": [{"id": "old"}]}})
    view = TruckDiagnosticsView(client, "t1")
    view.fetch()
    return view


def test_truck_diagnostics_view(api, truck_view):
    assert truck_view.truck == {"id": "t1", "unit_number": "101"}
    assert truck_view.has_critical is True
    assert truck_view.history == [{"id": "old"}]
    assert api.calls("GET", "/v1/ava/trucks/t1/history")[0].url.params["limit"] == "20"
    assert api.calls("GET", "/v1/ava/trucks/t1")[0].url.params["includeResolved"] == "false"


def test_resolve_removes_diagnostic(api, truck_view):
    api.add("POST", "/v1/ava/diagnostics/dg2/resolve", {"success": True})

    truck_view.resolve("dg2")

    assert [d["id"] for d in truck_view.diagnostics] == ["dg1", "dg3"]
    assert truck_view.has_critical is False


def test_analyze_attaches_analysis(api, truck_view):
    api.add("POST", "/v1/ava/analyze", {"success": True, "data": {"analysis": {"summary": "Catalyst below threshold"}}})

    truck_view.analyze("dg1")

    assert truck_view.diagnostics[0]["ai_analysis"] == {"summary": "Catalyst below threshold"}
    assert api.json_of(api.calls("POST", "/v1/ava/analyze")[0])["diagnosticId"] == "dg1"


def test_chat_keeps_history_and_recovers_from_errors(api, truck_view):
    api.add("POST", "/v1/ava/chat", {"success": True, "data": {"message": "Check the DEF pump."}})
    api.add("POST", "/v1/ava/chat", {"error": {"message": "Model overloaded"}}, status=503)

    assert truck_view.chat("Why is the DEF light on?") == "Check the DEF pump."
    assert truck_view.chat("Anything else?") == CHAT_ERROR_REPLY
    assert truck_view.chat("   ") == ""

    assert [m["role"] for m in truck_view.chat_messages] == ["user", "assistant", "user", "assistant"]
    assert truck_view.chat_request.error == "Model overloaded"
    first = api.json_of(api.calls("POST", "/v1/ava/chat")[0])
    assert first == {"messages": [{"role": "user", "content": "Why is the DEF light on?"}], "truckId": "t1"}
