"""
AVA views - fleet health overview and per-truck diagnostics with analysis
and chat.
"""

from typing import Any, Optional

import structlog

from haulbase.api.client import HaulbaseClient
from haulbase.core.errors import HaulbaseError, extract_error_message
from haulbase.data.models.diagnostic import DiagnosticSeverity, SeverityCounts
from haulbase.domain.base import as_records, get_path, remove_record
from haulbase.state import ApiRequest, ApiState, Mutation

CHAT_FALLBACK_REPLY = "Sorry, I could not process your request."
CHAT_ERROR_REPLY = "Sorry, there was an error processing your request. Please try again."
HISTORY_LIMIT = 20


def severities(truck: dict[str, Any]) -> list[DiagnosticSeverity]:
    return [DiagnosticSeverity.parse(d.get("severity")) for d in as_records(truck.get("diagnostics"))]


def has_critical(truck: dict[str, Any]) -> bool:
    return DiagnosticSeverity.CRITICAL in severities(truck)


def has_warning(truck: dict[str, Any]) -> bool:
    return DiagnosticSeverity.WARNING in severities(truck)


def truck_health(truck: dict[str, Any]) -> str:
    """Overall state of a truck: critical, warning or healthy."""
    if has_critical(truck):
        return "critical"
    if has_warning(truck):
        return "warning"
    return "healthy"


def severity_counts(diagnostics: list[dict[str, Any]]) -> SeverityCounts:
    """Count diagnostics per severity; unknown severities count as info."""
    counts = SeverityCounts()
    for diagnostic in diagnostics:
        severity = DiagnosticSeverity.parse(diagnostic.get("severity"))
        setattr(counts, severity.value, getattr(counts, severity.value) + 1)
    return counts


class FleetHealthView:
    """Fleet-wide diagnostic overview plus the Motive integration settings."""

    def __init__(self, client: HaulbaseClient) -> None:
        self.client = client
        self.logger = structlog.get_logger(view="ava_fleet")
        self.health_state = ApiState(client.ava.get_fleet_health)
        self.settings_state = ApiState(client.ava.get_settings)
        self.sync_request = ApiRequest()

    @property
    def configured(self) -> bool:
        """Whether a Motive API key has been saved."""
        return bool(get_path(self.settings_state.data, "configured"))

    @property
    def summary(self) -> dict[str, Any]:
        return get_path(self.health_state.data, "summary") or {}

    @property
    def trucks(self) -> list[dict[str, Any]]:
        return as_records(get_path(self.health_state.data, "trucks"))

    @property
    def recent_alerts(self) -> list[dict[str, Any]]:
        return as_records(get_path(self.health_state.data, "recentAlerts"))

    @property
    def loading(self) -> bool:
        return self.health_state.loading or self.settings_state.loading

    @property
    def syncing(self) -> bool:
        return self.sync_request.loading

    @property
    def error(self) -> Optional[str]:
        return self.health_state.error or self.settings_state.error

    def fetch(self) -> None:
        self.health_state.fetch()
        self.settings_state.fetch()

    def refetch(self) -> None:
        self.fetch()

    def clear_error(self) -> None:
        self.health_state.clear_error()
        self.settings_state.clear_error()

    def sync(self) -> Any:
        """Pull new fault codes from Motive, then reload the overview."""
        result = self.sync_request.execute(self.client.ava.sync_diagnostics)
        self.logger.info("diagnostics_synced")
        self.fetch()
        return result


class TruckDiagnosticsView:
    """Active diagnostics, history and the AVA chat for one truck."""

    def __init__(self, client: HaulbaseClient, truck_id: str) -> None:
        self.client = client
        self.truck_id = truck_id
        self.logger = structlog.get_logger(view="ava_truck", truck_id=truck_id)
        self.diagnostics_state = ApiState(
            lambda: client.ava.get_truck_diagnostics(truck_id), initial_data={}
        )
        self.history_state = ApiState(
            lambda: client.ava.get_diagnostic_history(truck_id, HISTORY_LIMIT), initial_data={}
        )
        self.mutations = Mutation()
        self.chat_messages: list[dict[str, str]] = []
        self.chat_request = ApiRequest()

    @property
    def diagnostics(self) -> list[dict[str, Any]]:
        return as_records(get_path(self.diagnostics_state.data, "diagnostics"))

    @property
    def history(self) -> list[dict[str, Any]]:
        return as_records(get_path(self.history_state.data, "history"))

    @property
    def truck(self) -> Optional[dict[str, Any]]:
        """Truck details, taken from the first diagnostic."""
        diagnostics = self.diagnostics
        return diagnostics[0].get("truck") if diagnostics else None

    @property
    def counts(self) -> SeverityCounts:
        return severity_counts(self.diagnostics)

    @property
    def has_critical(self) -> bool:
        return self.counts.critical > 0

    @property
    def has_warning(self) -> bool:
        return self.counts.warning > 0

    @property
    def loading(self) -> bool:
        return self.diagnostics_state.loading or self.history_state.loading

    @property
    def error(self) -> Optional[str]:
        return self.diagnostics_state.error or self.history_state.error

    @property
    def mutating(self) -> bool:
        return self.mutations.loading

    def fetch(self) -> None:
        self.diagnostics_state.fetch()
        self.history_state.fetch()

    def refetch(self) -> None:
        self.fetch()

    def clear_error(self) -> None:
        self.diagnostics_state.clear_error()
        self.history_state.clear_error()

    def _set_diagnostics(self, diagnostics: list[dict[str, Any]]) -> None:
        self.diagnostics_state.set_data(
            lambda data: {**(data if isinstance(data, dict) else {}), "diagnostics": diagnostics}
        )

    def analyze(self, diagnostic_id: str) -> Any:
        """Ask AVA to analyze a stored diagnostic and attach the analysis locally."""
        diagnostic = next((d for d in self.diagnostics if d.get("id") == diagnostic_id), {})
        result = self.mutations.mutate(
            lambda: self.client.ava.analyze_code(
                diagnostic.get("code"), diagnostic.get("vehicle_info"), diagnostic_id
            )
        )
        analysis = get_path(result, "analysis")
        self._set_diagnostics(
            [
                {**d, "ai_analysis": analysis} if d.get("id") == diagnostic_id else d
                for d in self.diagnostics
            ]
        )
        return result

    def resolve(self, diagnostic_id: str) -> None:
        """Mark a diagnostic resolved and drop it from the active list."""
        self.mutations.mutate(lambda: self.client.ava.resolve_diagnostic(diagnostic_id))
        self._set_diagnostics(remove_record(self.diagnostics, diagnostic_id))
        self.logger.info("diagnostic_resolved", diagnostic_id=diagnostic_id)

    def chat(self, message: str) -> str:
        """
        Send a message in the truck's AVA conversation.

        A failed request is answered with an apology message so the
        conversation stays usable; the error is kept in `chat_request.error`.

        Returns:
            The assistant's reply
        """
        if not message.strip():
            return ""

        self.chat_messages.append({"role": "user", "content": message})
        history = [{"role": m["role"], "content": m["content"]} for m in self.chat_messages]
        try:
            result = self.chat_request.execute(
                lambda: self.client.ava.chat(history, self.truck_id)
            )
            reply = get_path(result, "message") or CHAT_FALLBACK_REPLY
        except HaulbaseError as e:
            self.logger.warning("ava_chat_failed", error=extract_error_message(e))
            reply = CHAT_ERROR_REPLY

        self.chat_messages.append({"role": "assistant", "content": reply})
        return reply
