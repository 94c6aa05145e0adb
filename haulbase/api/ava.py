"""
AVA API - AI mechanic: truck diagnostics, fault code analysis and chat.

Diagnostics come from the Motive telematics integration; the organization
must save a Motive API key before syncing.
"""

from typing import Any, Optional

from haulbase.api.base import ResourceApi


class AvaApi(ResourceApi):
    """Endpoints under /v1/ava."""

    def get_fleet_health(self) -> Any:
        """Health overview of every truck in the fleet."""
        return self.client.get("/v1/ava/fleet")

    def get_truck_diagnostics(self, truck_id: str, include_resolved: bool = False) -> Any:
        return self.client.get(
            f"/v1/ava/trucks/{truck_id}", params={"includeResolved": include_resolved}
        )

    def get_diagnostic_history(self, truck_id: str, limit: int = 50) -> Any:
        return self.client.get(f"/v1/ava/trucks/{truck_id}/history", params={"limit": limit})

    def link_truck(self, truck_id: str, motive_vehicle_id: Optional[str]) -> Any:
        """Link a truck to a Motive vehicle; None unlinks."""
        return self.client.post(
            f"/v1/ava/trucks/{truck_id}/link", {"motiveVehicleId": motive_vehicle_id}
        )

    def analyze_code(
        self,
        code: str,
        vehicle_info: Optional[dict[str, Any]] = None,
        diagnostic_id: Optional[str] = None,
    ) -> Any:
        """
        Ask AVA to explain a diagnostic trouble code.

        Args:
            code: Fault code (e.g. "SPN 520372 FMI 4")
            vehicle_info: Optional make/model/year context
            diagnostic_id: Stored diagnostic to attach the analysis to

        Returns:
            Analysis with severity, likely causes and recommended actions
        """
        return self.client.post(
            "/v1/ava/analyze",
            {"code": code, "vehicleInfo": vehicle_info, "diagnosticId": diagnostic_id},
        )

    def analyze_multiple_codes(
        self, codes: list[str], vehicle_info: Optional[dict[str, Any]] = None
    ) -> Any:
        return self.client.post(
            "/v1/ava/analyze-multiple", {"codes": codes, "vehicleInfo": vehicle_info}
        )

    def chat(self, messages: list[dict[str, str]], truck_id: Optional[str] = None) -> Any:
        """Send a conversation (role/content messages) to AVA."""
        return self.client.post("/v1/ava/chat", {"messages": messages, "truckId": truck_id})

    def sync_diagnostics(self) -> Any:
        """Pull fresh fault codes from Motive."""
        return self.client.post("/v1/ava/sync")

    def resolve_diagnostic(self, diagnostic_id: str) -> Any:
        return self.client.post(f"/v1/ava/diagnostics/{diagnostic_id}/resolve")

    def get_settings(self) -> Any:
        return self.client.get("/v1/ava/settings")

    def save_settings(self, api_key: str) -> Any:
        return self.client.post("/v1/ava/settings", {"apiKey": api_key})

    def test_connection(self, api_key: str) -> Any:
        return self.client.post("/v1/ava/settings/test", {"apiKey": api_key})

    def get_motive_vehicles(self) -> Any:
        return self.client.get("/v1/ava/motive/vehicles")
