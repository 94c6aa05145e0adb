"""
Loads API - load CRUD, status updates, dispatch, stops and rate con parsing.
"""

from typing import Any, Optional

from haulbase.api.base import FileInput, ResourceApi, file_part, pick

LOAD_FILTER_KEYS = (
    "status",
    "billing_status",
    "driver_id",
    "search",
    "pickup_date_from",
    "pickup_date_to",
)
ASSIGNMENT_FILTER_KEYS = ("status", "driver_id", "load_id")


class LoadsApi(ResourceApi):
    """Endpoints under /v1/loads and /v1/dispatch."""

    def get_loads(self, filters: Optional[dict[str, Any]] = None) -> Any:
        """List loads for the current organization."""
        return self.client.get("/v1/loads", params=pick(filters, LOAD_FILTER_KEYS))

    def get_load(self, load_id: str) -> Any:
        return self.client.get(f"/v1/loads/{load_id}")

    def create_load(self, data: dict[str, Any]) -> Any:
        return self.client.post("/v1/loads", data)

    def update_load(self, load_id: str, data: dict[str, Any]) -> Any:
        return self.client.patch(f"/v1/loads/{load_id}", data)

    def delete_load(self, load_id: str) -> Any:
        """Soft delete a load."""
        return self.client.delete(f"/v1/loads/{load_id}")

    def update_load_status(self, load_id: str, status: str) -> Any:
        """Move a load to a new status. The server records history on delivery."""
        return self.client.patch(f"/v1/loads/{load_id}/status", {"status": status})

    def update_billing_status(self, load_id: str, billing_status: str) -> Any:
        return self.client.patch(
            f"/v1/loads/{load_id}/billing-status", {"billing_status": billing_status}
        )

    def get_load_stats(self, date_from: Optional[str] = None, date_to: Optional[str] = None) -> Any:
        return self.client.get("/v1/loads/stats", params={"from": date_from, "to": date_to})

    # Dispatch

    def assign_load(self, data: dict[str, Any]) -> Any:
        """Assign a load to a driver (expects load_id, driver_id and optional truck/trailer)."""
        return self.client.post("/v1/dispatch/assign", data)

    def get_assignments(self, filters: Optional[dict[str, Any]] = None) -> Any:
        return self.client.get("/v1/dispatch", params=pick(filters, ASSIGNMENT_FILTER_KEYS))

    def get_assignment(self, assignment_id: str) -> Any:
        return self.client.get(f"/v1/dispatch/{assignment_id}")

    def cancel_assignment(self, assignment_id: str, reason: Optional[str] = None) -> Any:
        return self.client.post(f"/v1/dispatch/{assignment_id}/cancel", {"reason": reason})

    # Stops

    def get_stops(self, load_id: str) -> Any:
        return self.client.get(f"/v1/loads/{load_id}/stops")

    def add_stop(self, load_id: str, data: dict[str, Any]) -> Any:
        return self.client.post(f"/v1/loads/{load_id}/stops", data)

    def update_stop(self, load_id: str, stop_id: str, data: dict[str, Any]) -> Any:
        return self.client.patch(f"/v1/loads/{load_id}/stops/{stop_id}", data)

    def delete_stop(self, load_id: str, stop_id: str) -> Any:
        return self.client.delete(f"/v1/loads/{load_id}/stops/{stop_id}")

    def reorder_stops(self, load_id: str, stop_order: list[str]) -> Any:
        return self.client.put(f"/v1/loads/{load_id}/stops/reorder", {"stop_order": stop_order})

    # AI

    def parse_rate_con(self, file: FileInput) -> Any:
        """
        Extract load data from a rate confirmation (PDF or image).

        Args:
            file: Path to the document, or a (name, bytes, content_type) triple

        Returns:
            Extracted load fields as returned by the server
        """
        return self.client.post("/v1/loads/parse-rate-con", files={"file": file_part(file)})
