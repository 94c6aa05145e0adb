"""
Driver portal API - the driver-facing side: assigned loads, trip updates,
earnings and expense submission.
"""

from typing import Any, Optional

from haulbase.api.base import ResourceApi, pick

PORTAL_LOAD_FILTER_KEYS = ("status", "organization_id", "limit", "offset")
PORTAL_EARNINGS_FILTER_KEYS = ("organization_id", "limit", "offset")
PORTAL_EXPENSE_FILTER_KEYS = ("organization_id", "status", "limit", "offset")


class DriverPortalApi(ResourceApi):
    """Endpoints under /v1/driver-portal."""

    def get_profiles(self) -> Any:
        return self.client.get("/v1/driver-portal/profiles")

    def get_dashboard(self, organization_id: Optional[str] = None) -> Any:
        return self.client.get(
            "/v1/driver-portal/dashboard", params={"organization_id": organization_id}
        )

    def get_loads(self, filters: Optional[dict[str, Any]] = None) -> Any:
        return self.client.get(
            "/v1/driver-portal/loads", params=pick(filters, PORTAL_LOAD_FILTER_KEYS)
        )

    def get_load(self, load_id: str) -> Any:
        return self.client.get(f"/v1/driver-portal/loads/{load_id}")

    def start_trip(self, load_id: str) -> Any:
        """Mark an assigned load as in transit."""
        return self.client.post(f"/v1/driver-portal/loads/{load_id}/start")

    def update_load_status(self, load_id: str, status: str, notes: Optional[str] = None) -> Any:
        return self.client.post(
            f"/v1/driver-portal/loads/{load_id}/update-status", {"status": status, "notes": notes}
        )

    def complete_trip(self, load_id: str, notes: Optional[str] = None) -> Any:
        """Mark a load as delivered."""
        return self.client.post(f"/v1/driver-portal/loads/{load_id}/complete", {"notes": notes})

    def get_load_documents(self, load_id: str) -> Any:
        return self.client.get(f"/v1/driver-portal/loads/{load_id}/documents")

    def upload_document(self, load_id: str, document: dict[str, Any]) -> Any:
        """Attach an already uploaded storage key to a load."""
        return self.client.post(f"/v1/driver-portal/loads/{load_id}/documents", document)

    def get_earnings(self, filters: Optional[dict[str, Any]] = None) -> Any:
        return self.client.get(
            "/v1/driver-portal/earnings", params=pick(filters, ("organization_id",))
        )

    def get_earnings_history(self, filters: Optional[dict[str, Any]] = None) -> Any:
        return self.client.get(
            "/v1/driver-portal/earnings/history",
            params=pick(filters, PORTAL_EARNINGS_FILTER_KEYS),
        )

    def update_location(self, location: dict[str, Any]) -> Any:
        return self.client.post("/v1/driver-portal/location", location)

    # Expenses

    def get_expenses(self, filters: Optional[dict[str, Any]] = None) -> Any:
        return self.client.get(
            "/v1/driver-portal/expenses", params=pick(filters, PORTAL_EXPENSE_FILTER_KEYS)
        )

    def get_expense(self, expense_id: str) -> Any:
        return self.client.get(f"/v1/driver-portal/expenses/{expense_id}")

    def submit_expense(self, data: dict[str, Any]) -> Any:
        return self.client.post("/v1/driver-portal/expenses", data)

    def update_expense(self, expense_id: str, data: dict[str, Any]) -> Any:
        return self.client.patch(f"/v1/driver-portal/expenses/{expense_id}", data)
