"""
Expenses API - expense CRUD, approval workflow, stats, export and categories.
"""

from typing import Any, Optional

from haulbase.api.base import FileInput, ResourceApi, file_part, pick

EXPENSE_FILTER_KEYS = (
    "status",
    "category",
    "category_id",
    "entity_type",
    "entity_id",
    "date_from",
    "date_to",
    "search",
    "submitted_by_user_id",
    "limit",
    "offset",
    "sort_by",
    "sort_order",
)
EXPORT_FILTER_KEYS = ("status", "category", "date_from", "date_to")


class ExpensesApi(ResourceApi):
    """Endpoints under /v1/expenses."""

    def get_expenses(self, filters: Optional[dict[str, Any]] = None) -> Any:
        """
        List expenses.

        Args:
            filters: Any of EXPENSE_FILTER_KEYS. `status` may be a list; each
                value is sent as a repeated query parameter.

        Returns:
            Response body with the matching expenses
        """
        return self.client.get("/v1/expenses", params=pick(filters, EXPENSE_FILTER_KEYS))

    def get_expense(self, expense_id: str) -> Any:
        return self.client.get(f"/v1/expenses/{expense_id}")

    def create_expense(self, data: dict[str, Any]) -> Any:
        return self.client.post("/v1/expenses", data)

    def update_expense(self, expense_id: str, data: dict[str, Any]) -> Any:
        return self.client.patch(f"/v1/expenses/{expense_id}", data)

    def delete_expense(self, expense_id: str) -> Any:
        return self.client.delete(f"/v1/expenses/{expense_id}")

    # Workflow

    def submit_for_approval(self, expense_id: str) -> Any:
        return self.client.post(f"/v1/expenses/{expense_id}/submit")

    def approve_expense(self, expense_id: str) -> Any:
        return self.client.post(f"/v1/expenses/{expense_id}/approve")

    def reject_expense(self, expense_id: str, reason: str) -> Any:
        return self.client.post(f"/v1/expenses/{expense_id}/reject", {"reason": reason})

    def mark_as_paid(
        self, expense_id: str, payment_details: Optional[dict[str, Any]] = None
    ) -> Any:
        """Mark an approved expense as paid (payment_method, payment_reference, ...)."""
        return self.client.post(f"/v1/expenses/{expense_id}/mark-paid", payment_details or {})

    # Reporting

    def get_expense_stats(self, date_from: Optional[str] = None, date_to: Optional[str] = None) -> Any:
        return self.client.get("/v1/expenses/stats", params={"from": date_from, "to": date_to})

    def get_expense_summary(
        self, date_from: Optional[str] = None, date_to: Optional[str] = None
    ) -> Any:
        return self.client.get(
            "/v1/expenses/summary", params={"date_from": date_from, "date_to": date_to}
        )

    def export_expenses(self, filters: Optional[dict[str, Any]] = None) -> bytes:
        """Export expenses as a CSV file; returns the raw bytes."""
        return self.client.get(
            "/v1/expenses/export", params=pick(filters, EXPORT_FILTER_KEYS), raw=True
        )

    # Categories

    def get_categories(self) -> Any:
        return self.client.get("/v1/expenses/categories")

    def create_category(self, data: dict[str, Any]) -> Any:
        return self.client.post("/v1/expenses/categories", data)

    def update_category(self, category_id: str, data: dict[str, Any]) -> Any:
        return self.client.patch(f"/v1/expenses/categories/{category_id}", data)

    def delete_category(self, category_id: str) -> Any:
        return self.client.delete(f"/v1/expenses/categories/{category_id}")

    # AI

    def parse_receipt(self, file: FileInput) -> Any:
        """Extract vendor, amount, date and category from a receipt image or PDF."""
        return self.client.post("/v1/expenses/parse-receipt", files={"file": file_part(file)})
