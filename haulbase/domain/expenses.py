"""
Expenses views - search, filters, sorting, statistics and the approval
workflow.
"""

from typing import Any, Callable, Optional

from haulbase.api.client import HaulbaseClient
from haulbase.core.config import ConfigManager, get_config
from haulbase.data.models.common import SortDirection, SortState
from haulbase.data.models.expense import (
    ACTION_REQUIRED_EXPENSE_STATUSES,
    APPROVED_AMOUNT_STATUSES,
    EDITABLE_EXPENSE_STATUSES,
    PENDING_AMOUNT_STATUSES,
    ExpenseAmounts,
    ExpenseFilters,
    ExpenseStats,
    ExpenseStatus,
    allowed_expense_transitions,
    expense_category_group,
)
from haulbase.domain.base import DetailView, ListView, count_by, matches_search, text, to_float
from haulbase.state import ApiRequest, ApiState

EXPENSE_SEARCH_FIELDS = ("vendor", "description", "reference_number")

EXPENSE_SORT_KEYS: dict[str, Callable[[dict[str, Any]], Any]] = {
    "vendor": lambda expense: text(expense, "vendor"),
    "amount": lambda expense: to_float(expense.get("amount")),
    "category": lambda expense: text(expense, "category"),
    "status": lambda expense: text(expense, "status"),
}


def expense_sort_key(field: str) -> Callable[[dict[str, Any]], Any]:
    """Key function for a sort field; unknown fields sort by date."""
    return EXPENSE_SORT_KEYS.get(field, lambda expense: text(expense, "date"))


def filter_expenses(
    expenses: list[dict[str, Any]], filters: ExpenseFilters
) -> list[dict[str, Any]]:
    result = [e for e in expenses if matches_search(e, filters.search, EXPENSE_SEARCH_FIELDS)]
    if filters.status != "all":
        result = [expense for expense in result if expense.get("status") == filters.status]
    if filters.category != "all":
        result = [expense for expense in result if expense.get("category") == filters.category]
    return result


def sort_expenses(expenses: list[dict[str, Any]], sort: SortState) -> list[dict[str, Any]]:
    return sorted(expenses, key=expense_sort_key(sort.field), reverse=sort.descending)


def compute_expense_stats(
    expenses: list[dict[str, Any]], filtered: list[dict[str, Any]]
) -> ExpenseStats:
    """
    Counts and money totals over all expenses.

    Pending money includes the legacy "pending" status; approved money
    includes paid expenses.
    """
    amounts = ExpenseAmounts(filtered=sum(to_float(e.get("amount")) for e in filtered))
    for expense in expenses:
        amount = to_float(expense.get("amount"))
        amounts.total += amount
        if expense.get("status") in PENDING_AMOUNT_STATUSES:
            amounts.pending += amount
        elif expense.get("status") in APPROVED_AMOUNT_STATUSES:
            amounts.approved += amount

    by_status = count_by(expenses, lambda expense: text(expense, "status"))
    by_category = count_by(
        (expense for expense in expenses if expense.get("category")),
        lambda expense: text(expense, "category"),
    )
    by_group = count_by(
        (expense for expense in expenses if expense.get("category")),
        lambda expense: expense_category_group(expense.get("category")),
    )
    action_required = {status.value for status in ACTION_REQUIRED_EXPENSE_STATUSES}

    return ExpenseStats(
        total=len(expenses),
        filtered=len(filtered),
        by_status=by_status,
        by_category=by_category,
        by_group=by_group,
        amounts=amounts,
        pending_approval=by_status.get(ExpenseStatus.PENDING_APPROVAL.value, 0),
        approved=by_status.get(ExpenseStatus.APPROVED.value, 0),
        paid=by_status.get(ExpenseStatus.PAID.value, 0),
        rejected=by_status.get(ExpenseStatus.REJECTED.value, 0),
        action_required=sum(by_status.get(status, 0) for status in action_required),
    )


class ExpensesView(ListView):
    """
    The expenses list with server-side statistics alongside.

    The list endpoint answers `{"expenses": [...], "total": N}`.

    Workflow actions (approve, reject, mark paid) refetch both the list and
    the server statistics.
    """

    def __init__(
        self,
        client: HaulbaseClient,
        filters: Optional[ExpenseFilters] = None,
        config: Optional[ConfigManager] = None,
    ) -> None:
        super().__init__(
            client, client.expenses.get_expenses, "expenses", records_key="expenses"
        )
        defaults = (config or get_config()).get_list_defaults("expenses")
        self.default_sort = SortState(
            field=defaults.sort_field, direction=SortDirection(defaults.sort_direction)
        )
        self.filters = filters or ExpenseFilters()
        self.sort = self.default_sort
        self.api_stats_state = ApiState(client.expenses.get_expense_stats)
        self.workflow = ApiRequest()
        self.exporter = ApiRequest()

    @property
    def expenses(self) -> list[dict[str, Any]]:
        return sort_expenses(filter_expenses(self.all_records, self.filters), self.sort)

    @property
    def stats(self) -> ExpenseStats:
        records = self.all_records
        return compute_expense_stats(records, filter_expenses(records, self.filters))

    @property
    def api_stats(self) -> Any:
        return self.api_stats_state.data

    @property
    def workflow_loading(self) -> bool:
        return self.workflow.loading

    @property
    def exporting(self) -> bool:
        return self.exporter.loading

    def fetch(self, *args: Any, **kwargs: Any) -> Any:
        expenses = super().fetch(*args, **kwargs)
        self.api_stats_state.fetch()
        return expenses

    def refetch(self) -> Any:
        expenses = super().refetch()
        self.api_stats_state.refetch()
        return expenses

    def set_filters(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
        category: Optional[str] = None,
        sort: Optional[SortState] = None,
    ) -> None:
        updates = {"search": search, "status": status, "category": category}
        self.filters = self.filters.model_copy(
            update={key: value for key, value in updates.items() if value is not None}
        )
        if sort is not None:
            self.sort = sort

    def reset_filters(self) -> None:
        self.filters = ExpenseFilters()
        self.sort = self.default_sort

    def toggle_sort(self, field: str) -> SortState:
        """Flip direction when re-selecting the sort field, else sort by `field` descending."""
        self.sort = self.sort.toggled(field)
        return self.sort

    def create_expense(self, data: dict[str, Any]) -> Any:
        result = self.mutations.mutate(lambda: self.client.expenses.create_expense(data))
        self.logger.info("expense_created")
        self.refetch()
        return result

    def update_expense(self, expense_id: str, data: dict[str, Any]) -> Any:
        result = self.mutations.mutate(
            lambda: self.client.expenses.update_expense(expense_id, data)
        )
        self._merge_local(expense_id, data)
        return result

    def delete_expense(self, expense_id: str) -> None:
        self.mutations.mutate(lambda: self.client.expenses.delete_expense(expense_id))
        self._remove_local(expense_id)

    def approve_expense(self, expense_id: str) -> None:
        self.workflow.execute(lambda: self.client.expenses.approve_expense(expense_id))
        self.logger.info("expense_approved", expense_id=expense_id)
        self.refetch()

    def reject_expense(self, expense_id: str, reason: str) -> None:
        self.workflow.execute(lambda: self.client.expenses.reject_expense(expense_id, reason))
        self.logger.info("expense_rejected", expense_id=expense_id)
        self.refetch()

    def mark_as_paid(
        self, expense_id: str, payment_details: Optional[dict[str, Any]] = None
    ) -> None:
        self.workflow.execute(
            lambda: self.client.expenses.mark_as_paid(expense_id, payment_details)
        )
        self.logger.info("expense_marked_paid", expense_id=expense_id)
        self.refetch()

    def export_expenses(self) -> bytes:
        """CSV export restricted to the active status and category filters."""
        filters = {
            "status": None if self.filters.status == "all" else self.filters.status,
            "category": None if self.filters.category == "all" else self.filters.category,
        }
        return self.exporter.execute(lambda: self.client.expenses.export_expenses(filters))


class ExpenseView(DetailView):
    """A single expense and its workflow actions."""

    def __init__(self, client: HaulbaseClient, expense_id: str) -> None:
        super().__init__(
            client, expense_id, lambda: client.expenses.get_expense(expense_id), "expense"
        )
        self.workflow = ApiRequest()

    @property
    def expense(self) -> Optional[dict[str, Any]]:
        return self.record

    @property
    def error(self) -> Optional[str]:
        return self.detail_state.error or self.workflow.error

    @property
    def mutating(self) -> bool:
        return self.mutations.loading or self.workflow.loading

    @property
    def can_edit(self) -> bool:
        """Only drafts and expenses still waiting on a receipt or confirmation are editable."""
        status = (self.record or {}).get("status")
        return status in {s.value for s in EDITABLE_EXPENSE_STATUSES}

    @property
    def allowed_transitions(self) -> list[ExpenseStatus]:
        return allowed_expense_transitions((self.record or {}).get("status") or "")

    def _update(self, updates: dict[str, Any]) -> Any:
        return self.client.expenses.update_expense(self.record_id, updates)

    def delete(self) -> Any:
        return self.mutations.mutate(lambda: self.client.expenses.delete_expense(self.record_id))

    def _run_workflow(self, call: Callable[[], Any], event: str) -> None:
        self.workflow.execute(call)
        self.logger.info(event)
        self.refetch()

    def submit_for_approval(self) -> None:
        self._run_workflow(
            lambda: self.client.expenses.submit_for_approval(self.record_id),
            "expense_submitted",
        )

    def approve(self) -> None:
        self._run_workflow(
            lambda: self.client.expenses.approve_expense(self.record_id), "expense_approved"
        )

    def reject(self, reason: str) -> None:
        self._run_workflow(
            lambda: self.client.expenses.reject_expense(self.record_id, reason),
            "expense_rejected",
        )

    def mark_as_paid(self, payment_details: Optional[dict[str, Any]] = None) -> None:
        self._run_workflow(
            lambda: self.client.expenses.mark_as_paid(self.record_id, payment_details),
            "expense_marked_paid",
        )
