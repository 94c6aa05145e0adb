"""
Driver portal views - what a driver sees: the dashboard, assigned loads and
trip actions, expenses, earnings, paperwork and organization settings.

A driver can belong to several organizations. Records from the portal
endpoints carry their organization, and a driver who has not joined any
organization yet gets an empty dashboard rather than an error.
"""

from typing import Any, Callable, Optional

import structlog

from haulbase.api.client import HaulbaseClient
from haulbase.core.errors import ApiError, ValidationError, extract_error_message
from haulbase.data.models.document import DocumentType, missing_invoice_documents
from haulbase.data.models.driver_portal import DriverExpenseStats, EarningsSummary
from haulbase.data.models.expense import ExpenseCategory, ExpenseStatus
from haulbase.data.models.load import ACTIVE_LOAD_STATUSES, COMPLETED_LOAD_STATUSES
from haulbase.domain.base import DetailView, ListView, as_records, get_path, to_float, to_int
from haulbase.state import ApiRequest, ApiState, Mutation

NO_ORGANIZATION_HINTS = ("no organization", "not a member")
DOCUMENTS_PAGE_SIZE = 50
DEFAULT_DRIVER_NAME = "Driver"


def means_no_organization(error: Exception) -> bool:
    """Whether a dashboard failure only means the driver has not joined an organization."""
    if isinstance(error, ApiError) and error.status_code == 404:
        return True
    message = extract_error_message(error).lower()
    return any(hint in message for hint in NO_ORGANIZATION_HINTS)


def enrich_expense(expense: dict[str, Any]) -> dict[str, Any]:
    """Copy of `expense` with display labels for its status and category."""
    status = expense.get("status") or ""
    try:
        status_label = ExpenseStatus(status).label
    except ValueError:
        status_label = status.replace("_", " ").title()
    try:
        category_label: Optional[str] = ExpenseCategory(expense.get("category")).label
    except ValueError:
        category_label = None
    return {**expense, "status_label": status_label, "category_label": category_label}


def compute_driver_expense_stats(expenses: list[dict[str, Any]]) -> DriverExpenseStats:
    return DriverExpenseStats(
        pending=sum(1 for e in expenses if e.get("status") == ExpenseStatus.PENDING_APPROVAL),
        approved=sum(1 for e in expenses if e.get("status") == ExpenseStatus.APPROVED),
        total=sum(to_float(e.get("amount")) for e in expenses),
    )


def has_documents(load: dict[str, Any]) -> bool:
    return bool(as_records(load.get("documents")))


class DriverDashboardView:
    """
    The driver's home screen: current and upcoming loads, stats and profiles.

    Drivers without an organization either get a dashboard with no profiles
    or a "not a member" style error; both set `has_no_orgs` and leave `error`
    empty. Independent drivers get their own profile and personal stats.
    """

    def __init__(self, client: HaulbaseClient) -> None:
        self.client = client
        self.logger = structlog.get_logger(view="driver_dashboard")
        self.dashboard_state = ApiState(client.driver_portal.get_dashboard)
        self.invites = ApiRequest()
        self.actions = Mutation()
        self.organization_id: Optional[str] = None
        self.has_no_orgs = False
        self.invite_message: Optional[str] = None

    @property
    def dashboard(self) -> dict[str, Any]:
        data = self.dashboard_state.data
        return data if isinstance(data, dict) else {}

    @property
    def current_load(self) -> Optional[dict[str, Any]]:
        return self.dashboard.get("currentLoad")

    @property
    def upcoming_loads(self) -> list[dict[str, Any]]:
        return as_records(self.dashboard.get("upcomingLoads"))

    @property
    def stats(self) -> dict[str, Any]:
        return self.dashboard.get("stats") or {}

    @property
    def profiles(self) -> list[dict[str, Any]]:
        return as_records(self.dashboard.get("profiles"))

    @property
    def is_independent(self) -> bool:
        return self.dashboard.get("mode") == "independent"

    @property
    def profile(self) -> Optional[dict[str, Any]]:
        return self.dashboard.get("profile")

    @property
    def personal_stats(self) -> dict[str, Any]:
        return self.dashboard.get("personalStats") or {}

    @property
    def recent_history(self) -> list[dict[str, Any]]:
        return as_records(self.dashboard.get("recentHistory"))

    @property
    def driver_name(self) -> str:
        if self.is_independent:
            return get_path(self.profile, "first_name") or DEFAULT_DRIVER_NAME
        profiles = self.profiles
        return (profiles[0].get("first_name") if profiles else None) or DEFAULT_DRIVER_NAME

    @property
    def loading(self) -> bool:
        return self.dashboard_state.loading

    @property
    def error(self) -> Optional[str]:
        return self.dashboard_state.error

    @property
    def invite_error(self) -> Optional[str]:
        return self.invites.error

    def fetch(self, organization_id: Optional[str] = None) -> Any:
        """Load the dashboard, optionally for one organization only."""
        self.organization_id = organization_id
        self.has_no_orgs = False
        try:
            data = self.dashboard_state.execute(
                lambda: self.client.driver_portal.get_dashboard(organization_id)
            )
        except Exception as e:
            if means_no_organization(e):
                self.has_no_orgs = True
                self.dashboard_state.clear_error()
            else:
                self.logger.debug("dashboard_fetch_failed", error=str(e))
            return None

        if self.dashboard_state.attached:
            self.dashboard_state.data = data
        self.has_no_orgs = not as_records(get_path(data, "profiles"))
        return data

    def refetch(self) -> Any:
        return self.fetch(self.organization_id)

    def clear_invite_messages(self) -> None:
        self.invites.clear_error()
        self.invite_message = None

    def accept_invite_by_code(self, code: str) -> Any:
        """Join an organization with an invite code, then reload the dashboard."""
        self.invite_message = None
        result = self.invites.execute(
            lambda: self.client.driver_settings.accept_invite_by_code(code)
        )
        organization = get_path(result, "organization.name") or "organization"
        self.invite_message = f"Successfully joined {organization}!"
        self.logger.info("invite_code_accepted")
        self.refetch()
        return result

    def start_trip(self, load_id: str) -> Any:
        result = self.actions.mutate(lambda: self.client.driver_portal.start_trip(load_id))
        self.logger.info("trip_started", load_id=load_id)
        self.refetch()
        return result


class DriverLoadsView(ListView):
    """The driver's assigned loads, filtered by status on the server."""

    def __init__(self, client: HaulbaseClient, status: str = "") -> None:
        super().__init__(client, client.driver_portal.get_loads, "driver_loads", records_key="loads")
        self.status_filter = status

    @property
    def loads(self) -> list[dict[str, Any]]:
        return self.all_records

    @property
    def active_loads(self) -> list[dict[str, Any]]:
        active = {status.value for status in ACTIVE_LOAD_STATUSES}
        return [load for load in self.loads if load.get("status") in active]

    @property
    def completed_loads(self) -> list[dict[str, Any]]:
        completed = {status.value for status in COMPLETED_LOAD_STATUSES}
        return [load for load in self.loads if load.get("status") in completed]

    def fetch(self) -> Any:
        return super().fetch({"status": self.status_filter or None})

    def set_status_filter(self, status: str) -> Any:
        """Change the status filter and reload; "" shows every status."""
        self.status_filter = status
        return self.fetch()

    def start_trip(self, load_id: str) -> Any:
        result = self.mutations.mutate(lambda: self.client.driver_portal.start_trip(load_id))
        self.logger.info("trip_started", load_id=load_id)
        self.refetch()
        return result


class DriverLoadView(DetailView):
    """One assigned load with trip actions and its paperwork."""

    def __init__(self, client: HaulbaseClient, load_id: str) -> None:
        super().__init__(
            client, load_id, lambda: client.driver_portal.get_load(load_id), "driver_load"
        )
        self.documents_state = ApiState(
            lambda: client.driver_portal.get_load_documents(load_id), initial_data=[]
        )

    @property
    def load(self) -> Optional[dict[str, Any]]:
        return self.record

    @property
    def documents(self) -> list[dict[str, Any]]:
        return as_records(self.documents_state.data)

    @property
    def missing_documents(self) -> list[DocumentType]:
        return missing_invoice_documents(self.documents)

    def fetch_documents(self) -> Any:
        return self.documents_state.fetch()

    def _trip_action(self, call: Callable[[], Any], event: str, **fields: Any) -> Any:
        result = self.mutations.mutate(call)
        self.logger.info(event, **fields)
        self.refetch()
        return result

    def start_trip(self) -> Any:
        return self._trip_action(
            lambda: self.client.driver_portal.start_trip(self.record_id), "trip_started"
        )

    def update_status(self, status: str, notes: Optional[str] = None) -> Any:
        """Report a stop-level status such as at_pickup or loaded."""
        return self._trip_action(
            lambda: self.client.driver_portal.update_load_status(self.record_id, status, notes),
            "trip_status_updated",
            status=status,
        )

    def complete_trip(self, notes: Optional[str] = None) -> Any:
        return self._trip_action(
            lambda: self.client.driver_portal.complete_trip(self.record_id, notes),
            "trip_completed",
        )

    def upload_document(self, document: dict[str, Any]) -> Any:
        """Attach an uploaded storage key to the load, then reload its documents."""
        result = self.mutations.mutate(
            lambda: self.client.driver_portal.upload_document(self.record_id, document)
        )
        self.fetch_documents()
        return result


class DriverExpensesView(ListView):
    """The driver's own expenses with a local status filter."""

    def __init__(self, client: HaulbaseClient, status: str = "all") -> None:
        super().__init__(
            client, client.driver_portal.get_expenses, "driver_expenses", records_key="expenses"
        )
        self.status_filter = status

    @property
    def all_expenses(self) -> list[dict[str, Any]]:
        return [enrich_expense(expense) for expense in self.all_records]

    @property
    def expenses(self) -> list[dict[str, Any]]:
        if self.status_filter == "all":
            return self.all_expenses
        return [e for e in self.all_expenses if e.get("status") == self.status_filter]

    @property
    def stats(self) -> DriverExpenseStats:
        """Over every fetched expense, whatever the status filter."""
        return compute_driver_expense_stats(self.all_records)

    def set_status_filter(self, status: str) -> None:
        self.status_filter = status


class DriverExpenseFormView:
    """Create a new expense or edit an existing one."""

    def __init__(self, client: HaulbaseClient, expense_id: Optional[str] = None) -> None:
        self.client = client
        self.expense_id = expense_id
        self.logger = structlog.get_logger(view="driver_expense_form", expense_id=expense_id)
        self.expense_state = ApiState(lambda: client.driver_portal.get_expense(expense_id))
        self.profiles_state = ApiState(client.driver_portal.get_profiles, initial_data=[])
        self.mutations = Mutation()

    @property
    def is_editing(self) -> bool:
        return bool(self.expense_id)

    @property
    def expense(self) -> Optional[dict[str, Any]]:
        data = self.expense_state.data
        return data if isinstance(data, dict) else None

    @property
    def profiles(self) -> list[dict[str, Any]]:
        """Driver profiles, one per organization the expense can be filed with."""
        return as_records(self.profiles_state.data)

    @property
    def loading(self) -> bool:
        return self.expense_state.loading

    @property
    def saving(self) -> bool:
        return self.mutations.loading

    @property
    def error(self) -> Optional[str]:
        return self.expense_state.error or self.mutations.error

    def fetch(self) -> None:
        self.profiles_state.fetch()
        if self.is_editing:
            self.expense_state.fetch()

    def submit(self, data: dict[str, Any]) -> Any:
        result = self.mutations.mutate(lambda: self.client.driver_portal.submit_expense(data))
        self.logger.info("driver_expense_submitted")
        return result

    def update(self, data: dict[str, Any]) -> Any:
        if not self.is_editing:
            raise ValidationError("Only an existing expense can be updated")
        return self.mutations.mutate(
            lambda: self.client.driver_portal.update_expense(self.expense_id, data)
        )


class DriverEarningsView:
    """Earnings summary plus the per-load earnings history."""

    def __init__(self, client: HaulbaseClient) -> None:
        self.client = client
        self.earnings_state = ApiState(client.driver_portal.get_earnings)
        self.history_state = ApiState(client.driver_portal.get_earnings_history, initial_data={})

    @property
    def earnings(self) -> Optional[dict[str, Any]]:
        data = self.earnings_state.data
        return data if isinstance(data, dict) else None

    @property
    def history(self) -> list[dict[str, Any]]:
        return as_records(self.history_state.data, "history")

    @property
    def summary(self) -> EarningsSummary:
        summary = get_path(self.earnings, "summary") or {}
        return EarningsSummary(
            month_to_date=to_float(summary.get("monthToDate")),
            year_to_date=to_float(summary.get("yearToDate")),
            completed_loads=to_int(summary.get("completedLoads")),
            total_miles=to_int(summary.get("totalMiles")),
        )

    @property
    def loading(self) -> bool:
        return self.earnings_state.loading or self.history_state.loading

    @property
    def error(self) -> Optional[str]:
        return self.earnings_state.error or self.history_state.error

    def fetch(self, filters: Optional[dict[str, Any]] = None) -> None:
        self.earnings_state.fetch(filters)
        self.history_state.fetch(filters)

    def refetch(self) -> None:
        self.earnings_state.refetch()
        self.history_state.refetch()


class DriverDocumentsView(ListView):
    """Recent loads, narrowed to the ones that already have paperwork."""

    def __init__(self, client: HaulbaseClient) -> None:
        super().__init__(
            client, client.driver_portal.get_loads, "driver_documents", records_key="loads"
        )

    @property
    def loads(self) -> list[dict[str, Any]]:
        return self.all_records

    @property
    def loads_with_documents(self) -> list[dict[str, Any]]:
        return [load for load in self.loads if has_documents(load)]

    def fetch(self) -> Any:
        return super().fetch({"limit": DOCUMENTS_PAGE_SIZE})


class DriverSettingsView:
    """
    Organizations the driver belongs to, pending invites and history.

    Organizations the driver has left stay listed as read-only so their
    history remains reachable.
    """

    def __init__(self, client: HaulbaseClient) -> None:
        self.client = client
        self.logger = structlog.get_logger(view="driver_settings")
        settings = client.driver_settings
        self.organizations_state = ApiState(settings.get_organizations, initial_data=[])
        self.invites_state = ApiState(settings.get_pending_invites, initial_data=[])
        self.history_state = ApiState(settings.get_history, initial_data=[])
        self.invites = ApiRequest()
        self.disconnect = Mutation()
        self.disconnecting_org_id: Optional[str] = None
        self.invite_message: Optional[str] = None

    @property
    def organizations(self) -> list[dict[str, Any]]:
        return as_records(self.organizations_state.data)

    @property
    def active_organizations(self) -> list[dict[str, Any]]:
        return [org for org in self.organizations if not org.get("is_readonly")]

    @property
    def left_organizations(self) -> list[dict[str, Any]]:
        return [org for org in self.organizations if org.get("is_readonly")]

    @property
    def pending_invites(self) -> list[dict[str, Any]]:
        return as_records(self.invites_state.data)

    @property
    def history(self) -> list[dict[str, Any]]:
        return as_records(self.history_state.data)

    @property
    def loading(self) -> bool:
        return (
            self.organizations_state.loading
            or self.invites_state.loading
            or self.history_state.loading
        )

    @property
    def error(self) -> Optional[str]:
        return self.organizations_state.error or self.invites_state.error or self.history_state.error

    def fetch(self) -> None:
        self.organizations_state.fetch()
        self.invites_state.fetch()
        self.history_state.fetch()

    def refetch(self) -> None:
        self.fetch()

    def accept_invite_by_code(self, code: str) -> Any:
        result = self.invites.execute(
            lambda: self.client.driver_settings.accept_invite_by_code(code)
        )
        organization = get_path(result, "organization.name") or "organization"
        self.invite_message = f"Successfully joined {organization}!"
        self.fetch()
        return result

    def accept_invite(self, invite_id: str) -> None:
        self.invites.execute(lambda: self.client.driver_settings.accept_invite(invite_id))
        self.logger.info("invite_accepted", invite_id=invite_id)
        self.fetch()

    def decline_invite(self, invite_id: str) -> None:
        self.invites.execute(lambda: self.client.driver_settings.decline_invite(invite_id))
        self.logger.info("invite_declined", invite_id=invite_id)
        self.fetch()

    def disconnect_from_org(self, organization_id: str) -> None:
        """Leave an organization; it moves to the read-only list on reload."""
        self.disconnecting_org_id = organization_id
        try:
            self.disconnect.mutate(
                lambda: self.client.driver_settings.disconnect_from_org(organization_id)
            )
        finally:
            self.disconnecting_org_id = None
        self.logger.info("organization_disconnected", organization_id=organization_id)
        self.fetch()
