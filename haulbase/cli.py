"""
Command line front end.

Renders lists, records and statistics from the domain views as rich tables.
Any API failure prints the extracted message and exits with status 1.
"""

import contextlib
from pathlib import Path
from typing import Any, Iterator, Optional

import typer
from rich.console import Console
from rich.table import Table

from haulbase.api.client import HaulbaseClient, TokenStore
from haulbase.core.config import get_config
from haulbase.core.errors import HaulbaseError, extract_error_message
from haulbase.core.logging import configure_logging
from haulbase.data.models.common import SortDirection, SortState
from haulbase.data.models.document import DocumentType, missing_invoice_documents
from haulbase.data.models.load import DispatchStatus, LoadStatus, can_transition_dispatch_to
from haulbase.data.models.pnl import PnlPeriod
from haulbase.domain.assets import FleetAssets, TrailersView, TrucksView
from haulbase.domain.ava import FleetHealthView, TruckDiagnosticsView, truck_health
from haulbase.domain.base import text, to_float
from haulbase.domain.customers import BrokersView, FacilitiesView
from haulbase.domain.driver_portal import (
    DriverDashboardView,
    DriverEarningsView,
    DriverExpensesView,
    DriverLoadsView,
    DriverLoadView,
    DriverSettingsView,
)
from haulbase.domain.drivers import DriversView, DriverView, full_name
from haulbase.domain.expenses import ExpensesView
from haulbase.domain.loads import LoadsView, LoadView
from haulbase.domain.pnl import PnlView
from haulbase.state import unwrap_envelope

DEFAULT_TOKEN_FILE = Path.home() / ".haulbase" / "tokens.json"

app = typer.Typer(no_args_is_help=True, help="Fleet management from the terminal.")
loads_app = typer.Typer(no_args_is_help=True, help="Loads and dispatch.")
drivers_app = typer.Typer(no_args_is_help=True, help="Drivers and invitations.")
trucks_app = typer.Typer(no_args_is_help=True, help="Trucks.")
trailers_app = typer.Typer(no_args_is_help=True, help="Trailers.")
brokers_app = typer.Typer(no_args_is_help=True, help="Brokers.")
facilities_app = typer.Typer(no_args_is_help=True, help="Shipper and receiver facilities.")
expenses_app = typer.Typer(no_args_is_help=True, help="Expenses and approvals.")
ava_app = typer.Typer(no_args_is_help=True, help="AVA AI mechanic.")
documents_app = typer.Typer(no_args_is_help=True, help="Load documents and AI parsing.")
driver_app = typer.Typer(no_args_is_help=True, help="Driver portal: my loads, expenses and organizations.")

app.add_typer(loads_app, name="loads")
app.add_typer(drivers_app, name="drivers")
app.add_typer(trucks_app, name="trucks")
app.add_typer(trailers_app, name="trailers")
app.add_typer(brokers_app, name="brokers")
app.add_typer(facilities_app, name="facilities")
app.add_typer(expenses_app, name="expenses")
app.add_typer(ava_app, name="ava")
app.add_typer(documents_app, name="documents")
app.add_typer(driver_app, name="driver")

console = Console()


def build_client() -> HaulbaseClient:
    """Client for the configured API, with the session persisted between runs."""
    settings = get_config().env
    tokens = TokenStore(
        settings.access_token,
        settings.refresh_token,
        settings.token_file or DEFAULT_TOKEN_FILE,
    )
    return HaulbaseClient(settings, tokens=tokens)


@contextlib.contextmanager
def _session() -> Iterator[HaulbaseClient]:
    client = build_client()
    try:
        yield client
    except HaulbaseError as e:
        _fail(extract_error_message(e))
    finally:
        client.close()


def _fail(message: str) -> None:
    console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(code=1)


def _check(view: Any) -> None:
    """Exit when the view's last fetch failed."""
    if view.error:
        _fail(view.error)


def _money(value: Any) -> str:
    return f"${to_float(value):,.2f}"


def _table(title: str, *columns: str) -> Table:
    table = Table(title=title)
    for column in columns:
        table.add_column(column)
    return table


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every API request."),
) -> None:
    settings = get_config().env
    configure_logging("DEBUG" if verbose else settings.log_level, settings.log_format)


# ----------------------------------------------------------------------
# Session
# ----------------------------------------------------------------------


@app.command()
def login(
    email: str = typer.Argument(..., help="Account email"),
    password: bool = typer.Option(False, "--password", help="Log in with a password instead of a code."),
) -> None:
    """Log in with an emailed code (default) or a password."""
    with _session() as client:
        if password:
            secret = typer.prompt("Password", hide_input=True)
            client.auth.login_with_password(email, secret)
        else:
            client.auth.login(email)
            code = typer.prompt("Code from your email").strip()
            client.auth.verify(email, code)
    console.print(f"[green]Logged in as[/green] {email}")


@app.command()
def logout() -> None:
    """End the session and forget the stored tokens."""
    with _session() as client:
        client.auth.logout()
    console.print("Logged out.")


@app.command()
def whoami() -> None:
    """Show the current user."""
    with _session() as client:
        data = unwrap_envelope(client.auth.me()) or {}
    user = data.get("user") or data
    name = f"{text(user, 'first_name')} {text(user, 'last_name')}".strip()
    console.print(f"{name or text(user, 'email')} <{text(user, 'email')}>")


# ----------------------------------------------------------------------
# Loads
# ----------------------------------------------------------------------


@loads_app.command("list")
def loads_list(
    status: str = typer.Option("all", help="Load status filter."),
    billing: str = typer.Option("all", help="Billing status filter."),
    search: str = typer.Option("", help="Reference, broker, city or driver name."),
    sort: Optional[str] = typer.Option(None, help="Sort field (pickup_date, revenue, ...)."),
    ascending: bool = typer.Option(False, "--asc", help="Sort ascending."),
) -> None:
    """List loads with totals."""
    with _session() as client:
        view = LoadsView(client)
        view.fetch()
        _check(view)

    view.set_filters(search=search, status=status, billing=billing)
    if sort:
        direction = SortDirection.ASC if ascending else SortDirection.DESC
        view.set_filters(sort=SortState(field=sort, direction=direction))

    table = _table("Loads", "Reference", "Status", "Broker", "Pickup", "Revenue", "Miles")
    for load in view.loads:
        table.add_row(
            text(load, "reference_number"),
            text(load, "status"),
            text(load, "broker.name") or text(load, "broker_name"),
            text(load, "schedule.pickup_date")[:10],
            _money(text(load, "financials.revenue")),
            text(load, "financials.miles"),
        )
    console.print(table)

    stats = view.stats
    console.print(
        f"{stats.filtered} of {stats.total} loads | revenue {_money(stats.total_revenue)} | "
        f"margin {_money(stats.margin)} | RPM {_money(stats.rpm)}"
    )
    chips = ", ".join(f"{chip.status} {chip.count}" for chip in view.quick_filters)
    if chips:
        console.print(f"[dim]{chips}[/dim]")


@loads_app.command("show")
def loads_show(load_id: str) -> None:
    """Show one load with its stops and missing invoice paperwork."""
    with _session() as client:
        view = LoadView(client, load_id)
        view.fetch()
        _check(view)
        documents = unwrap_envelope(client.uploads.get_load_documents(load_id)) or []

    load = view.load or {}
    console.print(f"[bold]{text(load, 'reference_number')}[/bold]  {text(load, 'status')}")
    console.print(f"Broker: {text(load, 'broker.name') or text(load, 'broker_name')}")
    console.print(f"Revenue: {_money(text(load, 'financials.revenue'))}")

    stops = _table("Stops", "#", "Type", "Facility", "City", "Date")
    for index, stop in enumerate(view.stops, start=1):
        stops.add_row(
            str(index),
            text(stop, "stop_type"),
            text(stop, "facility.company_name"),
            text(stop, "city") or text(stop, "facility.address.city"),
            text(stop, "scheduled_date")[:10],
        )
    console.print(stops)

    missing = missing_invoice_documents(documents if isinstance(documents, list) else [])
    if missing:
        labels = ", ".join(doc_type.label for doc_type in missing)
        console.print(f"[yellow]Missing for invoice:[/yellow] {labels}")


@loads_app.command("status")
def loads_status(load_id: str, status: LoadStatus) -> None:
    """Change a load's status."""
    with _session() as client:
        LoadView(client, load_id).update_status(status.value)
    console.print(f"Load {load_id} is now {status.label}.")


@loads_app.command("cancel-assignment")
def loads_cancel_assignment(
    assignment_id: str,
    reason: Optional[str] = typer.Option(None, "--reason", help="Shown to the driver."),
) -> None:
    """Cancel a driver assignment that has not finished yet."""
    with _session() as client:
        assignment = unwrap_envelope(client.loads.get_assignment(assignment_id)) or {}
        current = text(assignment, "status")
        if not can_transition_dispatch_to(current, DispatchStatus.CANCELLED.value):
            _fail(f"Assignment {assignment_id} is {current or 'unknown'} and cannot be cancelled.")
        client.loads.cancel_assignment(assignment_id, reason)
    console.print(f"Assignment {assignment_id} cancelled.")


# ----------------------------------------------------------------------
# Drivers
# ----------------------------------------------------------------------


@drivers_app.command("list")
def drivers_list(
    status: str = typer.Option("all", help="Operational status filter."),
    account: str = typer.Option("all", help="Account status filter (active, pending, unclaimed, left)."),
    search: str = typer.Option("", help="Name, email or phone."),
    assignable: bool = typer.Option(False, "--assignable", help="Only drivers free to take a load."),
) -> None:
    """List drivers with their account status."""
    with _session() as client:
        view = DriversView(client)
        view.fetch()
        _check(view)

    view.set_filters(search=search, status=status, account=account)
    table = _table("Drivers", "Name", "Status", "Account", "Email", "Phone")
    for driver in view.assignable_drivers if assignable else view.drivers:
        table.add_row(
            full_name(driver),
            text(driver, "status"),
            text(driver, "account_status"),
            text(driver, "email"),
            text(driver, "phone"),
        )
    console.print(table)
    stats = view.stats
    console.print(
        f"{stats.filtered} of {stats.total} drivers | {stats.available} available | "
        f"{stats.pending} invited | {stats.unclaimed} unclaimed"
    )


@drivers_app.command("invite")
def drivers_invite(
    driver_id: str,
    resend: bool = typer.Option(False, "--resend", help="Resend an existing invite."),
) -> None:
    """Invite a driver to claim their profile."""
    with _session() as client:
        view = DriverView(client, driver_id)
        if resend:
            view.resend_invite()
        else:
            view.send_invite()
    console.print("Invite resent." if resend else "Invite sent.")


# ----------------------------------------------------------------------
# Fleet
# ----------------------------------------------------------------------


@trucks_app.command("list")
def trucks_list(
    status: str = typer.Option("all", help="Asset status filter."),
    search: str = typer.Option("", help="Unit number, VIN, make or model."),
) -> None:
    """List trucks."""
    with _session() as client:
        view = TrucksView(client)
        view.fetch()
        _check(view)

    view.set_filters(search=search, status=status)
    table = _table("Trucks", "Unit", "Status", "Make", "Model", "VIN")
    for truck in view.trucks:
        table.add_row(
            text(truck, "unit_number"),
            text(truck, "status"),
            text(truck, "make"),
            text(truck, "model"),
            text(truck, "vin"),
        )
    console.print(table)
    stats = view.stats
    console.print(
        f"{stats.filtered} of {stats.total} trucks | {stats.active} active | "
        f"{stats.maintenance} in maintenance | {stats.with_drivers} with drivers"
    )


@trailers_app.command("list")
def trailers_list(
    status: str = typer.Option("all", help="Asset status filter."),
    trailer_type: str = typer.Option("all", "--type", help="Trailer type filter."),
    search: str = typer.Option("", help="Unit number, VIN or make."),
) -> None:
    """List trailers."""
    with _session() as client:
        view = TrailersView(client)
        view.fetch()
        _check(view)

    view.set_filters(search=search, status=status, type=trailer_type)
    table = _table("Trailers", "Unit", "Type", "Status", "Make", "VIN")
    for trailer in view.trailers:
        table.add_row(
            text(trailer, "unit_number"),
            text(trailer, "type"),
            text(trailer, "status"),
            text(trailer, "make"),
            text(trailer, "vin"),
        )
    console.print(table)
    stats = view.stats
    console.print(
        f"{stats.filtered} of {stats.total} trailers | {stats.available} available | "
        f"{stats.reefers} reefers"
    )


@app.command()
def fleet() -> None:
    """Truck and trailer counts by status."""
    with _session() as client:
        assets = FleetAssets(client)
        assets.fetch()
        if assets.error:
            _fail(assets.error)

    stats = assets.stats
    table = _table(f"Fleet ({stats.total_assets} assets)", "Status", "Trucks", "Trailers")
    for status, count in stats.trucks.by_status.items():
        table.add_row(status, str(count), str(stats.trailers.by_status.get(status, 0)))
    console.print(table)


# ----------------------------------------------------------------------
# Customers
# ----------------------------------------------------------------------


@brokers_app.command("list")
def brokers_list(
    active: str = typer.Option("all", help="all, active or inactive."),
    search: str = typer.Option("", help="Name, MC number, contact or city."),
) -> None:
    """List active brokers."""
    with _session() as client:
        view = BrokersView(client)
        view.fetch()
        _check(view)

    view.set_filters(search=search, active=active)
    table = _table("Brokers", "Name", "MC", "Contact", "City", "Preferred")
    for broker in view.brokers:
        table.add_row(
            text(broker, "name"),
            text(broker, "mc_number"),
            text(broker, "contact.name"),
            text(broker, "address.city"),
            "yes" if broker.get("is_preferred") else "",
        )
    console.print(table)
    stats = view.stats
    console.print(f"{stats.filtered} of {stats.total} brokers | {stats.preferred} preferred")


@facilities_app.command("list")
def facilities_list(
    facility_type: str = typer.Option("all", "--type", help="shipper, receiver or both."),
    search: str = typer.Option("", help="Company, city, state or contact."),
) -> None:
    """List active facilities."""
    with _session() as client:
        view = FacilitiesView(client)
        view.fetch()
        _check(view)

    view.set_filters(search=search, type=facility_type)
    table = _table("Facilities", "Company", "Type", "City", "State", "Contact")
    for facility in view.facilities:
        table.add_row(
            text(facility, "company_name"),
            text(facility, "facility_type"),
            text(facility, "address.city"),
            text(facility, "address.state"),
            text(facility, "contact.name"),
        )
    console.print(table)
    stats = view.stats
    console.print(
        f"{stats.filtered} of {stats.total} facilities | {stats.shippers} shippers | "
        f"{stats.receivers} receivers"
    )


# ----------------------------------------------------------------------
# Expenses
# ----------------------------------------------------------------------


@expenses_app.command("list")
def expenses_list(
    status: str = typer.Option("all", help="Expense status filter."),
    category: str = typer.Option("all", help="Expense category filter."),
    search: str = typer.Option("", help="Vendor, description or reference."),
    sort: Optional[str] = typer.Option(None, help="Sort field (date, vendor, amount, category, status)."),
    ascending: bool = typer.Option(False, "--asc", help="Sort ascending."),
) -> None:
    """List expenses with amounts by stage."""
    with _session() as client:
        view = ExpensesView(client)
        view.fetch()
        _check(view)

    view.set_filters(search=search, status=status, category=category)
    if sort:
        direction = SortDirection.ASC if ascending else SortDirection.DESC
        view.set_filters(sort=SortState(field=sort, direction=direction))

    table = _table("Expenses", "Date", "Vendor", "Category", "Status", "Amount")
    for expense in view.expenses:
        table.add_row(
            text(expense, "date")[:10],
            text(expense, "vendor"),
            text(expense, "category"),
            text(expense, "status"),
            _money(expense.get("amount")),
        )
    console.print(table)
    amounts = view.stats.amounts
    console.print(f"{len(view.expenses)} of {view.total} expenses")
    console.print(
        f"total {_money(amounts.total)} | pending {_money(amounts.pending)} | "
        f"approved {_money(amounts.approved)} | shown {_money(amounts.filtered)}"
    )


@expenses_app.command("approve")
def expenses_approve(expense_id: str) -> None:
    """Approve an expense awaiting approval."""
    with _session() as client:
        client.expenses.approve_expense(expense_id)
    console.print(f"Expense {expense_id} approved.")


@expenses_app.command("reject")
def expenses_reject(
    expense_id: str,
    reason: str = typer.Option(..., prompt=True, help="Why the expense is rejected."),
) -> None:
    """Reject an expense."""
    with _session() as client:
        client.expenses.reject_expense(expense_id, reason)
    console.print(f"Expense {expense_id} rejected.")


@expenses_app.command("export")
def expenses_export(
    output: Path = typer.Option(Path("expenses.csv"), "--output", "-o", help="Destination file."),
    status: str = typer.Option("all", help="Expense status filter."),
    category: str = typer.Option("all", help="Expense category filter."),
) -> None:
    """Export expenses as CSV."""
    with _session() as client:
        view = ExpensesView(client)
        view.set_filters(status=status, category=category)
        content = view.export_expenses()
    output.write_bytes(content)
    console.print(f"Wrote {output}")


# ----------------------------------------------------------------------
# P&L
# ----------------------------------------------------------------------


@app.command()
def pnl(
    period: PnlPeriod = typer.Option(PnlPeriod.THIS_MONTH, help="Reporting period."),
    date_from: Optional[str] = typer.Option(None, "--from", help="Custom start date (YYYY-MM-DD)."),
    date_to: Optional[str] = typer.Option(None, "--to", help="Custom end date (YYYY-MM-DD)."),
) -> None:
    """Profit and loss for a period."""
    with _session() as client:
        view = PnlView(client, period=period.value)
        if period == PnlPeriod.CUSTOM:
            view.custom_date_from = date_from or ""
            view.custom_date_to = date_to or ""
        if not view.fetch():
            _fail("Choose a start or end date for a custom period.")
        _check(view)

    date_range = view.date_range
    report = view.report if isinstance(view.report, dict) else {}
    console.print(
        f"[bold]P&L {period.label}[/bold] "
        f"({date_range.date_from or '...'} to {date_range.date_to or '...'})"
    )
    table = _table("Summary", "Line", "Amount")
    for key, value in report.get("summary", report).items():
        if not isinstance(value, (dict, list)):
            table.add_row(key.replace("_", " "), _money(value))
    console.print(table)


# ----------------------------------------------------------------------
# AVA
# ----------------------------------------------------------------------


@ava_app.command("fleet")
def ava_fleet(
    sync: bool = typer.Option(False, "--sync", help="Pull new fault codes from Motive first."),
) -> None:
    """Fleet health overview."""
    with _session() as client:
        view = FleetHealthView(client)
        if sync:
            view.sync()
        else:
            view.fetch()
        _check(view)

    if not view.configured:
        console.print("[yellow]AVA is not connected to Motive yet.[/yellow]")
        return

    table = _table("Fleet health", "Unit", "Health", "Active codes")
    for truck in view.trucks:
        table.add_row(
            text(truck, "unit_number"),
            truck_health(truck),
            str(len(truck.get("diagnostics") or [])),
        )
    console.print(table)


@ava_app.command("truck")
def ava_truck(truck_id: str) -> None:
    """Active diagnostics for one truck."""
    with _session() as client:
        view = TruckDiagnosticsView(client, truck_id)
        view.fetch()
        _check(view)

    table = _table("Diagnostics", "Code", "Severity", "Description")
    for diagnostic in view.diagnostics:
        table.add_row(
            text(diagnostic, "code"),
            text(diagnostic, "severity"),
            text(diagnostic, "description"),
        )
    console.print(table)
    counts = view.counts
    console.print(f"{counts.critical} critical | {counts.warning} warning | {counts.info} info")


@ava_app.command("analyze")
def ava_analyze(code: str) -> None:
    """Explain a diagnostic trouble code."""
    with _session() as client:
        result = unwrap_envelope(client.ava.analyze_code(code))
    console.print_json(data=result)


# ----------------------------------------------------------------------
# Documents
# ----------------------------------------------------------------------


@documents_app.command("upload")
def documents_upload(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="File to upload."),
    load_id: str = typer.Option(..., "--load", help="Load the document belongs to."),
    doc_type: DocumentType = typer.Option(DocumentType.OTHER, "--type", help="Document type."),
    notes: Optional[str] = typer.Option(None, help="Notes stored with the document."),
) -> None:
    """Upload a document to a load."""
    with _session() as client:
        document = client.uploads.upload_document(
            path, load_id=load_id, doc_type=doc_type.value, notes=notes
        )
    console.print(f"Uploaded {path.name} as {doc_type.label} ({text(document, 'id')}).")


@documents_app.command("parse-rate-con")
def documents_parse_rate_con(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Rate confirmation."),
) -> None:
    """Extract load details from a rate confirmation."""
    with _session() as client:
        result = unwrap_envelope(client.loads.parse_rate_con(path))
    console.print_json(data=result)


@documents_app.command("parse-receipt")
def documents_parse_receipt(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Receipt image or PDF."),
) -> None:
    """Extract expense details from a receipt."""
    with _session() as client:
        result = unwrap_envelope(client.expenses.parse_receipt(path))
    console.print_json(data=result)


# ----------------------------------------------------------------------
# Driver portal
# ----------------------------------------------------------------------


@driver_app.command("dashboard")
def driver_dashboard(
    organization_id: Optional[str] = typer.Option(None, "--org", help="Only this organization."),
) -> None:
    """The driver's current load, upcoming loads and stats."""
    with _session() as client:
        view = DriverDashboardView(client)
        view.fetch(organization_id)
        _check(view)

    if view.has_no_orgs and not view.is_independent:
        console.print("No organization yet. Join one with: haulbase driver join CODE")
        return
    console.print(f"[bold]Hi {view.driver_name}[/bold]")
    current = view.current_load
    if current:
        console.print(f"Current load: {text(current, 'reference_number')} ({text(current, 'status')})")
    table = _table("Upcoming", "Reference", "Status", "Pickup")
    for load in view.upcoming_loads:
        table.add_row(
            text(load, "reference_number"),
            text(load, "status"),
            text(load, "schedule.pickup_date")[:10],
        )
    console.print(table)


@driver_app.command("join")
def driver_join(code: str) -> None:
    """Join an organization with an invite code."""
    with _session() as client:
        view = DriverSettingsView(client)
        view.accept_invite_by_code(code)
    console.print(view.invite_message)


@driver_app.command("connect")
def driver_connect(org_code: str) -> None:
    """Ask an organization to connect, using its public code."""
    with _session() as client:
        client.driver_connection.request_connection(org_code)
    console.print(f"Connection request sent to {org_code}.")


@driver_app.command("loads")
def driver_loads(
    status: str = typer.Option("", help="Load status filter."),
) -> None:
    """Loads assigned to the driver."""
    with _session() as client:
        view = DriverLoadsView(client, status=status)
        view.fetch()
        _check(view)

    table = _table("My loads", "Reference", "Status", "Pickup", "Delivery")
    for load in view.loads:
        table.add_row(
            text(load, "reference_number"),
            text(load, "status"),
            text(load, "schedule.pickup_date")[:10],
            text(load, "schedule.delivery_date")[:10],
        )
    console.print(table)
    console.print(
        f"{len(view.active_loads)} active | {len(view.completed_loads)} completed | {view.total} total"
    )


@driver_app.command("start")
def driver_start(load_id: str) -> None:
    """Start the trip for an assigned load."""
    with _session() as client:
        DriverLoadView(client, load_id).start_trip()
    console.print(f"Trip started for {load_id}.")


@driver_app.command("complete")
def driver_complete(
    load_id: str,
    notes: Optional[str] = typer.Option(None, help="Delivery notes."),
) -> None:
    """Mark a load as delivered."""
    with _session() as client:
        view = DriverLoadView(client, load_id)
        view.complete_trip(notes)
        view.fetch_documents()
    console.print(f"Load {load_id} delivered.")
    missing = view.missing_documents
    if missing:
        labels = ", ".join(doc_type.label for doc_type in missing)
        console.print(f"[yellow]Still needed:[/yellow] {labels}")


@driver_app.command("expenses")
def driver_expenses(
    status: str = typer.Option("all", help="Expense status filter."),
) -> None:
    """The driver's own expenses."""
    with _session() as client:
        view = DriverExpensesView(client, status=status)
        view.fetch()
        _check(view)

    table = _table("My expenses", "Date", "Vendor", "Category", "Status", "Amount")
    for expense in view.expenses:
        table.add_row(
            text(expense, "date")[:10],
            text(expense, "vendor"),
            expense.get("category_label") or text(expense, "category"),
            expense["status_label"],
            _money(expense.get("amount")),
        )
    console.print(table)
    stats = view.stats
    console.print(f"{stats.pending} pending | {stats.approved} approved | total {_money(stats.total)}")


@driver_app.command("earnings")
def driver_earnings() -> None:
    """Earnings this month and year."""
    with _session() as client:
        view = DriverEarningsView(client)
        view.fetch()
        _check(view)

    summary = view.summary
    console.print(
        f"Month to date {_money(summary.month_to_date)} | year to date {_money(summary.year_to_date)} | "
        f"{summary.completed_loads} loads | {summary.total_miles} miles"
    )


@driver_app.command("orgs")
def driver_orgs() -> None:
    """Organizations the driver belongs to or has left."""
    with _session() as client:
        view = DriverSettingsView(client)
        view.fetch()
        _check(view)

    table = _table("Organizations", "Name", "State")
    for org in view.active_organizations:
        table.add_row(text(org, "name"), "active")
    for org in view.left_organizations:
        table.add_row(text(org, "name"), "left (read-only)")
    console.print(table)
    if view.pending_invites:
        console.print(f"{len(view.pending_invites)} pending invite(s)")


@driver_app.command("leave")
def driver_leave(organization_id: str) -> None:
    """Disconnect from an organization; its history stays readable."""
    typer.confirm(
        "Disconnect? You will still have read-only access to your historical data.", abort=True
    )
    with _session() as client:
        DriverSettingsView(client).disconnect_from_org(organization_id)
    console.print("Disconnected.")


if __name__ == "__main__":
    app()
