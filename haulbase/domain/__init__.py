"""
Domain views over fetched API data.

Each view wraps one or more request states and adds client-side search,
filters, sorting, statistics and local updates after successful mutations.
"""

from .assets import FleetAssets, TrailerView, TrailersView, TruckView, TrucksView
from .ava import FleetHealthView, TruckDiagnosticsView
from .customers import BrokerView, BrokersView, Customers, FacilitiesView, FacilityView
from .driver_portal import (
    DriverDashboardView,
    DriverDocumentsView,
    DriverEarningsView,
    DriverExpenseFormView,
    DriverExpensesView,
    DriverLoadsView,
    DriverLoadView,
    DriverSettingsView,
)
from .drivers import DriverView, DriversView
from .expenses import ExpenseView, ExpensesView
from .loads import LoadView, LoadsView
from .pnl import PnlView, date_range_for

__all__ = [
    "BrokerView",
    "BrokersView",
    "Customers",
    "DriverDashboardView",
    "DriverDocumentsView",
    "DriverEarningsView",
    "DriverExpenseFormView",
    "DriverExpensesView",
    "DriverLoadView",
    "DriverLoadsView",
    "DriverSettingsView",
    "DriverView",
    "DriversView",
    "ExpenseView",
    "ExpensesView",
    "FacilitiesView",
    "FacilityView",
    "FleetAssets",
    "FleetHealthView",
    "LoadView",
    "LoadsView",
    "PnlView",
    "TrailerView",
    "TrailersView",
    "TruckDiagnosticsView",
    "TruckView",
    "TrucksView",
    "date_range_for",
]
