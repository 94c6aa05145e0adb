"""
Pydantic data models for the haulbase client.

Core models:
- Load: Load, billing and dispatch statuses; load statistics
- Driver: Driver and account statuses; driver statistics
- Driver portal: A driver's expense counts and earnings summary
- Asset: Truck and trailer statuses; fleet statistics
- Customer: Broker and facility statistics
- Expense: Approval workflow, categories; expense statistics
- Document: Load paperwork types
- Diagnostic: AVA fault severities
"""

from .asset import AssetStatus, FleetStats, TrailerStats, TrailerType, TruckStats
from .common import SortDirection, SortState
from .customer import BrokerStats, CustomerStats, FacilityStats, FacilityType
from .diagnostic import DiagnosticSeverity, SeverityCounts
from .document import DocumentType, REQUIRED_FOR_INVOICE
from .driver import DriverAccountStatus, DriverStats, DriverStatus, MembershipStatus
from .driver_portal import DriverExpenseStats, EarningsSummary
from .expense import ExpenseCategory, ExpenseStats, ExpenseStatus
from .load import BillingStatus, DispatchStatus, LoadStats, LoadStatus

__all__ = [
    "AssetStatus",
    "BillingStatus",
    "BrokerStats",
    "CustomerStats",
    "DiagnosticSeverity",
    "DispatchStatus",
    "DocumentType",
    "DriverAccountStatus",
    "DriverExpenseStats",
    "DriverStats",
    "DriverStatus",
    "EarningsSummary",
    "ExpenseCategory",
    "ExpenseStats",
    "ExpenseStatus",
    "FacilityStats",
    "FacilityType",
    "FleetStats",
    "LoadStats",
    "LoadStatus",
    "MembershipStatus",
    "REQUIRED_FOR_INVOICE",
    "SeverityCounts",
    "SortDirection",
    "SortState",
    "TrailerStats",
    "TrailerType",
    "TruckStats",
]
