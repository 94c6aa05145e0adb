"""
Load data model - status vocabulary and derived statistics for freight loads.

Load records themselves are plain dicts owned by the API; only the status
values and the numbers computed from lists of loads live here.
"""

from enum import Enum

from pydantic import BaseModel, Field


class LoadStatus(str, Enum):
    """Load status enumeration."""

    DRAFT = "draft"
    NEW = "new"
    BOOKED = "booked"
    DISPATCHED = "dispatched"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    INVOICED = "invoiced"
    PAID = "paid"
    CANCELLED = "cancelled"

    @property
    def label(self) -> str:
        """Display label."""
        return self.value.replace("_", " ").title()


class BillingStatus(str, Enum):
    """Billing status of a load."""

    PENDING = "pending"
    INVOICED = "invoiced"
    PARTIAL = "partial"
    PAID = "paid"
    DISPUTED = "disputed"

    @property
    def label(self) -> str:
        """Display label."""
        if self is BillingStatus.PARTIAL:
            return "Partial Payment"
        return self.value.title()


class DispatchStatus(str, Enum):
    """Status of a driver assignment."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Advisory only: the server owns the real transition rules.
LOAD_STATUS_TRANSITIONS: dict[LoadStatus, list[LoadStatus]] = {
    LoadStatus.DRAFT: [LoadStatus.NEW, LoadStatus.BOOKED, LoadStatus.CANCELLED],
    LoadStatus.NEW: [LoadStatus.BOOKED, LoadStatus.CANCELLED],
    LoadStatus.BOOKED: [LoadStatus.DISPATCHED, LoadStatus.CANCELLED],
    LoadStatus.DISPATCHED: [LoadStatus.IN_TRANSIT, LoadStatus.CANCELLED],
    LoadStatus.IN_TRANSIT: [LoadStatus.DELIVERED, LoadStatus.CANCELLED],
    LoadStatus.DELIVERED: [LoadStatus.INVOICED],
    LoadStatus.INVOICED: [LoadStatus.PAID],
    LoadStatus.PAID: [],
    LoadStatus.CANCELLED: [],
}

DISPATCH_STATUS_TRANSITIONS: dict[DispatchStatus, list[DispatchStatus]] = {
    DispatchStatus.PENDING: [
        DispatchStatus.ACCEPTED,
        DispatchStatus.REJECTED,
        DispatchStatus.CANCELLED,
    ],
    DispatchStatus.ACCEPTED: [DispatchStatus.IN_PROGRESS, DispatchStatus.CANCELLED],
    DispatchStatus.REJECTED: [],
    DispatchStatus.IN_PROGRESS: [DispatchStatus.COMPLETED, DispatchStatus.CANCELLED],
    DispatchStatus.COMPLETED: [],
    DispatchStatus.CANCELLED: [],
}

ACTIVE_LOAD_STATUSES = (LoadStatus.BOOKED, LoadStatus.DISPATCHED, LoadStatus.IN_TRANSIT)
COMPLETED_LOAD_STATUSES = (LoadStatus.DELIVERED, LoadStatus.INVOICED, LoadStatus.PAID)


def can_transition_load_to(current: str, new: str) -> bool:
    """Check whether a load may move from `current` to `new` status."""
    try:
        allowed = LOAD_STATUS_TRANSITIONS[LoadStatus(current)]
    except ValueError:
        return False
    return new in allowed


def can_transition_dispatch_to(current: str, new: str) -> bool:
    """Check whether an assignment may move from `current` to `new` status."""
    try:
        allowed = DISPATCH_STATUS_TRANSITIONS[DispatchStatus(current)]
    except ValueError:
        return False
    return new in allowed


class LoadStats(BaseModel):
    """
    Statistics computed over every fetched load.

    Financial totals come from each load's `financials` block.
    """

    total: int = 0
    filtered: int = 0
    by_status: dict[str, int] = Field(default_factory=dict)
    total_revenue: float = 0.0
    total_driver_pay: float = 0.0
    total_miles: int = 0
    margin: float = 0.0
    rpm: float = Field(0.0, description="Revenue per mile")


class FilteredLoadStats(BaseModel):
    """Totals for the currently filtered loads only."""

    count: int = 0
    total_revenue: float = 0.0
    total_miles: int = 0


class QuickFilter(BaseModel):
    """A status chip with its load count."""

    status: str
    count: int


class LoadFilters(BaseModel):
    """Client-side filter state for the loads list."""

    search: str = ""
    status: str = "all"
    billing: str = "all"
