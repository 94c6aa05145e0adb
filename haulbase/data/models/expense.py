"""
Expense data model - approval workflow statuses, categories and statistics.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ExpenseStatus(str, Enum):
    """Expense approval workflow status."""

    DRAFT = "draft"
    PENDING_RECEIPT = "pending_receipt"
    PENDING_CONFIRMATION = "pending_confirmation"
    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    PAID = "paid"
    REJECTED = "rejected"

    @property
    def label(self) -> str:
        """Display label."""
        return self.value.replace("_", " ").title()


class ExpenseCategory(str, Enum):
    """Built-in expense categories."""

    FUEL = "fuel"
    MAINTENANCE = "maintenance"
    REPAIRS = "repairs"
    INSURANCE = "insurance"
    PERMITS = "permits"
    TOLLS = "tolls"
    TIRES = "tires"
    IFTA = "ifta"
    LUMPER = "lumper"
    DETENTION = "detention"
    SCALE_TICKET = "scale_ticket"
    DRIVER_PAY = "driver_pay"
    ADVANCES = "advances"
    DEDUCTIONS = "deductions"
    OFFICE = "office"
    UTILITIES = "utilities"
    SOFTWARE = "software"
    RENT = "rent"
    PROFESSIONAL_SERVICES = "professional_services"
    OTHER = "other"

    @property
    def label(self) -> str:
        """Display label."""
        if self is ExpenseCategory.IFTA:
            return "IFTA"
        return self.value.replace("_", " ").title()


EXPENSE_CATEGORY_GROUPS: dict[str, tuple[ExpenseCategory, ...]] = {
    "vehicle": (
        ExpenseCategory.FUEL,
        ExpenseCategory.MAINTENANCE,
        ExpenseCategory.REPAIRS,
        ExpenseCategory.INSURANCE,
        ExpenseCategory.PERMITS,
        ExpenseCategory.TOLLS,
        ExpenseCategory.TIRES,
        ExpenseCategory.IFTA,
    ),
    "load": (ExpenseCategory.LUMPER, ExpenseCategory.DETENTION, ExpenseCategory.SCALE_TICKET),
    "driver": (ExpenseCategory.DRIVER_PAY, ExpenseCategory.ADVANCES, ExpenseCategory.DEDUCTIONS),
    "organization": (
        ExpenseCategory.OFFICE,
        ExpenseCategory.UTILITIES,
        ExpenseCategory.SOFTWARE,
        ExpenseCategory.RENT,
        ExpenseCategory.PROFESSIONAL_SERVICES,
    ),
}

# Advisory only: the server owns the real transition rules.
EXPENSE_STATUS_TRANSITIONS: dict[ExpenseStatus, list[ExpenseStatus]] = {
    ExpenseStatus.DRAFT: [
        ExpenseStatus.PENDING_APPROVAL,
        ExpenseStatus.PENDING_RECEIPT,
        ExpenseStatus.PENDING_CONFIRMATION,
    ],
    ExpenseStatus.PENDING_RECEIPT: [
        ExpenseStatus.PENDING_CONFIRMATION,
        ExpenseStatus.PENDING_APPROVAL,
        ExpenseStatus.DRAFT,
    ],
    ExpenseStatus.PENDING_CONFIRMATION: [ExpenseStatus.PENDING_APPROVAL, ExpenseStatus.DRAFT],
    ExpenseStatus.PENDING_APPROVAL: [ExpenseStatus.APPROVED, ExpenseStatus.REJECTED],
    ExpenseStatus.APPROVED: [ExpenseStatus.PAID],
    ExpenseStatus.PAID: [],
    ExpenseStatus.REJECTED: [ExpenseStatus.DRAFT, ExpenseStatus.PENDING_APPROVAL],
}

EDITABLE_EXPENSE_STATUSES = (
    ExpenseStatus.DRAFT,
    ExpenseStatus.PENDING_RECEIPT,
    ExpenseStatus.PENDING_CONFIRMATION,
)

ACTION_REQUIRED_EXPENSE_STATUSES = (
    ExpenseStatus.PENDING_RECEIPT,
    ExpenseStatus.PENDING_CONFIRMATION,
    ExpenseStatus.PENDING_APPROVAL,
)

# "pending" is a legacy status some older records still carry.
PENDING_AMOUNT_STATUSES = ("pending_approval", "pending")
APPROVED_AMOUNT_STATUSES = ("approved", "paid")


def allowed_expense_transitions(current: str) -> list[ExpenseStatus]:
    """Statuses an expense in `current` status may move to."""
    try:
        return list(EXPENSE_STATUS_TRANSITIONS[ExpenseStatus(current)])
    except ValueError:
        return []


def can_transition_expense_to(current: str, new: str) -> bool:
    """Check whether an expense may move from `current` to `new` status."""
    return new in allowed_expense_transitions(current)


def expense_category_group(category: Optional[str]) -> str:
    """Group ("vehicle", "load", "driver", "organization") of a built-in category, else "other"."""
    for group, categories in EXPENSE_CATEGORY_GROUPS.items():
        if category in {c.value for c in categories}:
            return group
    return "other"


class ExpenseAmounts(BaseModel):
    """Money totals by workflow stage."""

    total: float = 0.0
    pending: float = 0.0
    approved: float = 0.0
    filtered: float = 0.0


class ExpenseStats(BaseModel):
    """Counts and totals over every fetched expense."""

    total: int = 0
    filtered: int = 0
    by_status: dict[str, int] = Field(default_factory=dict)
    by_category: dict[str, int] = Field(default_factory=dict)
    by_group: dict[str, int] = Field(default_factory=dict)
    amounts: ExpenseAmounts = Field(default_factory=ExpenseAmounts)

    pending_approval: int = 0
    approved: int = 0
    paid: int = 0
    rejected: int = 0
    action_required: int = Field(0, description="Waiting on a receipt, confirmation or approval")


class ExpenseFilters(BaseModel):
    """Client-side filter state for the expenses list."""

    search: str = ""
    status: str = "all"
    category: str = "all"
