"""
Driver data model - operational and account statuses.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class DriverStatus(str, Enum):
    """Operational status of a driver."""

    AVAILABLE = "available"
    DRIVING = "driving"
    OFF_DUTY = "off_duty"
    INACTIVE = "inactive"


class MembershipStatus(str, Enum):
    """Status of a user's membership in an organization."""

    INVITED = "invited"
    ACTIVE = "active"
    SUSPENDED = "suspended"
    LEFT = "left"


class DriverAccountStatus(str, Enum):
    """Whether a driver profile is claimed by a user account."""

    ACTIVE = "active"
    PENDING = "pending"
    UNCLAIMED = "unclaimed"
    LEFT = "left"

    @property
    def label(self) -> str:
        """Display label."""
        if self is DriverAccountStatus.PENDING:
            return "Invited"
        return self.value.title()


ASSIGNABLE_DRIVER_STATUSES = (DriverStatus.AVAILABLE,)


def account_status_for(driver: dict[str, Any]) -> DriverAccountStatus:
    """
    Derive the account status of a driver record.

    A profile without a user is pending while its invite is out, otherwise
    unclaimed. A claimed profile is active unless the membership was left.
    """
    membership = driver.get("membership") or {}
    membership_status = membership.get("status")

    if not driver.get("user_id"):
        if membership_status == MembershipStatus.INVITED:
            return DriverAccountStatus.PENDING
        return DriverAccountStatus.UNCLAIMED
    if membership_status == MembershipStatus.LEFT:
        return DriverAccountStatus.LEFT
    return DriverAccountStatus.ACTIVE


class DriverStats(BaseModel):
    """Counts over every fetched driver."""

    total: int = 0
    filtered: int = 0
    by_status: dict[str, int] = Field(default_factory=dict)
    by_account_status: dict[str, int] = Field(default_factory=dict)

    # Account
    active: int = 0
    pending: int = 0
    unclaimed: int = 0
    left: int = 0

    # Operational
    available: int = 0
    driving: int = 0
    off_duty: int = 0
    inactive: int = 0


class DriverFilters(BaseModel):
    """Client-side filter state for the drivers list."""

    search: str = ""
    status: str = "all"
    account: str = "all"
