"""
Asset data model - trucks and trailers.
"""

from enum import Enum

from pydantic import BaseModel, Field


class AssetStatus(str, Enum):
    """Status of a truck or trailer."""

    ACTIVE = "active"
    MAINTENANCE = "maintenance"
    INACTIVE = "inactive"

    @property
    def label(self) -> str:
        """Display label."""
        if self is AssetStatus.MAINTENANCE:
            return "In Maintenance"
        return self.value.title()


class TrailerType(str, Enum):
    """Trailer equipment type."""

    DRY_VAN = "dry_van"
    REEFER = "reefer"
    FLATBED = "flatbed"
    STEP_DECK = "step_deck"
    OTHER = "other"


# Compliance dates checked for expiry, in display order.
TRUCK_EXPIRY_FIELDS = (
    "registration_expiry",
    "annual_inspection_expiry",
    "insurance_expiry",
    "irp_expiry",
    "ifta_expiry",
)
TRAILER_EXPIRY_FIELDS = (
    "registration_expiry",
    "annual_inspection_expiry",
    "insurance_expiry",
    "irp_expiry",
    "license_expiry",
)


def empty_status_counts() -> dict[str, int]:
    """Status counts with every asset status present at zero."""
    return {status.value: 0 for status in AssetStatus}


class TruckStats(BaseModel):
    """Counts over every fetched truck."""

    total: int = 0
    filtered: int = 0
    by_status: dict[str, int] = Field(default_factory=empty_status_counts)
    active: int = 0
    maintenance: int = 0
    inactive: int = 0
    with_drivers: int = 0
    with_trailers: int = 0


class TrailerStats(BaseModel):
    """Counts over every fetched trailer."""

    total: int = 0
    filtered: int = 0
    by_status: dict[str, int] = Field(default_factory=empty_status_counts)
    by_type: dict[str, int] = Field(default_factory=dict)
    active: int = 0
    maintenance: int = 0
    inactive: int = 0
    available: int = Field(0, description="Active and not hooked to a truck")
    reefers: int = 0


class FleetStats(BaseModel):
    """Truck and trailer statistics side by side."""

    total_assets: int
    trucks: TruckStats
    trailers: TrailerStats


class AssetFilters(BaseModel):
    """Client-side filter state for truck and trailer lists."""

    search: str = ""
    status: str = "all"
    type: str = "all"
