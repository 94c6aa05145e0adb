"""
Customer data model - brokers and facilities.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FacilityType(str, Enum):
    """Role a facility plays on a load."""

    SHIPPER = "shipper"
    RECEIVER = "receiver"
    BOTH = "both"


class BrokerStats(BaseModel):
    """Counts over every fetched broker."""

    total: int = 0
    filtered: int = 0
    active: int = 0
    inactive: int = 0
    preferred: int = 0


class FacilityStats(BaseModel):
    """Counts over every fetched facility."""

    total: int = 0
    filtered: int = 0
    by_type: dict[str, int] = Field(
        default_factory=lambda: {facility_type.value: 0 for facility_type in FacilityType}
    )
    shippers: int = 0
    receivers: int = 0


class CustomerStats(BaseModel):
    """Broker and facility statistics side by side."""

    total_customers: int = 0
    brokers: BrokerStats
    facilities: FacilityStats


class BrokerFilters(BaseModel):
    """Client-side filter state for the brokers list."""

    search: str = ""
    active: str = "all"


class FacilityFilters(BaseModel):
    """Client-side filter state for the facilities list."""

    search: str = ""
    type: str = "all"
