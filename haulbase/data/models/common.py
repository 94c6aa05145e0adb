"""
Shared models for list views.
"""

from enum import Enum

from pydantic import BaseModel


class SortDirection(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class SortState(BaseModel):
    """Field and direction a list is sorted by."""

    field: str
    direction: SortDirection = SortDirection.DESC

    def toggled(self, field: str) -> "SortState":
        """
        Sort state after a user clicks `field`.

        Clicking the current field while descending switches to ascending;
        anything else sorts by `field` descending.
        """
        if self.field == field and self.direction == SortDirection.DESC:
            return SortState(field=field, direction=SortDirection.ASC)
        return SortState(field=field, direction=SortDirection.DESC)

    @property
    def descending(self) -> bool:
        """True when sorting largest/latest first."""
        return self.direction == SortDirection.DESC
