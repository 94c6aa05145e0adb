"""
Drivers views - account status derivation, search, filters and statistics.
"""

from typing import Any, Optional

from haulbase.api.client import HaulbaseClient
from haulbase.data.models.driver import (
    ASSIGNABLE_DRIVER_STATUSES,
    DriverAccountStatus,
    DriverFilters,
    DriverStats,
    account_status_for,
)
from haulbase.domain.base import DetailView, ListView, count_by, text
from haulbase.state import ApiState

DRIVER_SEARCH_FIELDS = ("email", "phone")


def with_account_status(driver: dict[str, Any]) -> dict[str, Any]:
    """Copy of the driver record with `account_status` filled in."""
    return {**driver, "account_status": account_status_for(driver).value}


def full_name(driver: dict[str, Any]) -> str:
    return f"{text(driver, 'first_name')} {text(driver, 'last_name')}".strip()


def driver_matches(driver: dict[str, Any], query: str) -> bool:
    needle = query.strip().lower()
    if not needle:
        return True
    haystacks = [full_name(driver)] + [text(driver, field) for field in DRIVER_SEARCH_FIELDS]
    return any(needle in value.lower() for value in haystacks)


def filter_drivers(drivers: list[dict[str, Any]], filters: DriverFilters) -> list[dict[str, Any]]:
    """Filter enriched drivers by search, operational status and account status."""
    result = [driver for driver in drivers if driver_matches(driver, filters.search)]
    if filters.status != "all":
        result = [driver for driver in result if driver.get("status") == filters.status]
    if filters.account != "all":
        result = [driver for driver in result if driver.get("account_status") == filters.account]
    return result


def compute_driver_stats(drivers: list[dict[str, Any]], filtered_count: int) -> DriverStats:
    by_status = count_by(drivers, lambda driver: text(driver, "status"))
    by_account = count_by(drivers, lambda driver: text(driver, "account_status"))

    return DriverStats(
        total=len(drivers),
        filtered=filtered_count,
        by_status=by_status,
        by_account_status=by_account,
        active=by_account.get(DriverAccountStatus.ACTIVE.value, 0),
        pending=by_account.get(DriverAccountStatus.PENDING.value, 0),
        unclaimed=by_account.get(DriverAccountStatus.UNCLAIMED.value, 0),
        left=by_account.get(DriverAccountStatus.LEFT.value, 0),
        available=by_status.get("available", 0),
        driving=by_status.get("driving", 0),
        off_duty=by_status.get("off_duty", 0),
        inactive=by_status.get("inactive", 0),
    )


class DriversView(ListView):
    """The drivers list, each record enriched with its account status."""

    def __init__(self, client: HaulbaseClient, filters: Optional[DriverFilters] = None) -> None:
        super().__init__(client, client.drivers.get_drivers, "drivers")
        self.filters = filters or DriverFilters()

    @property
    def all_drivers(self) -> list[dict[str, Any]]:
        return [with_account_status(driver) for driver in self.all_records]

    @property
    def drivers(self) -> list[dict[str, Any]]:
        return filter_drivers(self.all_drivers, self.filters)

    @property
    def assignable_drivers(self) -> list[dict[str, Any]]:
        """Filtered drivers that can take a new load right now."""
        assignable = {status.value for status in ASSIGNABLE_DRIVER_STATUSES}
        return [driver for driver in self.drivers if driver.get("status") in assignable]

    @property
    def stats(self) -> DriverStats:
        drivers = self.all_drivers
        return compute_driver_stats(drivers, len(filter_drivers(drivers, self.filters)))

    def set_filters(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
        account: Optional[str] = None,
    ) -> None:
        updates = {"search": search, "status": status, "account": account}
        self.filters = self.filters.model_copy(
            update={key: value for key, value in updates.items() if value is not None}
        )

    def reset_filters(self) -> None:
        self.filters = DriverFilters()

    def create_driver(self, data: dict[str, Any]) -> Any:
        result = self.mutations.mutate(lambda: self.client.drivers.create_driver(data))
        self.logger.info("driver_created")
        self.refetch()
        return result

    def update_driver(self, driver_id: str, data: dict[str, Any]) -> Any:
        result = self.mutations.mutate(lambda: self.client.drivers.update_driver(driver_id, data))
        self._merge_local(driver_id, data)
        return result

    def delete_driver(self, driver_id: str) -> None:
        self.mutations.mutate(lambda: self.client.drivers.delete_driver(driver_id))
        self._remove_local(driver_id)
        self.logger.info("driver_deleted", driver_id=driver_id)


class DriverView(DetailView):
    """A single driver with its invite status."""

    def __init__(self, client: HaulbaseClient, driver_id: str) -> None:
        super().__init__(client, driver_id, lambda: client.drivers.get_driver(driver_id), "driver")
        self.invite_state = ApiState(lambda: client.drivers.get_invite_status(driver_id))

    @property
    def driver(self) -> Optional[dict[str, Any]]:
        record = self.record
        return with_account_status(record) if record else None

    @property
    def invite_status(self) -> Any:
        return self.invite_state.data

    @property
    def error(self) -> Optional[str]:
        return self.detail_state.error or self.invite_state.error

    @property
    def mutating(self) -> bool:
        return self.mutations.loading or self.invite_state.loading

    def fetch(self) -> Any:
        driver = self.detail_state.fetch()
        self.invite_state.fetch()
        return driver

    def detach(self) -> None:
        super().detach()
        self.invite_state.detach()

    def _update(self, updates: dict[str, Any]) -> Any:
        return self.client.drivers.update_driver(self.record_id, updates)

    def delete(self) -> Any:
        return self.mutations.mutate(lambda: self.client.drivers.delete_driver(self.record_id))

    def send_invite(self) -> Any:
        """Invite the driver, then reload the driver (membership changes) and invite status."""
        result = self.mutations.mutate(lambda: self.client.drivers.invite_driver(self.record_id))
        self.logger.info("driver_invited")
        self.detail_state.refetch()
        self.invite_state.refetch()
        return result

    def resend_invite(self) -> Any:
        result = self.mutations.mutate(lambda: self.client.drivers.resend_invite(self.record_id))
        self.invite_state.refetch()
        return result
