"""
Drivers API - driver profiles and invitations.
"""

from typing import Any, Optional

from haulbase.api.base import ResourceApi, pick

DRIVER_FILTER_KEYS = ("status", "claimed")


class DriversApi(ResourceApi):
    """Endpoints under /v1/drivers and /v1/driver-invite."""

    def get_drivers(self, filters: Optional[dict[str, Any]] = None) -> Any:
        return self.client.get("/v1/drivers", params=pick(filters, DRIVER_FILTER_KEYS))

    def get_driver(self, driver_id: str) -> Any:
        return self.client.get(f"/v1/drivers/{driver_id}")

    def create_driver(self, data: dict[str, Any]) -> Any:
        return self.client.post("/v1/drivers", data)

    def update_driver(self, driver_id: str, data: dict[str, Any]) -> Any:
        return self.client.patch(f"/v1/drivers/{driver_id}", data)

    def delete_driver(self, driver_id: str) -> Any:
        return self.client.delete(f"/v1/drivers/{driver_id}")

    def invite_driver(self, driver_id: str) -> Any:
        """Invite a driver to claim their profile."""
        return self.client.post(f"/v1/drivers/{driver_id}/invite")

    def get_invite_status(self, driver_id: str) -> Any:
        return self.client.get(f"/v1/drivers/{driver_id}/invite-status")

    def resend_invite(self, driver_id: str) -> Any:
        return self.client.post(f"/v1/drivers/{driver_id}/resend-invite")

    def get_invite_info(self, token: str) -> Any:
        """Public: invite details shown on the claim page."""
        return self.client.get(f"/v1/driver-invite/{token}")

    def accept_invite(self, token: str, password: str) -> Any:
        """Public: claim a driver profile by setting a password."""
        return self.client.post(f"/v1/driver-invite/{token}/accept", {"password": password})

    def get_my_driver_profiles(self) -> Any:
        """Driver profiles of the current user across all organizations."""
        return self.client.get("/v1/me/driver-profiles")
