"""
Driver settings API - a driver's organizations, invitations and history.
"""

from typing import Any

from haulbase.api.base import ResourceApi


class DriverSettingsApi(ResourceApi):
    """Endpoints under /v1/driver-settings."""

    def get_organizations(self) -> Any:
        """Every organization the driver belongs to or has left."""
        return self.client.get("/v1/driver-settings/organizations")

    def get_pending_invites(self) -> Any:
        return self.client.get("/v1/driver-settings/invites")

    def accept_invite_by_code(self, code: str) -> Any:
        """Join an organization with the short code from an invitation."""
        return self.client.post("/v1/driver-settings/invites/accept-code", {"code": code})

    def accept_invite(self, invite_id: str) -> Any:
        return self.client.post(f"/v1/driver-settings/invites/{invite_id}/accept")

    def decline_invite(self, invite_id: str) -> Any:
        return self.client.post(f"/v1/driver-settings/invites/{invite_id}/decline")

    def disconnect_from_org(self, organization_id: str) -> Any:
        """Leave an organization; its history stays readable."""
        return self.client.post(
            f"/v1/driver-settings/organizations/{organization_id}/disconnect"
        )

    def get_history(self) -> Any:
        return self.client.get("/v1/driver-settings/history")

    def get_profiles(self) -> Any:
        return self.client.get("/v1/driver-settings/profiles")
