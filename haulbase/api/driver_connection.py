"""
Driver connection API - how drivers and organizations find each other.

Drivers look organizations up by code or in the public directory and send
connection requests; organizations review those requests, search the driver
network and send invites of their own.
"""

from typing import Any, Optional

from haulbase.api.base import ResourceApi

DEFAULT_SEARCH_LIMIT = 20


class DriverConnectionApi(ResourceApi):
    """Endpoints under /v1/driver-connection plus the org-side /v1/drivers ones."""

    # Driver side

    def find_org(self, code: str) -> Any:
        """Minimal public details of the organization owning `code`."""
        return self.client.get("/v1/driver-connection/find-org", params={"code": code})

    def request_connection(self, org_code: str) -> Any:
        return self.client.post("/v1/driver-connection/request", {"org_code": org_code})

    def get_my_requests(self) -> Any:
        """The driver's outgoing requests that are still pending."""
        return self.client.get("/v1/driver-connection/my-requests")

    def cancel_request(self, request_id: str) -> Any:
        return self.client.delete(f"/v1/driver-connection/requests/{request_id}")

    def get_incoming_invites(self) -> Any:
        """Invites organizations sent to the driver."""
        return self.client.get("/v1/driver-connection/incoming-invites")

    def accept_org_invite(self, invite_id: str) -> Any:
        return self.client.post(f"/v1/driver-connection/invites/{invite_id}/accept")

    def reject_org_invite(self, invite_id: str) -> Any:
        return self.client.post(f"/v1/driver-connection/invites/{invite_id}/reject")

    def search_org_directory(
        self,
        query: Optional[str] = None,
        state: Optional[str] = None,
        limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> Any:
        return self.client.get(
            "/v1/driver-connection/org-directory",
            params={"query": query, "state": state, "limit": limit},
        )

    def get_org_public_profile(self, slug: str) -> Any:
        return self.client.get(f"/v1/driver-connection/org-directory/{slug}")

    # Organization side

    def get_pending_requests(self) -> Any:
        """Connection requests waiting on the current organization."""
        return self.client.get("/v1/drivers/connection-requests")

    def approve_request(self, request_id: str) -> Any:
        return self.client.post(f"/v1/drivers/connection-requests/{request_id}/approve")

    def reject_request(self, request_id: str) -> Any:
        return self.client.post(f"/v1/drivers/connection-requests/{request_id}/reject")

    def update_sharing_level(self, driver_id: str, data_sharing_level: str) -> Any:
        return self.client.patch(
            f"/v1/drivers/{driver_id}/sharing-level", {"data_sharing_level": data_sharing_level}
        )

    def search_driver_network(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> Any:
        """Registered drivers not yet connected to the organization."""
        return self.client.get(
            "/v1/drivers/search-network", params={"query": query, "limit": limit}
        )

    def invite_driver(self, user_id: str) -> Any:
        return self.client.post("/v1/drivers/invite-driver", {"user_id": user_id})
