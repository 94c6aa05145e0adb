"""
Trailers API.
"""

from typing import Any, Optional

from haulbase.api.base import ResourceApi, pick

TRAILER_FILTER_KEYS = ("status", "type", "available", "assigned", "search")


class TrailersApi(ResourceApi):
    """Endpoints under /v1/trailers."""

    def get_trailers(self, filters: Optional[dict[str, Any]] = None) -> Any:
        return self.client.get("/v1/trailers", params=pick(filters, TRAILER_FILTER_KEYS))

    def get_trailer(self, trailer_id: str) -> Any:
        return self.client.get(f"/v1/trailers/{trailer_id}")

    def create_trailer(self, data: dict[str, Any]) -> Any:
        return self.client.post("/v1/trailers", data)

    def update_trailer(self, trailer_id: str, data: dict[str, Any]) -> Any:
        return self.client.patch(f"/v1/trailers/{trailer_id}", data)

    def delete_trailer(self, trailer_id: str) -> Any:
        return self.client.delete(f"/v1/trailers/{trailer_id}")

    def assign_to_truck(self, trailer_id: str, truck_id: Optional[str]) -> Any:
        return self.client.post(f"/v1/trailers/{trailer_id}/assign-truck", {"truck_id": truck_id})

    def get_trailer_stats(self) -> Any:
        return self.client.get("/v1/trailers/stats")

    def get_trailers_needing_attention(self) -> Any:
        return self.client.get("/v1/trailers/attention")
