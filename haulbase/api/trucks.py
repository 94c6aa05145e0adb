"""
Trucks API.
"""

from typing import Any, Optional

from haulbase.api.base import ResourceApi, pick

TRUCK_FILTER_KEYS = ("status", "available", "assigned", "search")


class TrucksApi(ResourceApi):
    """Endpoints under /v1/trucks."""

    def get_trucks(self, filters: Optional[dict[str, Any]] = None) -> Any:
        return self.client.get("/v1/trucks", params=pick(filters, TRUCK_FILTER_KEYS))

    def get_truck(self, truck_id: str) -> Any:
        return self.client.get(f"/v1/trucks/{truck_id}")

    def create_truck(self, data: dict[str, Any]) -> Any:
        return self.client.post("/v1/trucks", data)

    def update_truck(self, truck_id: str, data: dict[str, Any]) -> Any:
        return self.client.patch(f"/v1/trucks/{truck_id}", data)

    def delete_truck(self, truck_id: str) -> Any:
        return self.client.delete(f"/v1/trucks/{truck_id}")

    def assign_driver(self, truck_id: str, driver_id: Optional[str]) -> Any:
        """Assign a driver to a truck; None unassigns."""
        return self.client.post(f"/v1/trucks/{truck_id}/assign-driver", {"driver_id": driver_id})

    def assign_trailer(self, truck_id: str, trailer_id: Optional[str]) -> Any:
        """Hook a trailer to a truck; None unhooks."""
        return self.client.post(
            f"/v1/trucks/{truck_id}/assign-trailer", {"trailer_id": trailer_id}
        )

    def get_truck_stats(self) -> Any:
        return self.client.get("/v1/trucks/stats")

    def get_trucks_needing_attention(self) -> Any:
        """Trucks with expiring documents or open maintenance."""
        return self.client.get("/v1/trucks/attention")
