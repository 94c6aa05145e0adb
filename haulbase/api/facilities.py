"""
Facilities API - shipper and receiver locations.
"""

from typing import Any, Optional

from haulbase.api.base import ResourceApi, pick

FACILITY_FILTER_KEYS = ("is_active", "facility_type", "search")


class FacilitiesApi(ResourceApi):
    """Endpoints under /v1/facilities."""

    def get_facilities(self, filters: Optional[dict[str, Any]] = None) -> Any:
        return self.client.get("/v1/facilities", params=pick(filters, FACILITY_FILTER_KEYS))

    def get_facility(self, facility_id: str) -> Any:
        return self.client.get(f"/v1/facilities/{facility_id}")

    def create_facility(self, data: dict[str, Any]) -> Any:
        return self.client.post("/v1/facilities", data)

    def update_facility(self, facility_id: str, data: dict[str, Any]) -> Any:
        return self.client.patch(f"/v1/facilities/{facility_id}", data)

    def delete_facility(self, facility_id: str) -> Any:
        return self.client.delete(f"/v1/facilities/{facility_id}")
