"""
Brokers API - broker CRUD and FMCSA lookup.
"""

from typing import Any, Optional

from haulbase.api.base import ResourceApi, pick

BROKER_FILTER_KEYS = ("is_active", "is_preferred", "search")


class BrokersApi(ResourceApi):
    """Endpoints under /v1/brokers."""

    def get_brokers(self, filters: Optional[dict[str, Any]] = None) -> Any:
        return self.client.get("/v1/brokers", params=pick(filters, BROKER_FILTER_KEYS))

    def get_broker(self, broker_id: str) -> Any:
        return self.client.get(f"/v1/brokers/{broker_id}")

    def create_broker(self, data: dict[str, Any]) -> Any:
        return self.client.post("/v1/brokers", data)

    def update_broker(self, broker_id: str, data: dict[str, Any]) -> Any:
        return self.client.patch(f"/v1/brokers/{broker_id}", data)

    def delete_broker(self, broker_id: str) -> Any:
        return self.client.delete(f"/v1/brokers/{broker_id}")

    def fmcsa_lookup(
        self,
        mc_number: Optional[str] = None,
        dot_number: Optional[str] = None,
        name: Optional[str] = None,
        query: Optional[str] = None,
    ) -> Any:
        """Look a broker up in the FMCSA registry by MC, DOT, name or free text."""
        return self.client.get(
            "/v1/brokers/fmcsa-lookup",
            params={
                "mc_number": mc_number,
                "dot_number": dot_number,
                "name": name,
                "query": query,
            },
        )
