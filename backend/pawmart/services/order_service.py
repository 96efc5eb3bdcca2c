"""PawMart Backend — Order Service."""

from typing import Any, Dict, List

from pawmart.services.resource_service import ResourceService


class OrderService(ResourceService):
    collection_name = "orders"
    resource = "order"

    async def list_by_buyer(self, email: str) -> List[Dict[str, Any]]:
        return await self.list_by("buyer_email", email)
