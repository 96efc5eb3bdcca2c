"""PawMart Backend — Listing Service."""

from typing import Any, Dict, List

from pawmart.services.resource_service import ResourceService


class ListingService(ResourceService):
    collection_name = "listings"
    resource = "listing"

    async def list_by_owner(self, email: str) -> List[Dict[str, Any]]:
        return await self.list_by("owner_email", email)

    async def list_by_category(self, category: str) -> List[Dict[str, Any]]:
        return await self.list_by("category", category)
