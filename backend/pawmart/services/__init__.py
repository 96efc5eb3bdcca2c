# Services package init
"""
PawMart Backend — Services Layer
==================================

What:  Business rules between routes (HTTP) and the document store.

Service Inventory:
    - ResourceService: the shared CRUD contract and result variants
    - UserService:     email-keyed lookups, duplicate-email check on create
    - ListingService:  filters by owner email and by category
    - OrderService:    filter by buyer email

Services are built once per application with the app's DocumentStore and
kept on `app.state.services`; routes reach them through dependencies.
"""

from dataclasses import dataclass

from pawmart.services.listing_service import ListingService
from pawmart.services.order_service import OrderService
from pawmart.services.user_service import UserService
from pawmart.store import DocumentStore


@dataclass(frozen=True)
class ServiceRegistry:
    users: UserService
    listings: ListingService
    orders: OrderService

    @classmethod
    def from_store(cls, store: DocumentStore) -> "ServiceRegistry":
        return cls(
            users=UserService(store),
            listings=ListingService(store),
            orders=OrderService(store),
        )
