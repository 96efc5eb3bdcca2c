"""
PawMart Backend — FastAPI Dependencies
========================================

What:  Resolve the per-application objects (store, services) for a request.
How:   The app factory stores them on `app.state`; these functions read them
       back through the request, so tests can build isolated apps.

Example usage in a route:
    @router.get("/users")
    async def list_users(users: UserService = Depends(get_user_service)):
        return await users.list_all()
"""

from fastapi import Request

from pawmart.database import Database
from pawmart.services import ServiceRegistry
from pawmart.services.listing_service import ListingService
from pawmart.services.order_service import OrderService
from pawmart.services.user_service import UserService


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_services(request: Request) -> ServiceRegistry:
    return request.app.state.services


def get_user_service(request: Request) -> UserService:
    return get_services(request).users


def get_listing_service(request: Request) -> ListingService:
    return get_services(request).listings


def get_order_service(request: Request) -> OrderService:
    return get_services(request).orders
