"""
PawMart Backend — Order Route Handlers
========================================

What:  CRUD for orders placed against listings, plus GET /orders/user/{email}
       for a buyer's order history.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Response

from pawmart.dependencies import get_order_service
from pawmart.routes.common import (
    SERVER_ERROR,
    delete_response,
    insert_response,
    lookup_response,
    update_response,
)
from pawmart.schemas.resources import OrderCreate, OrderUpdate
from pawmart.schemas.responses import DeleteResponse, InsertResponse, UpdateResponse
from pawmart.services.order_service import OrderService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post("", response_model=InsertResponse, responses=SERVER_ERROR, summary="Place an order")
async def create_order(
    body: OrderCreate,
    orders: OrderService = Depends(get_order_service),
) -> InsertResponse:
    return insert_response(await orders.create(body.to_document()))


@router.get("", response_model=List[Dict[str, Any]], responses=SERVER_ERROR, summary="List all orders")
async def list_orders(orders: OrderService = Depends(get_order_service)) -> List[Dict[str, Any]]:
    return await orders.list_all()


@router.get(
    "/user/{email}",
    response_model=List[Dict[str, Any]],
    responses=SERVER_ERROR,
    summary="List the orders placed by one buyer",
)
async def list_orders_by_buyer(
    email: str,
    orders: OrderService = Depends(get_order_service),
) -> List[Dict[str, Any]]:
    return await orders.list_by_buyer(email)


@router.get("/{order_id}", response_model=None, responses=SERVER_ERROR, summary="Get an order by id")
async def get_order(order_id: str, orders: OrderService = Depends(get_order_service)) -> Response:
    return lookup_response(await orders.get(order_id))


@router.patch("/{order_id}", response_model=UpdateResponse, responses=SERVER_ERROR, summary="Update an order")
async def update_order(
    order_id: str,
    body: OrderUpdate,
    orders: OrderService = Depends(get_order_service),
) -> UpdateResponse:
    return update_response(await orders.update(order_id, body.to_document()))


@router.delete("/{order_id}", response_model=DeleteResponse, responses=SERVER_ERROR, summary="Delete an order")
async def delete_order(order_id: str, orders: OrderService = Depends(get_order_service)) -> DeleteResponse:
    return delete_response(await orders.delete(order_id))
