"""
PawMart Backend — Listing Route Handlers
==========================================

What:  CRUD for pet / supply listings plus two filtered views:
           GET /listings/user/{email}          (listings posted by a user)
           GET /listings/category/{category}   (listings in one category)
How:   Thin handlers over ListingService. Listing ids that are not valid
       identifiers behave exactly like ids that match nothing.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Response

from pawmart.dependencies import get_listing_service
from pawmart.routes.common import (
    SERVER_ERROR,
    delete_response,
    insert_response,
    lookup_response,
    update_response,
)
from pawmart.schemas.resources import ListingCreate, ListingUpdate
from pawmart.schemas.responses import DeleteResponse, InsertResponse, UpdateResponse
from pawmart.services.listing_service import ListingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/listings", tags=["Listings"])


@router.post("", response_model=InsertResponse, responses=SERVER_ERROR, summary="Create a listing")
async def create_listing(
    body: ListingCreate,
    listings: ListingService = Depends(get_listing_service),
) -> InsertResponse:
    return insert_response(await listings.create(body.to_document()))


@router.get(
    "",
    response_model=List[Dict[str, Any]],
    responses=SERVER_ERROR,
    summary="List all listings",
)
async def list_listings(
    listings: ListingService = Depends(get_listing_service),
) -> List[Dict[str, Any]]:
    return await listings.list_all()


@router.get(
    "/user/{email}",
    response_model=List[Dict[str, Any]],
    responses=SERVER_ERROR,
    summary="List the listings posted by one user",
)
async def list_listings_by_owner(
    email: str,
    listings: ListingService = Depends(get_listing_service),
) -> List[Dict[str, Any]]:
    return await listings.list_by_owner(email)


@router.get(
    "/category/{category}",
    response_model=List[Dict[str, Any]],
    responses=SERVER_ERROR,
    summary="List the listings in one category",
)
async def list_listings_by_category(
    category: str,
    listings: ListingService = Depends(get_listing_service),
) -> List[Dict[str, Any]]:
    return await listings.list_by_category(category)


@router.get(
    "/{listing_id}",
    response_model=None,
    responses=SERVER_ERROR,
    summary="Get a listing by id",
    description="Returns the listing, or an empty body if the id matches nothing or is malformed.",
)
async def get_listing(
    listing_id: str,
    listings: ListingService = Depends(get_listing_service),
) -> Response:
    return lookup_response(await listings.get(listing_id))


@router.patch(
    "/{listing_id}",
    response_model=UpdateResponse,
    responses=SERVER_ERROR,
    summary="Update a listing",
)
async def update_listing(
    listing_id: str,
    body: ListingUpdate,
    listings: ListingService = Depends(get_listing_service),
) -> UpdateResponse:
    return update_response(await listings.update(listing_id, body.to_document()))


@router.delete(
    "/{listing_id}",
    response_model=DeleteResponse,
    responses=SERVER_ERROR,
    summary="Delete a listing",
)
async def delete_listing(
    listing_id: str,
    listings: ListingService = Depends(get_listing_service),
) -> DeleteResponse:
    return delete_response(await listings.delete(listing_id))
