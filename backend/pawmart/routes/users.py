"""
PawMart Backend — User Route Handlers
=======================================

What:  POST/GET /users, GET/PATCH /users/{email}, DELETE /users/{id}.
How:   Thin handlers: validate the body, call UserService, shape the reply.
Who:   Called by the frontend's registration, profile and admin screens.
"""

import logging
from typing import Any, Dict, List, Union

from fastapi import APIRouter, Depends, Response

from pawmart.dependencies import get_user_service
from pawmart.routes.common import (
    SERVER_ERROR,
    delete_response,
    insert_response,
    lookup_response,
    update_response,
)
from pawmart.schemas.resources import UserCreate, UserUpdate
from pawmart.schemas.responses import (
    DeleteResponse,
    DuplicateResponse,
    InsertResponse,
    UpdateResponse,
)
from pawmart.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    response_model=Union[InsertResponse, DuplicateResponse],
    responses=SERVER_ERROR,
    summary="Register a user",
    description=(
        "Stores the submitted user document. If a user with the same email "
        "already exists nothing is inserted and insertedId is null."
    ),
)
async def create_user(
    body: UserCreate,
    users: UserService = Depends(get_user_service),
) -> Union[InsertResponse, DuplicateResponse]:
    outcome = await users.create(body.to_document())
    return insert_response(outcome)


@router.get(
    "",
    response_model=List[Dict[str, Any]],
    responses=SERVER_ERROR,
    summary="List all users",
)
async def list_users(users: UserService = Depends(get_user_service)) -> List[Dict[str, Any]]:
    return await users.list_all()


@router.get(
    "/{email}",
    response_model=None,
    responses=SERVER_ERROR,
    summary="Get a user by email",
    description="Returns the user document, or an empty body if no user has this email.",
)
async def get_user(email: str, users: UserService = Depends(get_user_service)) -> Response:
    return lookup_response(await users.get(email))


@router.patch(
    "/{email}",
    response_model=UpdateResponse,
    responses=SERVER_ERROR,
    summary="Update a user by email",
    description="Merges the submitted fields into the user; other fields are left as they are.",
)
async def update_user(
    email: str,
    body: UserUpdate,
    users: UserService = Depends(get_user_service),
) -> UpdateResponse:
    result = await users.update(email, body.to_document())
    return update_response(result)


@router.delete(
    "/{user_id}",
    response_model=DeleteResponse,
    responses=SERVER_ERROR,
    summary="Delete a user by id",
    description="Listings and orders that reference the user are not touched.",
)
async def delete_user(
    user_id: str,
    users: UserService = Depends(get_user_service),
) -> DeleteResponse:
    return delete_response(await users.delete(user_id))
