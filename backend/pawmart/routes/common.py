"""
PawMart Backend — Shared Response Builders
============================================

What:  Turn service results into HTTP responses, identically for every
       resource kind.

    Inserted          → 200 {"acknowledged": true, "insertedId": "..."}
    AlreadyExists     → 200 {"message": "User already exists", "insertedId": null}
    Found             → 200 <record>
    NotFound          → 200 with an empty body
    UpdateResult      → 200 {"acknowledged", "matchedCount", "modifiedCount"}
    DeleteResult      → 200 {"acknowledged", "deletedCount"}
"""

from typing import Union

from fastapi import Response
from fastapi.responses import JSONResponse

from pawmart.schemas.responses import (
    DeleteResponse,
    DuplicateResponse,
    ErrorResponse,
    InsertResponse,
    UpdateResponse,
)
from pawmart.services.resource_service import (
    AlreadyExists,
    CreateOutcome,
    Found,
    LookupOutcome,
)
from pawmart.store import DeleteResult, UpdateResult

SERVER_ERROR = {500: {"description": "Store failure", "model": ErrorResponse}}


def insert_response(outcome: CreateOutcome) -> Union[InsertResponse, DuplicateResponse]:
    if isinstance(outcome, AlreadyExists):
        return DuplicateResponse()
    return InsertResponse(inserted_id=outcome.inserted_id)


def lookup_response(outcome: LookupOutcome) -> Response:
    if isinstance(outcome, Found):
        return JSONResponse(content=outcome.record)
    # Absent record: success status, no body
    return Response(status_code=200)


def update_response(result: UpdateResult) -> UpdateResponse:
    return UpdateResponse(
        acknowledged=result.acknowledged,
        matched_count=result.matched_count,
        modified_count=result.modified_count,
    )


def delete_response(result: DeleteResult) -> DeleteResponse:
    return DeleteResponse(acknowledged=result.acknowledged, deleted_count=result.deleted_count)
