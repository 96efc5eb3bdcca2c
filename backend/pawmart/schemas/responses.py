"""
PawMart Backend — Response Schemas
====================================

What:  Pydantic models for what the API returns: write acknowledgments,
       error bodies, and the health check.
How:   Acknowledgment fields use camelCase aliases (insertedId, matchedCount,
       ...) on the wire; FastAPI serializes response models by alias.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class InsertResponse(BaseModel):
    """Returned by POST /users, /listings, /orders."""
    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = Field(default=True)
    inserted_id: str = Field(alias="insertedId", description="_id of the new record")


class DuplicateResponse(BaseModel):
    """Returned by POST /users when the email is already registered."""
    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(default="User already exists")
    inserted_id: None = Field(default=None, alias="insertedId")


class UpdateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = Field(default=True)
    matched_count: int = Field(alias="matchedCount")
    modified_count: int = Field(alias="modifiedCount")


class DeleteResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = Field(default=True)
    deleted_count: int = Field(alias="deletedCount")


class ErrorResponse(BaseModel):
    """
    Error body for all non-2xx responses produced by the app.

    Example:
        {
            "error": "server_error",
            "message": "Failed to fetch listings",
            "request_id": "1f0c2a9b"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
