"""
PawMart Backend — Resource Request Schemas
============================================

What:  Pydantic models for the documents clients submit (users, listings,
       orders), for both create and partial-update payloads.
Why:   Each resource kind gets named, typed fields at the boundary while
       staying loosely typed: unknown keys are kept (`extra="allow"`) and
       stored verbatim. Validation is strict: a value of the wrong JSON type
       is rejected (422), never converted, so `10` stays an int and `"2"`
       is not accepted as a quantity.
How:   Routes declare these as body types. Services call `to_document()`,
       which only includes fields the client actually sent, so an update
       never overwrites a field with a default.
"""

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt

# Ints and floats are both kept as sent
Number = Union[StrictInt, StrictFloat]


class ResourceDocument(BaseModel):
    """Common behaviour for every submitted document."""

    model_config = ConfigDict(extra="allow", strict=True)

    def to_document(self) -> Dict[str, Any]:
        """Fields the client sent (declared or extra), minus any `_id`."""
        data = self.model_dump(exclude_unset=True)
        data.pop("_id", None)
        return data


# ── Users ─────────────────────────────────────────────────────────────────


class UserUpdate(ResourceDocument):
    email: Optional[str] = Field(default=None, description="Login email, unique per user")
    name: Optional[str] = Field(default=None, description="Display name")
    photo_url: Optional[str] = Field(default=None, description="Profile photo URL")
    role: Optional[str] = Field(default=None, description="Free-form role label")


class UserCreate(UserUpdate):
    # Required on create: duplicate detection keys on it
    email: str = Field(description="Login email, unique per user")


# ── Listings ──────────────────────────────────────────────────────────────


class ListingUpdate(ResourceDocument):
    name: Optional[str] = Field(default=None, description="Listing title")
    category: Optional[str] = Field(default=None, description="Category, e.g. Pets, Food, Accessories")
    price: Optional[Number] = Field(default=None, description="Asking price; 0 for adoption")
    location: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)
    image: Optional[str] = Field(default=None, description="Image URL")
    owner_email: Optional[str] = Field(default=None, description="Email of the user who posted it")
    date: Optional[str] = Field(default=None, description="Pickup / availability date")


class ListingCreate(ListingUpdate):
    pass


# ── Orders ────────────────────────────────────────────────────────────────


class OrderUpdate(ResourceDocument):
    listing_id: Optional[str] = Field(default=None, description="_id of the ordered listing")
    listing_name: Optional[str] = Field(default=None)
    buyer_name: Optional[str] = Field(default=None)
    buyer_email: Optional[str] = Field(default=None, description="Email of the ordering user")
    quantity: Optional[StrictInt] = Field(default=None)
    price: Optional[Number] = Field(default=None)
    address: Optional[str] = Field(default=None)
    phone: Optional[str] = Field(default=None)
    date: Optional[str] = Field(default=None)
    notes: Optional[str] = Field(default=None)
    status: Optional[str] = Field(default=None, description="Free-form status, e.g. pending")


class OrderCreate(OrderUpdate):
    pass
