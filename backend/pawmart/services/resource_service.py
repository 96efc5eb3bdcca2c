"""
PawMart Backend — Resource Service (uniform CRUD contract)
============================================================

What:  The create / list / get / filter / update / delete contract shared by
       users, listings and orders.
How:   Each service is bound to one collection of the DocumentStore at
       construction time and issues exactly one collection call per
       operation (user creation adds the duplicate-email lookup).
Who:   Constructed by the application factory; called by route handlers.

Result variants:
    create() → Inserted(inserted_id) | AlreadyExists(existing_id)
    get()    → Found(record)         | NotFound(key)

Error Handling Strategy:
    - Malformed identifiers are not errors: get() answers NotFound,
      update()/delete() answer zero counts.
    - Anything else the store raises is logged and re-raised as
      DatabaseError with a fixed message for the operation, which the
      global handler turns into a 500.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from pawmart.exceptions import DatabaseError, InvalidIdentifierError
from pawmart.store import (
    ID_FIELD,
    DeleteResult,
    DocumentStore,
    UpdateResult,
    parse_identifier,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Inserted:
    inserted_id: str


@dataclass(frozen=True)
class AlreadyExists:
    existing_id: Optional[str] = None


@dataclass(frozen=True)
class Found:
    record: Dict[str, Any]


@dataclass(frozen=True)
class NotFound:
    key: str


CreateOutcome = Union[Inserted, AlreadyExists]
LookupOutcome = Union[Found, NotFound]


class ResourceService:
    """
    CRUD over one collection.

    Subclasses set:
        collection_name: store collection ("users", "listings", ...)
        resource:        singular label used in error messages
        key_field:       field that get()/update() address; `_id` by default
    """

    collection_name: str = ""
    resource: str = "record"
    key_field: str = ID_FIELD

    def __init__(self, store: DocumentStore):
        self.collection = store.collection(self.collection_name)

    @property
    def plural(self) -> str:
        return f"{self.resource}s"

    def _key_filter(self, key: str) -> Dict[str, Any]:
        if self.key_field == ID_FIELD:
            return {ID_FIELD: parse_identifier(key)}
        return {self.key_field: key}

    def _failure(self, message: str, error: Exception, **context: Any) -> DatabaseError:
        logger.error(
            "%s: %s (%s)", message, str(error), type(error).__name__, exc_info=True
        )
        context["error_type"] = type(error).__name__
        return DatabaseError(message=message, context=context)

    async def create(self, document: Dict[str, Any]) -> CreateOutcome:
        """Insert `document` as a new record."""
        try:
            result = await self.collection.insert_one(document)
        except Exception as e:
            raise self._failure(f"Failed to create {self.resource}", e)
        logger.info("Created %s %s", self.resource, result.inserted_id)
        return Inserted(inserted_id=result.inserted_id)

    async def list_all(self) -> List[Dict[str, Any]]:
        """Every record in the collection. Unbounded, no defined order."""
        try:
            return await self.collection.find()
        except Exception as e:
            raise self._failure(f"Failed to fetch {self.plural}", e)

    async def get(self, key: str) -> LookupOutcome:
        """The record whose key field equals `key`."""
        try:
            record = await self.collection.find_one(self._key_filter(key))
        except InvalidIdentifierError:
            return NotFound(key=key)
        except Exception as e:
            raise self._failure(f"Failed to fetch {self.resource}", e, key=key)
        if record is None:
            return NotFound(key=key)
        return Found(record=record)

    async def list_by(self, field: str, value: Any) -> List[Dict[str, Any]]:
        """All records whose `field` equals `value`."""
        try:
            return await self.collection.find({field: value})
        except Exception as e:
            raise self._failure(f"Failed to fetch {self.plural}", e, field=field)

    async def update(self, key: str, fields: Dict[str, Any]) -> UpdateResult:
        """Merge `fields` into the record addressed by `key`; never creates one."""
        try:
            result = await self.collection.update_one(self._key_filter(key), fields)
        except InvalidIdentifierError:
            return UpdateResult(matched_count=0, modified_count=0)
        except Exception as e:
            raise self._failure(f"Failed to update {self.resource}", e, key=key)
        logger.info(
            "Updated %s %s: matched=%d modified=%d",
            self.resource, key, result.matched_count, result.modified_count,
        )
        return result

    async def delete(self, record_id: str) -> DeleteResult:
        """Remove the record with the generated identifier `record_id`."""
        try:
            result = await self.collection.delete_one({ID_FIELD: parse_identifier(record_id)})
        except InvalidIdentifierError:
            return DeleteResult(deleted_count=0)
        except Exception as e:
            raise self._failure(f"Failed to delete {self.resource}", e, key=record_id)
        logger.info("Deleted %s %s: deleted=%d", self.resource, record_id, result.deleted_count)
        return result
