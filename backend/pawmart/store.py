"""
PawMart Backend — Document Store
==================================

What:  A small collection API over the `documents` table.
Why:   Resource services talk in documents and acknowledgments
       (insert_one / find / update_one / delete_one), not in SQL.
How:   Each Collection method opens one transactional session from the
       shared Database, runs its statement(s), and returns either records
       (plain dicts with `_id`) or an acknowledgment dataclass.
Who:   Built once by the app factory (`DocumentStore(database)`), then
       handed to each resource service.

Filters:
    Equality maps only. `{"_id": "<uuid>"}` matches the identifier column,
    any other key matches a top-level field of the JSON body:
        {"email": "a@x.com"}         → body->>'email' = 'a@x.com'
        {"category": "Pets", "price": 10}
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import ColumnElement, delete, func, select
from sqlalchemy.sql import Select

from pawmart.database import Database
from pawmart.exceptions import InvalidIdentifierError
from pawmart.models.document import Document

logger = logging.getLogger(__name__)

ID_FIELD = "_id"


@dataclass(frozen=True)
class InsertOneResult:
    inserted_id: str
    acknowledged: bool = True


@dataclass(frozen=True)
class UpdateResult:
    matched_count: int
    modified_count: int
    acknowledged: bool = True


@dataclass(frozen=True)
class DeleteResult:
    deleted_count: int
    acknowledged: bool = True


def parse_identifier(value: Any) -> str:
    """
    Canonicalise a record identifier.

    Accepts any UUID spelling the stdlib understands (hyphenated, hex,
    braces, any case) and returns the lowercase hyphenated form used as the
    primary key.

    Raises:
        InvalidIdentifierError: `value` is not a UUID.
    """
    if isinstance(value, uuid.UUID):
        return str(value)
    try:
        return str(uuid.UUID(str(value)))
    except (TypeError, ValueError, AttributeError):
        raise InvalidIdentifierError(value)


def _field_clause(field: str, value: Any) -> ColumnElement[bool]:
    element = Document.body[field]
    # bool before int: bool is a subclass of int
    if isinstance(value, bool):
        return element.as_boolean() == value
    if isinstance(value, int):
        return element.as_integer() == value
    if isinstance(value, float):
        return element.as_float() == value
    if isinstance(value, str):
        return element.as_string() == value
    raise TypeError(f"Unsupported filter value for '{field}': {type(value).__name__}")


class Collection:
    """One named collection of documents."""

    def __init__(self, database: Database, name: str):
        self._database = database
        self.name = name

    def __repr__(self) -> str:
        return f"<Collection(name='{self.name}')>"

    def _select(self, filter: Optional[Mapping[str, Any]] = None) -> Select:
        query = select(Document).where(Document.collection == self.name)
        for field, value in (filter or {}).items():
            if field == ID_FIELD:
                query = query.where(Document.id == parse_identifier(value))
            else:
                query = query.where(_field_clause(field, value))
        return query

    def _locate(self, filter: Mapping[str, Any]) -> Select:
        """The first row matching `filter`, locked until the session ends."""
        return self._select(filter).limit(1).with_for_update()

    async def insert_one(self, document: Mapping[str, Any]) -> InsertOneResult:
        """Insert `document` verbatim under a freshly generated `_id`."""
        body = {k: v for k, v in document.items() if k != ID_FIELD}
        row = Document(id=str(uuid.uuid4()), collection=self.name, body=body)
        async with self._database.session() as session:
            session.add(row)
            await session.flush()
        logger.debug("Inserted %s into %s", row.id, self.name)
        return InsertOneResult(inserted_id=row.id)

    async def find(self, filter: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """All records matching `filter`, in the store's natural order."""
        async with self._database.session() as session:
            result = await session.execute(self._select(filter))
            return [row.to_record() for row in result.scalars().all()]

    async def find_one(self, filter: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """The first record matching `filter`, or None."""
        async with self._database.session() as session:
            result = await session.execute(self._select(filter).limit(1))
            row = result.scalars().first()
            return row.to_record() if row is not None else None

    async def count(self, filter: Optional[Mapping[str, Any]] = None) -> int:
        subquery = self._select(filter).subquery()
        async with self._database.session() as session:
            result = await session.execute(select(func.count()).select_from(subquery))
            return result.scalar() or 0

    async def update_one(
        self,
        filter: Mapping[str, Any],
        fields: Mapping[str, Any],
    ) -> UpdateResult:
        """
        Merge `fields` into the first record matching `filter`.

        Fields not named in `fields` keep their values. Nothing is created
        when no record matches. `modified_count` is 0 when the merge leaves
        the document unchanged.
        """
        changes = {k: v for k, v in fields.items() if k != ID_FIELD}
        async with self._database.session() as session:
            result = await session.execute(self._locate(filter))
            row = result.scalars().first()
            if row is None:
                return UpdateResult(matched_count=0, modified_count=0)

            merged = {**(row.body or {}), **changes}
            if merged == row.body:
                return UpdateResult(matched_count=1, modified_count=0)

            # Reassign (not mutate) so the JSON column is flagged dirty
            row.body = merged
            await session.flush()
        logger.debug("Updated %s in %s (%d fields)", row.id, self.name, len(changes))
        return UpdateResult(matched_count=1, modified_count=1)

    async def delete_one(self, filter: Mapping[str, Any]) -> DeleteResult:
        """Remove the first record matching `filter`."""
        async with self._database.session() as session:
            target = self._locate(filter).with_only_columns(Document.id)
            row_id = (await session.execute(target)).scalar()
            if row_id is None:
                return DeleteResult(deleted_count=0)
            result = await session.execute(delete(Document).where(Document.id == row_id))
            deleted = result.rowcount or 0
        logger.debug("Deleted %s from %s", row_id, self.name)
        return DeleteResult(deleted_count=deleted)


class DocumentStore:
    """
    Client object for the document store.

    Collections are cheap views over the shared Database; asking for the
    same name twice returns the same Collection instance.
    """

    def __init__(self, database: Database):
        self.database = database
        self._collections: Dict[str, Collection] = {}

    def collection(self, name: str) -> Collection:
        if name not in self._collections:
            self._collections[name] = Collection(self.database, name)
        return self._collections[name]

    def __getitem__(self, name: str) -> Collection:
        return self.collection(name)
