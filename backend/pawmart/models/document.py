"""
PawMart Backend — Document SQLAlchemy Model
=============================================

What:  ORM model for the `documents` table, which backs every collection.
How:   One row per record. `collection` names the resource kind ("users",
       "listings", "orders"); `body` holds the client's document verbatim.
Who:   Used by the DocumentStore and by Alembic for schema management.

Table Design Rationale:
    - String(36) UUID primary key: portable across PostgreSQL and SQLite, and
      the same string the API returns as `_id`.
    - JSON body (JSONB on PostgreSQL): documents have no enforced schema.
    - Index on collection: every query is scoped to one collection.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import JSON, Index, String, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TIMESTAMP

from pawmart.database import Base


class Document(Base):
    """A single record in one of the store's collections."""

    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Generated record identifier, exposed as _id",
    )

    collection: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Collection (resource kind) this record belongs to",
    )

    body: Mapped[Dict[str, Any]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
        default=dict,
        comment="Client-submitted document, stored verbatim",
    )

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this record was inserted (UTC)",
    )

    __table_args__ = (
        Index("idx_documents_collection", "collection"),
    )

    def to_record(self) -> Dict[str, Any]:
        """The API view of this row: the stored body plus its `_id`."""
        return {"_id": self.id, **(self.body or {})}

    def __repr__(self) -> str:
        return f"<Document(id={self.id}, collection='{self.collection}')>"
