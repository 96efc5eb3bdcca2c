"""Create documents table

Revision ID: 001
Revises: None
Create Date: 2025-11-03 00:00:00.000000+00:00

What:  Creates the `documents` table that backs the users, listings and
       orders collections.

Rollback: downgrade() drops the table entirely (destructive, all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the documents table and its collection index."""
    op.create_table(
        "documents",
        sa.Column(
            "id",
            sa.String(36),
            nullable=False,
            comment="Generated record identifier, exposed as _id",
        ),
        sa.Column(
            "collection",
            sa.String(64),
            nullable=False,
            comment="Collection (resource kind) this record belongs to",
        ),
        sa.Column(
            "body",
            sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
            nullable=False,
            comment="Client-submitted document, stored verbatim",
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this record was inserted (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index("idx_documents_collection", "documents", ["collection"])


def downgrade() -> None:
    op.drop_index("idx_documents_collection", table_name="documents")
    op.drop_table("documents")
