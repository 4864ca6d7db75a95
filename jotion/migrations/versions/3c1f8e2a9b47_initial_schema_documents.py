"""Initial schema: documents

Revision ID: 3c1f8e2a9b47
Revises: 
Create Date: 2026-10-19 10:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c1f8e2a9b47"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # parent_document has no foreign key: removing a document leaves its
    # children pointing at the removed ID
    op.create_table(
        "documents",
        sa.Column("id", sa.String(length=255), nullable=False),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("parent_document", sa.String(length=255), nullable=True),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("is_archived", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("icon", sa.String(length=255), nullable=True),
        sa.Column("cover_image", sa.String(length=2048), nullable=True),
        sa.Column("creation_time", sa.BigInteger(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("by_user", "documents", ["user_id"], unique=False)
    op.create_index("by_user_parent", "documents", ["user_id", "parent_document"], unique=False)
    op.create_index(
        op.f("ix_documents_creation_time"), "documents", ["creation_time"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_documents_creation_time"), table_name="documents")
    op.drop_index("by_user_parent", table_name="documents")
    op.drop_index("by_user", table_name="documents")
    op.drop_table("documents")
