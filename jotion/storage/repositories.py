"""Repository pattern implementation for data access layer."""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from jotion.models.document import Document


class DocumentRepository:
    """Repository for document operations.

    Mirrors a key-indexed record store: point lookups, inserts, partial
    patches, deletes, and two indexed listings (by owner, by owner+parent),
    each returned newest first.
    """

    def __init__(self, session: Session):
        """Initialize repository with a database session."""
        self.session = session

    def insert(self, document: Document) -> Document:
        """Insert a new document."""
        self.session.add(document)
        self.session.flush()
        return document

    def get(self, document_id: str) -> Optional[Document]:
        """Get document by ID."""
        return self.session.get(Document, document_id)

    def patch(self, document_id: str, **fields: Any) -> Optional[Document]:
        """Update a document by ID with field updates.

        Only attributes that exist on the model are applied. Fields left out
        keep their current value.

        Args:
            document_id: Document identifier
            **fields: Fields to update (title, is_archived, icon, etc.)

        Returns:
            Updated document if found, None otherwise
        """
        document = self.get(document_id)
        if document is None:
            return None

        for key, value in fields.items():
            if hasattr(document, key):
                setattr(document, key, value)

        self.session.flush()
        return document

    def delete(self, document_id: str) -> Optional[Document]:
        """Delete a document by ID and return the removed record."""
        document = self.get(document_id)
        if document is None:
            return None
        self.session.delete(document)
        self.session.flush()
        return document

    def by_user(self, user_id: str, is_archived: bool | None = None) -> list[Document]:
        """List all documents of an owner, optionally filtered on the archive flag."""
        stmt = select(Document).where(Document.user_id == user_id)
        return self._collect(stmt, is_archived)

    def by_user_parent(
        self,
        user_id: str,
        parent_document: str | None,
        is_archived: bool | None = None,
    ) -> list[Document]:
        """List an owner's documents under a parent (None selects root level)."""
        stmt = select(Document).where(Document.user_id == user_id)
        if parent_document is None:
            stmt = stmt.where(Document.parent_document.is_(None))
        else:
            stmt = stmt.where(Document.parent_document == parent_document)
        return self._collect(stmt, is_archived)

    def _collect(self, stmt: Select, is_archived: bool | None) -> list[Document]:
        if is_archived is not None:
            stmt = stmt.where(Document.is_archived == is_archived)
        stmt = stmt.order_by(Document.creation_time.desc())
        return list(self.session.scalars(stmt))
