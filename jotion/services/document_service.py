"""Document service layer for business logic and validation."""

import logging
import uuid

from sqlalchemy.orm import Session

from jotion.exceptions import (
    CorruptTreeError,
    DatabaseError,
    DocumentServiceError,
    ForbiddenError,
    NotFoundError,
    UnauthenticatedError,
    UnauthorizedError,
)
from jotion.identity import Identity
from jotion.models.base import next_creation_time
from jotion.models.document import Document
from jotion.services.document_patch import DocumentPatch
from jotion.services.tree_operations import DocumentTreeWalker
from jotion.services.validation import DocumentValidator
from jotion.storage.repositories import DocumentRepository

logger = logging.getLogger(__name__)


class DocumentService:
    """Service layer for owner-scoped document operations.

    Every method takes the caller's identity explicitly. Mutations check that
    the caller is authenticated, that the document exists and that the caller
    owns it, in that order, before anything is written.
    """

    def __init__(self, session: Session):
        """
        Initialize document service with database session.

        Args:
            session: SQLAlchemy database session
        """
        self.session = session
        self.document_repo = DocumentRepository(session)
        self.tree = DocumentTreeWalker(self.document_repo)

    def create_document(
        self,
        identity: Identity | None,
        title: str,
        parent_document: str | None = None,
    ) -> Document:
        """
        Create a new document owned by the caller.

        Args:
            identity: Caller identity (required)
            title: Document title (required, non-empty)
            parent_document: Optional parent document ID, stored as given

        Returns:
            Created document with ID

        Raises:
            UnauthenticatedError: If there is no caller identity
            ValidationError: If title or parent_document is invalid
            DatabaseError: If database operation fails
        """
        user_id = self._require_subject(identity)
        DocumentValidator.validate_title(title)
        if parent_document is not None:
            DocumentValidator.validate_id(parent_document, "parentDocument")

        try:
            document = Document(
                id=str(uuid.uuid4()),
                title=title,
                parent_document=parent_document,
                user_id=user_id,
                is_archived=False,
                is_published=False,
                creation_time=next_creation_time(),
            )
            self.document_repo.insert(document)
            self.session.commit()
            logger.info("Created document %s for %s", document.id, user_id)
            return document

        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to create document: {str(e)}", e) from e

    def get_document_by_id(self, identity: Identity | None, document_id: str) -> Document:
        """
        Read a document.

        Published documents that are not archived are readable by anyone,
        including unauthenticated callers. Anything else is only returned to
        its owner.

        Raises:
            ValidationError: If document_id is invalid
            NotFoundError: If document is not found
            UnauthorizedError: If the document is private and not the caller's
        """
        DocumentValidator.validate_id(document_id)
        document = self._get(document_id)

        if document.is_published and not document.is_archived:
            return document

        if identity is None or document.user_id != identity.subject:
            raise UnauthorizedError("Document", document_id)

        return document

    def update_document(
        self,
        identity: Identity | None,
        document_id: str,
        patch: DocumentPatch,
    ) -> Document:
        """
        Apply a sparse update to a document the caller owns.

        Args:
            identity: Caller identity (required)
            document_id: Document ID
            patch: Fields to change; UNSET fields stay as they are

        Returns:
            Updated document

        Raises:
            UnauthenticatedError, NotFoundError, ForbiddenError: Ownership check
            ValidationError: If a supplied field is invalid
            DatabaseError: If database operation fails
        """
        self._get_owned(identity, document_id)

        changes = patch.changes()
        if "title" in changes:
            DocumentValidator.validate_title(changes["title"])
        if "content" in changes:
            DocumentValidator.validate_optional_text(changes["content"], "content")
        if "icon" in changes:
            DocumentValidator.validate_optional_text(
                changes["icon"], "icon", DocumentValidator.ICON_MAX_LENGTH
            )
        if "cover_image" in changes:
            DocumentValidator.validate_optional_text(
                changes["cover_image"], "coverImage", DocumentValidator.COVER_IMAGE_MAX_LENGTH
            )
        if "is_published" in changes:
            DocumentValidator.validate_flag(changes["is_published"], "isPublished")

        return self._patch(document_id, "update document", **changes)

    def remove_icon(self, identity: Identity | None, document_id: str) -> Document:
        """Clear the icon of a document the caller owns."""
        self._get_owned(identity, document_id)
        return self._patch(document_id, "remove icon", icon=None)

    def remove_cover_image(self, identity: Identity | None, document_id: str) -> Document:
        """Clear the cover image of a document the caller owns."""
        self._get_owned(identity, document_id)
        return self._patch(document_id, "remove cover image", cover_image=None)

    def remove_document(self, identity: Identity | None, document_id: str) -> Document:
        """
        Permanently delete a single document the caller owns.

        Children are neither deleted nor re-parented; their parent_document
        keeps pointing at the removed ID.

        Returns:
            The removed document
        """
        self._get_owned(identity, document_id)

        try:
            document = self.document_repo.delete(document_id)
            self.session.commit()
            logger.info("Removed document %s", document_id)
            return document

        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to remove document: {str(e)}", e) from e

    def archive_document(self, identity: Identity | None, document_id: str) -> Document:
        """
        Move a document and its whole subtree to the trash.

        The target and every descendant owned by the caller get
        is_archived=True. The subtree is fully updated, in the same
        transaction, before this method returns.

        Returns:
            The archived target document

        Raises:
            UnauthenticatedError, NotFoundError, ForbiddenError: Ownership check
            CorruptTreeError: If parent links below the target form a cycle
            DatabaseError: If database operation fails
        """
        document = self._get_owned(identity, document_id)

        try:
            self.document_repo.patch(document_id, is_archived=True)
            count = self.tree.set_archived(document.user_id, document_id, True)
            self.session.commit()
            logger.info("Archived document %s and %d descendant(s)", document_id, count)
            return document

        except CorruptTreeError:
            self.session.rollback()
            logger.error("Archive of %s aborted: cyclic parent links", document_id)
            raise
        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to archive document: {str(e)}", e) from e

    def restore_document(self, identity: Identity | None, document_id: str) -> Document:
        """
        Take a document and its whole subtree out of the trash.

        If the document's parent is still archived, the document is moved to
        the root level so it is not left under a trashed ancestor. That rule
        applies to the restored document only, not to its descendants.

        Returns:
            The restored target document

        Raises:
            UnauthenticatedError, NotFoundError, ForbiddenError: Ownership check
            CorruptTreeError: If parent links below the target form a cycle
            DatabaseError: If database operation fails
        """
        document = self._get_owned(identity, document_id)

        try:
            changes: dict = {"is_archived": False}
            if document.parent_document:
                parent = self.document_repo.get(document.parent_document)
                if parent is not None and parent.is_archived:
                    changes["parent_document"] = None

            self.document_repo.patch(document_id, **changes)
            count = self.tree.set_archived(document.user_id, document_id, False)
            self.session.commit()
            logger.info(
                "Restored document %s and %d descendant(s)%s",
                document_id,
                count,
                " (detached from archived parent)" if "parent_document" in changes else "",
            )
            return document

        except CorruptTreeError:
            self.session.rollback()
            logger.error("Restore of %s aborted: cyclic parent links", document_id)
            raise
        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to restore document: {str(e)}", e) from e

    def get_sidebar(
        self, identity: Identity | None, parent_document: str | None = None
    ) -> list[Document]:
        """
        List the caller's non-archived documents directly under a parent.

        Args:
            identity: Caller identity (required)
            parent_document: Parent document ID, or None for root-level documents

        Returns:
            Documents, newest first
        """
        user_id = self._require_subject(identity)
        if parent_document is not None:
            DocumentValidator.validate_id(parent_document, "parentDocument")
        return self._list(
            "get sidebar",
            lambda: self.document_repo.by_user_parent(user_id, parent_document, is_archived=False),
        )

    def get_trashed_documents(self, identity: Identity | None) -> list[Document]:
        """List the caller's archived documents, newest first."""
        user_id = self._require_subject(identity)
        return self._list(
            "get trashed documents",
            lambda: self.document_repo.by_user(user_id, is_archived=True),
        )

    def search_documents(self, identity: Identity | None) -> list[Document]:
        """List all of the caller's non-archived documents, newest first."""
        user_id = self._require_subject(identity)
        return self._list(
            "search documents",
            lambda: self.document_repo.by_user(user_id, is_archived=False),
        )

    def _require_subject(self, identity: Identity | None) -> str:
        """Return the caller's subject or fail when unauthenticated."""
        if identity is None or not identity.subject:
            raise UnauthenticatedError()
        return identity.subject

    def _get(self, document_id: str) -> Document:
        try:
            document = self.document_repo.get(document_id)
        except Exception as e:
            raise DatabaseError(f"Failed to get document: {str(e)}", e) from e
        if document is None:
            raise NotFoundError("Document", document_id)
        return document

    def _get_owned(self, identity: Identity | None, document_id: str) -> Document:
        """Load a document and check the caller may change it."""
        user_id = self._require_subject(identity)
        DocumentValidator.validate_id(document_id)
        document = self._get(document_id)
        if document.user_id != user_id:
            logger.warning("User %s denied access to document %s", user_id, document_id)
            raise ForbiddenError("Document", document_id)
        return document

    def _patch(self, document_id: str, action: str, **changes) -> Document:
        try:
            document = self.document_repo.patch(document_id, **changes)
            self.session.commit()
            logger.info("Patched document %s (%s): %s", document_id, action, sorted(changes))
            return document

        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to {action}: {str(e)}", e) from e

    def _list(self, action: str, query) -> list[Document]:
        try:
            return query()
        except DocumentServiceError:
            raise
        except Exception as e:
            raise DatabaseError(f"Failed to {action}: {str(e)}", e) from e
