"""Service layer for business logic and validation."""

from jotion.services.document_patch import UNSET, DocumentPatch
from jotion.services.document_service import DocumentService
from jotion.services.tree_operations import DocumentTreeWalker
from jotion.services.validation import DocumentValidator

__all__ = [
    "DocumentService",
    "DocumentPatch",
    "DocumentTreeWalker",
    "DocumentValidator",
    "UNSET",
]
