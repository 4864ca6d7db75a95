"""Model serialization for RPC responses."""

from typing import Any, Iterable

from jotion.models.document import Document

# Model attribute -> wire name
DOCUMENT_FIELDS = {
    "id": "id",
    "title": "title",
    "content": "content",
    "parent_document": "parentDocument",
    "user_id": "userId",
    "is_archived": "isArchived",
    "is_published": "isPublished",
    "icon": "icon",
    "cover_image": "coverImage",
    "creation_time": "creationTime",
}


def serialize_document(document: Document | None) -> dict[str, Any] | None:
    """
    Serialize a Document to a dictionary with wire field names.

    Args:
        document: Document instance (None serializes to None)

    Returns:
        Dictionary representation of the document
    """
    if document is None:
        return None
    result = {}
    for attr, output_key in DOCUMENT_FIELDS.items():
        value = getattr(document, attr)
        if hasattr(value, "isoformat"):  # datetime
            value = value.isoformat()
        result[output_key] = value
    return result


def serialize_documents(documents: Iterable[Document]) -> list[dict[str, Any]]:
    """Serialize a list of documents, preserving order."""
    return [serialize_document(doc) for doc in documents]
