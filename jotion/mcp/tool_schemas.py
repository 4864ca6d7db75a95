"""RPC tool schema definitions and argument validation."""

from typing import Any

import jsonschema

from jotion.exceptions import ValidationError

_DOCUMENT_ID = {"type": "string", "minLength": 1, "maxLength": 255}


def _id_only(description: str, name: str) -> dict[str, Any]:
    return {
        "name": name,
        "description": description,
        "inputSchema": {
            "type": "object",
            "properties": {
                "id": {**_DOCUMENT_ID, "description": "Document ID"},
            },
            "required": ["id"],
            "additionalProperties": False,
        },
    }


def get_tool_schemas() -> dict[str, dict[str, Any]]:
    """Get all RPC tool schemas."""
    return {
        "create_document": {
            "name": "create_document",
            "description": "Create a new document owned by the caller, optionally nested under a parent",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "title": {"type": "string", "description": "Document title"},
                    "parentDocument": {
                        **_DOCUMENT_ID,
                        "description": "Optional parent document ID",
                    },
                },
                "required": ["title"],
                "additionalProperties": False,
            },
        },
        "get_sidebar": {
            "name": "get_sidebar",
            "description": "List the caller's non-archived documents under a parent (root level when omitted)",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "parentDocument": {
                        **_DOCUMENT_ID,
                        "description": "Parent document ID",
                    },
                },
                "additionalProperties": False,
            },
        },
        "archive_document": _id_only(
            "Archive a document and all of its descendants", "archive_document"
        ),
        "get_trashed_documents": {
            "name": "get_trashed_documents",
            "description": "List the caller's archived documents",
            "inputSchema": {
                "type": "object",
                "properties": {},
                "additionalProperties": False,
            },
        },
        "restore_document": _id_only(
            "Restore an archived document and all of its descendants; "
            "detaches it to root level if its parent is still archived",
            "restore_document",
        ),
        "remove_document": _id_only(
            "Permanently delete a single document (children are kept)", "remove_document"
        ),
        "search_documents": {
            "name": "search_documents",
            "description": "List all of the caller's non-archived documents",
            "inputSchema": {
                "type": "object",
                "properties": {},
                "additionalProperties": False,
            },
        },
        "get_document_by_id": _id_only(
            "Read a document; published documents are readable without authentication",
            "get_document_by_id",
        ),
        "update_document": {
            "name": "update_document",
            "description": "Update title, content, cover image, icon or publish flag of a document",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "id": {**_DOCUMENT_ID, "description": "Document ID"},
                    "title": {"type": "string", "description": "New title"},
                    "content": {"type": "string", "description": "New content"},
                    "coverImage": {"type": "string", "description": "New cover image URL"},
                    "icon": {"type": "string", "description": "New icon"},
                    "isPublished": {"type": "boolean", "description": "Publish flag"},
                },
                "required": ["id"],
                "additionalProperties": False,
            },
        },
        "remove_icon": _id_only("Clear the icon of a document", "remove_icon"),
        "remove_cover_image": _id_only(
            "Clear the cover image of a document", "remove_cover_image"
        ),
    }


def validate_arguments(tool_name: str, arguments: dict[str, Any]) -> None:
    """
    Check tool arguments against the tool's declared input schema.

    Raises:
        ValidationError: If an argument is missing, unknown, or of the wrong type
    """
    schema = get_tool_schemas()[tool_name]["inputSchema"]
    try:
        jsonschema.validate(arguments, schema)
    except jsonschema.ValidationError as e:
        field = ".".join(str(p) for p in e.absolute_path) if e.absolute_path else None
        raise ValidationError(e.message, field) from e
