"""RPC tool handlers for executing document operations."""

import json
from typing import Any

from mcp import McpError
from mcp.types import ErrorData, TextContent

from jotion.exceptions import (
    CorruptTreeError,
    DatabaseError,
    ForbiddenError,
    NotFoundError,
    UnauthenticatedError,
    UnauthorizedError,
    ValidationError,
)
from jotion.identity import Identity
from jotion.mcp.serializers import serialize_document, serialize_documents
from jotion.mcp.tool_schemas import validate_arguments
from jotion.services.document_patch import DocumentPatch
from jotion.services.document_service import DocumentService

# JSON-RPC error codes
INVALID_PARAMS = -32602
METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603
NOT_FOUND = -32001
UNAUTHENTICATED = -32003
FORBIDDEN = -32004
CORRUPT_TREE = -32005


def _text(result: Any) -> list[TextContent]:
    return [TextContent(type="text", text=json.dumps(result, indent=2))]


async def handle_create_document(
    arguments: dict[str, Any], db: Any, identity: Identity | None
) -> list[TextContent]:
    """Handle create_document tool."""
    with db.session() as session:
        doc = DocumentService(session).create_document(
            identity,
            title=arguments["title"],
            parent_document=arguments.get("parentDocument"),
        )
        return _text(serialize_document(doc))


async def handle_get_sidebar(
    arguments: dict[str, Any], db: Any, identity: Identity | None
) -> list[TextContent]:
    """Handle get_sidebar tool."""
    with db.session() as session:
        docs = DocumentService(session).get_sidebar(
            identity, parent_document=arguments.get("parentDocument")
        )
        return _text(serialize_documents(docs))


async def handle_archive_document(
    arguments: dict[str, Any], db: Any, identity: Identity | None
) -> list[TextContent]:
    """Handle archive_document tool."""
    with db.session() as session:
        doc = DocumentService(session).archive_document(identity, arguments["id"])
        return _text(serialize_document(doc))


async def handle_get_trashed_documents(
    arguments: dict[str, Any], db: Any, identity: Identity | None
) -> list[TextContent]:
    """Handle get_trashed_documents tool."""
    with db.session() as session:
        docs = DocumentService(session).get_trashed_documents(identity)
        return _text(serialize_documents(docs))


async def handle_restore_document(
    arguments: dict[str, Any], db: Any, identity: Identity | None
) -> list[TextContent]:
    """Handle restore_document tool."""
    with db.session() as session:
        doc = DocumentService(session).restore_document(identity, arguments["id"])
        return _text(serialize_document(doc))


async def handle_remove_document(
    arguments: dict[str, Any], db: Any, identity: Identity | None
) -> list[TextContent]:
    """Handle remove_document tool."""
    with db.session() as session:
        doc = DocumentService(session).remove_document(identity, arguments["id"])
        return _text(serialize_document(doc))


async def handle_search_documents(
    arguments: dict[str, Any], db: Any, identity: Identity | None
) -> list[TextContent]:
    """Handle search_documents tool."""
    with db.session() as session:
        docs = DocumentService(session).search_documents(identity)
        return _text(serialize_documents(docs))


async def handle_get_document_by_id(
    arguments: dict[str, Any], db: Any, identity: Identity | None
) -> list[TextContent]:
    """Handle get_document_by_id tool."""
    with db.session() as session:
        doc = DocumentService(session).get_document_by_id(identity, arguments["id"])
        return _text(serialize_document(doc))


async def handle_update_document(
    arguments: dict[str, Any], db: Any, identity: Identity | None
) -> list[TextContent]:
    """Handle update_document tool."""
    with db.session() as session:
        doc = DocumentService(session).update_document(
            identity,
            arguments["id"],
            DocumentPatch.from_arguments(arguments),
        )
        return _text(serialize_document(doc))


async def handle_remove_icon(
    arguments: dict[str, Any], db: Any, identity: Identity | None
) -> list[TextContent]:
    """Handle remove_icon tool."""
    with db.session() as session:
        doc = DocumentService(session).remove_icon(identity, arguments["id"])
        return _text(serialize_document(doc))


async def handle_remove_cover_image(
    arguments: dict[str, Any], db: Any, identity: Identity | None
) -> list[TextContent]:
    """Handle remove_cover_image tool."""
    with db.session() as session:
        doc = DocumentService(session).remove_cover_image(identity, arguments["id"])
        return _text(serialize_document(doc))


TOOL_HANDLERS = {
    "create_document": handle_create_document,
    "get_sidebar": handle_get_sidebar,
    "archive_document": handle_archive_document,
    "get_trashed_documents": handle_get_trashed_documents,
    "restore_document": handle_restore_document,
    "remove_document": handle_remove_document,
    "search_documents": handle_search_documents,
    "get_document_by_id": handle_get_document_by_id,
    "update_document": handle_update_document,
    "remove_icon": handle_remove_icon,
    "remove_cover_image": handle_remove_cover_image,
}


async def call_tool_handler(
    tool_name: str,
    arguments: dict[str, Any],
    db: Any,
    identity: Identity | None = None,
) -> list[TextContent]:
    """
    Validate arguments and call the appropriate tool handler.

    Args:
        tool_name: Name of the tool to call
        arguments: Tool arguments
        db: Database instance
        identity: Caller identity, None when unauthenticated

    Returns:
        List of TextContent with tool execution result

    Raises:
        McpError: If tool name is unknown or handler raises an error
    """
    if tool_name not in TOOL_HANDLERS:
        raise McpError(
            ErrorData(
                code=METHOD_NOT_FOUND,
                message=f"Unknown tool: {tool_name}",
            )
        )

    handler = TOOL_HANDLERS[tool_name]

    try:
        validate_arguments(tool_name, arguments)
        return await handler(arguments, db, identity)
    except McpError:
        raise
    except ValidationError as e:
        raise McpError(
            ErrorData(
                code=INVALID_PARAMS,
                message=f"Validation error: {str(e)}",
            )
        )
    except NotFoundError as e:
        raise McpError(ErrorData(code=NOT_FOUND, message=str(e)))
    except UnauthenticatedError as e:
        raise McpError(ErrorData(code=UNAUTHENTICATED, message=str(e)))
    except (ForbiddenError, UnauthorizedError) as e:
        raise McpError(ErrorData(code=FORBIDDEN, message=str(e)))
    except CorruptTreeError as e:
        raise McpError(ErrorData(code=CORRUPT_TREE, message=str(e)))
    except DatabaseError as e:
        raise McpError(
            ErrorData(
                code=INTERNAL_ERROR,
                message=f"Database error: {str(e)}",
            )
        )
    except Exception as e:
        raise McpError(
            ErrorData(
                code=INTERNAL_ERROR,
                message=f"Internal error: {str(e)}",
            )
        )
