"""RPC module with tool schemas, handlers, and serializers."""

from jotion.mcp.tool_handlers import call_tool_handler, TOOL_HANDLERS
from jotion.mcp.tool_schemas import get_tool_schemas, validate_arguments
from jotion.mcp.serializers import serialize_document, serialize_documents

__all__ = [
    "call_tool_handler",
    "TOOL_HANDLERS",
    "get_tool_schemas",
    "validate_arguments",
    "serialize_document",
    "serialize_documents",
]
