"""MCP (Model Context Protocol) server for Jotion.

This server exposes the document operations to AI agents via the Model Context Protocol.
It uses the standardized mcp library for JSON-RPC 2.0 communication over stdio.
The caller identity is taken from the AUTH_TOKEN setting.
"""

import asyncio
import logging

from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp import McpError
from mcp.types import ErrorData, TextContent, Tool

from jotion import __version__
from jotion.config import get_settings
from jotion.identity import IdentityProvider
from jotion.logging_config import configure_logging
from jotion.storage.database import get_db
from jotion.mcp.tool_handlers import INTERNAL_ERROR, call_tool_handler
from jotion.mcp.tool_schemas import get_tool_schemas

logger = logging.getLogger(__name__)

# Initialize MCP server
app = Server("jotion")


@app.list_tools()
async def list_tools() -> list[Tool]:
    """List all available MCP tools."""
    return [Tool(**schema) for schema in get_tool_schemas().values()]


@app.call_tool()
async def call_tool(name: str, arguments: dict | None) -> list[TextContent]:
    """Handle tool calls."""
    if arguments is None:
        arguments = {}

    db = get_db()
    identity = IdentityProvider.from_settings().get_user_identity(get_settings().auth_token)

    try:
        # Handlers manage their own database sessions
        return await call_tool_handler(name, arguments, db, identity)
    except McpError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error handling tool {name}")
        raise McpError(
            ErrorData(
                code=INTERNAL_ERROR,
                message=f"Internal error: {str(e)}",
            )
        )


async def main():
    """Main entry point for MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await app.run(
            read_stream,
            write_stream,
            InitializationOptions(
                server_name="jotion",
                server_version=__version__,
                capabilities=app.get_capabilities(
                    notification_options=NotificationOptions(),
                    experimental_capabilities={},
                ),
            ),
        )


def run() -> None:
    """Console entry point."""
    configure_logging()
    get_db().create_tables()
    asyncio.run(main())


if __name__ == "__main__":
    run()
