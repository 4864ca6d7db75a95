"""HTTP API for Jotion using JSON-RPC 2.0 over Server-Sent Events (SSE).

The caller identity comes from the `Authorization: Bearer <token>` header of
each request. Requests without a valid token run unauthenticated.
"""

import asyncio
import json
import logging
from typing import Any, Dict

from fastapi import Body, FastAPI, Header
from fastapi.responses import StreamingResponse
from mcp import McpError
from mcp.types import TextContent

from jotion import __version__
from jotion.identity import Identity, IdentityProvider
from jotion.mcp.tool_handlers import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    call_tool_handler,
)
from jotion.mcp.tool_schemas import get_tool_schemas
from jotion.storage.database import get_db

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"

# Create FastAPI app
app = FastAPI(
    title="Jotion Document Service",
    description="Hierarchical note documents with ownership, publishing and trash",
    version=__version__,
)


def _tool_list() -> list[dict[str, Any]]:
    return [
        {
            "name": tool_def["name"],
            "description": tool_def["description"],
            "inputSchema": tool_def["inputSchema"],
        }
        for tool_def in get_tool_schemas().values()
    ]


def _error(jsonrpc: str, request_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {
        "jsonrpc": jsonrpc,
        "id": request_id,
        "error": {"code": code, "message": message},
    }


async def handle_jsonrpc_request(
    request: Dict[str, Any], identity: Identity | None = None
) -> Dict[str, Any]:
    """Handle JSON-RPC 2.0 request."""
    jsonrpc = request.get("jsonrpc", "2.0")
    request_id = request.get("id")
    method = request.get("method")
    params = request.get("params") or {}

    if method == "initialize":
        return {
            "jsonrpc": jsonrpc,
            "id": request_id,
            "result": {
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {"tools": {}},
                "serverInfo": {
                    "name": "jotion",
                    "version": __version__,
                },
            },
        }
    elif method == "tools/list":
        return {
            "jsonrpc": jsonrpc,
            "id": request_id,
            "result": {"tools": _tool_list()},
        }
    elif method == "tools/call":
        if not isinstance(params, dict):
            return _error(jsonrpc, request_id, INVALID_PARAMS, "params must be an object")
        tool_name = params.get("name")
        arguments = params.get("arguments") or {}
        if not isinstance(tool_name, str):
            return _error(jsonrpc, request_id, INVALID_PARAMS, "params.name must be a string")
        if not isinstance(arguments, dict):
            return _error(
                jsonrpc, request_id, INVALID_PARAMS, "params.arguments must be an object"
            )

        try:
            result = await call_tool_handler(tool_name, arguments, get_db(), identity)
        except McpError as e:
            return _error(jsonrpc, request_id, e.error.code, e.error.message)
        except Exception as e:
            logger.exception(f"Error handling tool {tool_name}")
            return _error(jsonrpc, request_id, INTERNAL_ERROR, f"Internal error: {str(e)}")

        if isinstance(result, list) and result and isinstance(result[0], TextContent):
            result_text = result[0].text
        else:
            result_text = json.dumps(result) if not isinstance(result, str) else result

        return {
            "jsonrpc": jsonrpc,
            "id": request_id,
            "result": {
                "content": [{"type": "text", "text": result_text}],
            },
        }
    elif method == "prompts/list":
        # No prompts are exposed
        return {"jsonrpc": jsonrpc, "id": request_id, "result": {"prompts": []}}
    elif method == "resources/list":
        # No resources are exposed
        return {"jsonrpc": jsonrpc, "id": request_id, "result": {"resources": []}}
    else:
        return _error(jsonrpc, request_id, METHOD_NOT_FOUND, f"Method not found: {method}")


def _resolve_identity(authorization: str | None) -> Identity | None:
    return IdentityProvider.from_settings().from_authorization_header(authorization)


@app.post("/mcp/sse")
async def mcp_sse_post(
    request: dict = Body(...),
    authorization: str | None = Header(default=None),
):
    """Server-Sent Events endpoint for JSON-RPC calls (POST)."""
    result = await handle_jsonrpc_request(request, _resolve_identity(authorization))
    sse_result = f"data: {json.dumps(result)}\n\n"
    return StreamingResponse(content=iter([sse_result]), media_type="text/event-stream")


@app.get("/mcp/sse")
async def mcp_sse_get():
    """Server-Sent Events endpoint for discovery (GET).

    Sends initialize, tools/list, prompts/list and resources/list events,
    then keeps the connection alive with periodic comments.
    """
    async def generate_sse_stream():
        discovery = [
            {"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {}},
            {"jsonrpc": "2.0", "id": 2, "method": "tools/list", "params": {}},
            {"jsonrpc": "2.0", "id": 3, "method": "prompts/list", "params": {}},
            {"jsonrpc": "2.0", "id": 4, "method": "resources/list", "params": {}},
        ]
        for request in discovery:
            response = await handle_jsonrpc_request(request)
            yield f"data: {json.dumps(response)}\n\n"
            await asyncio.sleep(0.1)
        logger.info(f"MCP SSE GET: Sent {len(get_tool_schemas())} tools")

        try:
            while True:
                await asyncio.sleep(30)  # keepalive
                yield ": keepalive\n\n"
        except asyncio.CancelledError:
            logger.info("MCP SSE GET: Connection closed by client")
            raise

    return StreamingResponse(
        generate_sse_stream(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",  # Disable nginx buffering
        },
    )


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "jotion"}


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    from jotion.config import get_settings
    from jotion.logging_config import configure_logging

    settings = get_settings()
    configure_logging(settings)
    get_db().create_tables()
    uvicorn.run(app, host=settings.http_host, port=settings.http_port, log_config=None)


if __name__ == "__main__":
    run()
