"""
MCP protocol binding.

Exposes the registry's catalog through the MCP SDK's low-level `Server`.
Session handling, framing and schema checks belong to the SDK; errors raised
by a tool come back to the agent as an `isError` result with the message
unchanged.
"""

import logging
from typing import Any, Dict, List

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from .base import render_result
from .config import SERVER_NAME, SERVER_VERSION
from .registry import get_all_tools, invoke_tool

logger = logging.getLogger(__name__)


def _to_mcp_tool(definition) -> types.Tool:
    hints = definition.annotations
    return types.Tool(
        name=definition.name,
        title=definition.title,
        description=definition.description,
        inputSchema=definition.input_schema(),
        annotations=types.ToolAnnotations(
            title=definition.title,
            readOnlyHint=hints.read_only,
            destructiveHint=hints.destructive,
            idempotentHint=hints.idempotent,
            openWorldHint=hints.open_world,
        ),
    )


def build_mcp_server() -> Server:
    """Create a fresh MCP server bound to the shared catalog."""
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return [_to_mcp_tool(d) for d in get_all_tools().values()]

    @server.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
        result = await invoke_tool(name, **(arguments or {}))
        return [types.TextContent(type="text", text=render_result(result))]

    return server


async def run_stdio() -> None:
    """Run the MCP server over stdin/stdout."""
    server = build_mcp_server()
    logger.info(f"{SERVER_NAME} running on stdio")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options()
        )
