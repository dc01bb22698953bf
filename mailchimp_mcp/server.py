#!/usr/bin/env python3
"""
MCP Server Entrypoint

Long-running HTTP server that exposes all registered Mailchimp tools:
  - MCP streamable HTTP transport at /mcp (stateless, JSON responses)
  - REST tool endpoints under /tools
  - /health
Tools are automatically discovered via registry.py
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from pydantic import BaseModel

from .config import SERVER_NAME, SERVER_VERSION
from .protocol import build_mcp_server
from .registry import execute_tool, get_all_tools, get_tools_schema, list_tool_names

logger = logging.getLogger(__name__)


class StreamableHTTPApp:
    """ASGI endpoint handing requests to the app's MCP session manager."""

    async def __call__(self, scope, receive, send) -> None:
        session_manager = scope["app"].state.session_manager
        await session_manager.handle_request(scope, receive, send)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: discover tools
    tools = get_all_tools()
    logger.info(f"MCP Server starting with {len(tools)} tools")
    for name in tools:
        logger.info(f"  - {name}")

    # A session manager runs once, so each app start gets a new one
    app.state.session_manager = StreamableHTTPSessionManager(
        app=build_mcp_server(),
        stateless=True,
        json_response=True,
    )
    async with app.state.session_manager.run():
        yield

    logger.info("MCP Server shutting down")


app = FastAPI(
    title="Mailchimp MCP Server",
    description="Model Context Protocol server for Mailchimp campaigns",
    version=SERVER_VERSION,
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Mcp-Session-Id"],
)
app.add_route("/mcp", StreamableHTTPApp(), methods=["GET", "POST", "DELETE"])


class ToolRequest(BaseModel):
    """Request body for tool execution."""

    arguments: Dict[str, Any] = {}


class ToolResponse(BaseModel):
    """Response from tool execution."""

    success: bool
    tool: str
    result: Any = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    status_code: Optional[int] = None


# ============== API Endpoints ==============


@app.get("/")
async def root():
    return {
        "service": SERVER_NAME,
        "version": SERVER_VERSION,
        "tools_count": len(list_tool_names()),
        "endpoints": {
            "mcp": "/mcp",
            "list_tools": "/tools",
            "tool_schema": "/tools/schema",
            "execute": "/tools/{tool_name}/execute",
            "health": "/health",
        },
    }


@app.get("/health")
async def health():
    return {"status": "ok", "server": SERVER_NAME, "version": SERVER_VERSION}


@app.get("/tools")
async def list_tools():
    tools = get_all_tools()
    return {
        "total": len(tools),
        "tools": [
            {
                "name": name,
                "title": tool.title,
                "description": tool.description,
                "annotations": tool.annotations.to_dict(),
                "parameters": [
                    {
                        "name": p.name,
                        "type": p.type,
                        "description": p.description,
                        "required": p.required,
                    }
                    for p in tool.parameters
                ],
            }
            for name, tool in sorted(tools.items())
        ],
    }


@app.get("/tools/schema")
async def get_schema():
    return {"tools": get_tools_schema()}


@app.get("/tools/{tool_name}")
async def get_tool_info(tool_name: str):
    tools = get_all_tools()
    if tool_name not in tools:
        raise HTTPException(status_code=404, detail=f"Tool not found: {tool_name}")

    tool = tools[tool_name]
    return {
        "name": tool.name,
        "title": tool.title,
        "description": tool.description,
        "annotations": tool.annotations.to_dict(),
        "inputSchema": tool.input_schema(),
    }


@app.post("/tools/{tool_name}/execute", response_model=ToolResponse)
async def execute_tool_endpoint(tool_name: str, request: ToolRequest):
    result = await execute_tool(tool_name, **request.arguments)
    return ToolResponse(**result)
