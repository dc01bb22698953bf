"""
Request-scoped entrypoint for serverless hosting.

Every POST builds a fresh MCP server and session manager, serves that one
request and tears both down. GET answers with the health payload; any other
method is rejected with 405.

Usage:
  uvicorn mailchimp_mcp.serverless:app
"""

import logging

from fastapi import FastAPI
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager

from .config import SERVER_NAME, SERVER_VERSION
from .protocol import build_mcp_server

logger = logging.getLogger(__name__)


class RequestScopedMCPApp:
    """ASGI endpoint running one MCP server per request."""

    async def __call__(self, scope, receive, send) -> None:
        session_manager = StreamableHTTPSessionManager(
            app=build_mcp_server(),
            stateless=True,
            json_response=True,
        )
        async with session_manager.run():
            await session_manager.handle_request(scope, receive, send)


app = FastAPI(title="Mailchimp MCP Server (serverless)", version=SERVER_VERSION)


@app.get("/")
@app.get("/api/mcp")
async def health():
    return {"status": "ok", "server": SERVER_NAME, "version": SERVER_VERSION}


app.add_route("/", RequestScopedMCPApp(), methods=["POST"])
app.add_route("/api/mcp", RequestScopedMCPApp(), methods=["POST"])
