"""
Mailchimp MCP gateway

Exposes Mailchimp Marketing API operations as MCP tools.
All tools are auto-discovered via registry.py
"""

from .base import (
    ConfigurationError,
    MCPTool,
    MCPToolError,
    RemoteAPIError,
    ToolNotFoundError,
    TransportError,
    ValidationError,
)
from .client import MailchimpClient
from .registry import get_all_tools, get_tool, invoke_tool

__all__ = [
    "ConfigurationError",
    "MCPTool",
    "MCPToolError",
    "MailchimpClient",
    "RemoteAPIError",
    "ToolNotFoundError",
    "TransportError",
    "ValidationError",
    "get_all_tools",
    "get_tool",
    "invoke_tool",
]
