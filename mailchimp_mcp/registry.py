"""
MCP Tool Registry

Single Source of Truth (SSOT) for tool discovery and collection.
Automatically discovers and registers all tools from mailchimp_mcp/tools/.
Every hosting adapter reads the catalog from here.
"""

import importlib
import inspect
import logging
import pkgutil
from pathlib import Path
from typing import Any, Dict, List, Optional

from .base import MCPTool, ToolDefinition, ToolNotFoundError

logger = logging.getLogger(__name__)

# Global registry
_tool_registry: Dict[str, ToolDefinition] = {}
_initialized: bool = False


def _discover_tools() -> None:
    """
    Discover and register all tools from the tools/ directory.
    This is the ONLY place where tools are collected.
    """
    global _initialized

    if _initialized:
        return

    tools_package = f"{__package__}.tools"
    tools_path = Path(__file__).parent / "tools"

    # Import all modules in tools/
    for _, module_name, _ in pkgutil.iter_modules([str(tools_path)]):
        if module_name.startswith("_"):
            continue

        full_module_name = f"{tools_package}.{module_name}"
        module = importlib.import_module(full_module_name)
        logger.debug(f"Loaded tool module: {full_module_name}")

        # Find all concrete MCPTool subclasses defined in the module
        for _, obj in inspect.getmembers(module, inspect.isclass):
            if (
                issubclass(obj, MCPTool)
                and obj.__module__ == module.__name__
                and not inspect.isabstract(obj)
            ):
                definition = obj().to_definition()
                if definition.name in _tool_registry:
                    raise RuntimeError(f"Duplicate tool name: {definition.name}")
                _tool_registry[definition.name] = definition
                logger.debug(f"Registered tool: {definition.name} ({module_name})")

    _initialized = True
    logger.info(f"Tool discovery complete. Total tools: {len(_tool_registry)}")


def get_all_tools() -> Dict[str, ToolDefinition]:
    """
    Get all registered tools.
    This is the public API for accessing tools.
    """
    _discover_tools()
    return _tool_registry.copy()


def get_tool(name: str) -> Optional[ToolDefinition]:
    """
    Get a specific tool by name.
    Returns None if tool not found.
    """
    _discover_tools()
    return _tool_registry.get(name)


def list_tool_names() -> List[str]:
    """Get list of all registered tool names."""
    _discover_tools()
    return sorted(_tool_registry.keys())


def get_tools_schema() -> List[Dict[str, Any]]:
    """Catalog description: name, title, input schema and side-effect hints."""
    _discover_tools()
    return [
        {
            "name": name,
            "title": definition.title,
            "description": definition.description,
            "inputSchema": definition.input_schema(),
            "annotations": definition.annotations.to_dict(),
        }
        for name, definition in sorted(_tool_registry.items())
    ]


async def invoke_tool(name: str, **kwargs) -> Any:
    """Run a tool by name; errors propagate to the caller."""
    definition = get_tool(name)
    if definition is None:
        raise ToolNotFoundError(f"Tool not found: {name}", tool_name=name)
    logger.info(f"Invoking {name}")
    return await definition.tool.invoke(**kwargs)


async def execute_tool(name: str, **kwargs) -> Dict:
    """
    Execute a tool by name with given arguments.
    Returns standardized response format.
    """
    definition = get_tool(name)

    if definition is None:
        return {
            "success": False,
            "tool": name,
            "error": f"Tool not found: {name}",
            "error_type": "not_found"
        }

    return await definition.tool.run(**kwargs)


def reset_registry() -> None:
    """Reset the registry (mainly for testing)."""
    global _tool_registry, _initialized
    _tool_registry = {}
    _initialized = False
