"""
Lightweight JSON-RPC surface for MCP-style tooling.

This keeps a minimal mapping of MCP tool names to the documentation tools.
Argument names follow the published tool schemas (``className``,
``methodName``); aliases translate them to the Python keyword arguments.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

from demosdk_docs_mcp.config import default_config
from demosdk_docs_mcp.docs.context import DocsContext
from demosdk_docs_mcp.tools import (
    get_class_docs,
    get_docs_stats,
    get_interface_docs,
    get_method_docs,
    list_classes,
    list_functions,
    list_interfaces,
    search_docs,
)
from demosdk_docs_mcp.tools.validators import SEARCHABLE_TYPES

logger = logging.getLogger(__name__)

# Keyword arguments the server injects; never accepted from callers.
RESERVED_PARAMS = frozenset({"context", "config"})

ToolCallable = Callable[..., Awaitable[Any]] | Callable[..., Any]

NO_PARAMS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {},
    "required": [],
    "additionalProperties": False,
}


@dataclass(slots=True)
class ToolDefinition:
    name: str
    description: str
    params: Dict[str, Any]
    input_schema: Dict[str, Any]
    callable: ToolCallable
    aliases: Dict[str, str] = field(default_factory=dict)

    def bind(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {self.aliases.get(key, key): value for key, value in params.items()}


TOOL_REGISTRY: Dict[str, ToolDefinition] = {
    "search_demosdk_docs": ToolDefinition(
        name="search_demosdk_docs",
        description="Search the DemoSDK documentation for classes, methods, interfaces, and more.",
        params={
            "query": "string (required)",
            "type": "string (optional: class, interface, function, enum)",
            "limit": f"integer (optional, default {default_config.default_search_limit}, max {default_config.max_search_limit})",
        },
        input_schema={
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": 'Search query (e.g., "Demos", "connect", "transaction")',
                    "minLength": 1,
                },
                "type": {
                    "type": "string",
                    "description": "Filter by type: class, interface, function, enum",
                    "enum": list(SEARCHABLE_TYPES),
                },
                "limit": {
                    "type": "integer",
                    "description": f"Maximum number of results (default: {default_config.default_search_limit}, max: {default_config.max_search_limit})",
                    "minimum": 1,
                    "maximum": default_config.max_search_limit,
                    "default": default_config.default_search_limit,
                },
            },
            "required": ["query"],
            "additionalProperties": False,
        },
        callable=search_docs,
        aliases={"type": "doc_type"},
    ),
    "get_class_docs": ToolDefinition(
        name="get_class_docs",
        description="Get detailed documentation for a specific class.",
        params={"className": "string (required)"},
        input_schema={
            "type": "object",
            "properties": {
                "className": {
                    "type": "string",
                    "description": 'Name of the class (e.g., "Demos", "DemosWebAuth")',
                },
            },
            "required": ["className"],
            "additionalProperties": False,
        },
        callable=get_class_docs,
        aliases={"className": "class_name"},
    ),
    "get_method_docs": ToolDefinition(
        name="get_method_docs",
        description="Get detailed documentation for a specific method of a class.",
        params={"className": "string (required)", "methodName": "string (required)"},
        input_schema={
            "type": "object",
            "properties": {
                "className": {"type": "string", "description": "Name of the class"},
                "methodName": {"type": "string", "description": "Name of the method"},
            },
            "required": ["className", "methodName"],
            "additionalProperties": False,
        },
        callable=get_method_docs,
        aliases={"className": "class_name", "methodName": "method_name"},
    ),
    "get_interface_docs": ToolDefinition(
        name="get_interface_docs",
        description="Get detailed documentation for a specific interface.",
        params={"interfaceName": "string (required)"},
        input_schema={
            "type": "object",
            "properties": {
                "interfaceName": {"type": "string", "description": "Name of the interface"},
            },
            "required": ["interfaceName"],
            "additionalProperties": False,
        },
        callable=get_interface_docs,
        aliases={"interfaceName": "interface_name"},
    ),
    "list_classes": ToolDefinition(
        name="list_classes",
        description="List all available classes in the DemoSDK.",
        params={},
        input_schema=NO_PARAMS_SCHEMA,
        callable=list_classes,
    ),
    "list_interfaces": ToolDefinition(
        name="list_interfaces",
        description="List all available interfaces in the DemoSDK.",
        params={},
        input_schema=NO_PARAMS_SCHEMA,
        callable=list_interfaces,
    ),
    "list_functions": ToolDefinition(
        name="list_functions",
        description="List all available top-level functions in the DemoSDK.",
        params={},
        input_schema=NO_PARAMS_SCHEMA,
        callable=list_functions,
    ),
    "get_docs_stats": ToolDefinition(
        name="get_docs_stats",
        description="Return documentation entry counts and the index source.",
        params={},
        input_schema=NO_PARAMS_SCHEMA,
        callable=get_docs_stats,
    ),
}


def list_tools() -> List[Dict[str, Any]]:
    """Return a simple list of available tools."""
    return [
        {
            "name": tool.name,
            "description": tool.description,
            "params": tool.params,
            "inputSchema": tool.input_schema,
        }
        for tool in TOOL_REGISTRY.values()
    ]


async def call_tool(
    tool_name: str,
    params: Optional[Dict[str, Any]] = None,
    *,
    context: Optional[DocsContext] = None,
) -> Any:
    """Dispatch to a tool by name."""
    params = params or {}
    tool = TOOL_REGISTRY.get(tool_name)
    if tool is None:
        return {"error": f"Unknown tool: {tool_name}"}

    kwargs = tool.bind(params)
    if RESERVED_PARAMS.intersection(kwargs):
        return {"error": "Invalid parameters."}
    if context is not None:
        kwargs["context"] = context
    # Tools already handle validation and error shaping.
    try:
        result = tool.callable(**kwargs)
        if isinstance(result, Awaitable):
            return await result  # type: ignore[return-value]
        return result
    except TypeError:
        return {"error": "Invalid parameters."}
    except Exception:
        logger.exception("Unexpected error calling tool %s", tool_name, extra={"tool": tool_name})
        return {"error": "Unexpected error while calling tool."}
