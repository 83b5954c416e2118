"""
DemoSDK documentation MCP server package.

This package indexes the DemoSDK API reference and exposes LLM-friendly
search and lookup tools over an MCP-style JSON-RPC gateway. See DESIGN.md for
full details.
"""

__all__ = ["config"]
