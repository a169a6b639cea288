"""
Tool surface module.

- handlers: payload validation, store delegation and response envelopes
- tools: MCP server factory registering the upload / search / health tools
"""

from .tools import create_mcp_server, get_mcp_server

__all__ = [
    "create_mcp_server",
    "get_mcp_server",
]
