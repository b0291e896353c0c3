"""
MCP Server module for SmartForm.

Provides Model Context Protocol server implementation
with stdio and SSE transport support.
"""

from smartform.mcp_server.server import create_mcp_server, create_sse_app, run_mcp_server
from smartform.mcp_server.session import ToolSession, connection_credentials
from smartform.mcp_server.tools import get_mcp_tools

__all__ = [
    "create_mcp_server",
    "create_sse_app",
    "run_mcp_server",
    "ToolSession",
    "connection_credentials",
    "get_mcp_tools",
]
