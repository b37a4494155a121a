"""MCP server exposing the resource cache to agents."""

from docplane.mcp.context import AppContext
from docplane.mcp.errors import MCPError, MCPErrorCode
from docplane.mcp.server import create_mcp_server, run_server

__all__ = ["AppContext", "MCPError", "MCPErrorCode", "create_mcp_server", "run_server"]
