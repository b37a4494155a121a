"""MCP tool handlers."""

from docplane.mcp.tools import resources

__all__ = ["resources"]
