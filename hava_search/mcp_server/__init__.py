"""MCP stdio server for listing search."""

from hava_search.mcp_server.server import MCPServer

__all__ = ["MCPServer"]
