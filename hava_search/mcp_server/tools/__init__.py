"""MCP tool exports."""

from hava_search.mcp_server.tools.interpret_search_query import interpret_search_query
from hava_search.mcp_server.tools.search_listings import search_listings

__all__ = ["interpret_search_query", "search_listings"]
