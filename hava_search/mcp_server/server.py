"""MCP stdio server exposing listing search tools (JSON-RPC 2.0)."""

from __future__ import annotations

import json
import sys
from typing import Any, Callable, TextIO

from hava_search import __version__
from hava_search.core.query_engine import ListingQueryError, QueryInterpreter
from hava_search.core.trace import TraceContext
from hava_search.mcp_server.errors import (
    INTERNAL_ERROR,
    INVALID_REQUEST,
    MCPError,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    error_response,
)
from hava_search.mcp_server.tools.interpret_search_query import interpret_search_query
from hava_search.mcp_server.tools.search_listings import search_listings
from hava_search.observability.logger import get_logger
from hava_search.storage import SQLiteListingStore

_FILTER_PROPERTIES = {
    "purchase_category": {"type": "string"},
    "min_price": {"type": ["integer", "string"]},
    "max_price": {"type": ["integer", "string"]},
    "location": {"type": "string"},
    "state": {"type": "string"},
    "property_type": {"type": "string"},
    "bedrooms": {"type": ["integer", "string"]},
    "bathrooms": {"type": ["integer", "string"]},
    "living_rooms": {"type": ["integer", "string"]},
    "kitchens": {"type": ["integer", "string"]},
    "land_size": {"type": ["number", "string"]},
    "status": {"type": "string"},
    "sort_by": {
        "type": "string",
        "enum": ["price_asc", "price_desc", "date_listed_asc", "date_listed_desc"],
    },
}


class MCPServer:
    """MCP server over stdio transport (JSON-RPC 2.0)."""

    def __init__(self, settings: Any, store: SQLiteListingStore | None = None):
        self.settings = settings
        self.logger = get_logger("mcp-server", settings.observability.log_level)
        self.interpreter = QueryInterpreter()
        self.store = store or SQLiteListingStore.from_settings(settings)

        self._methods: dict[str, Callable[[dict[str, Any]], Any]] = {
            "initialize": self._initialize,
            "tools/list": self._tools_list,
            "tools/call": self._tools_call,
        }

    def _initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        return {
            "protocolVersion": "2025-06-18",
            "serverInfo": {"name": "hava-search-mcp-server", "version": __version__},
            "capabilities": {"tools": {"listChanged": False}},
        }

    def _tools_list(self, params: dict[str, Any]) -> dict[str, Any]:
        return {
            "tools": [
                {
                    "name": "interpret_search_query",
                    "description": "Turn a free-text property search into structured filters",
                    "inputSchema": {
                        "type": "object",
                        "properties": {"query": {"type": "string"}},
                        "required": ["query"],
                    },
                },
                {
                    "name": "search_listings",
                    "description": "Search listings by free text and explicit filters",
                    "inputSchema": {
                        "type": "object",
                        "properties": {
                            "query": {"type": "string"},
                            "filters": {"type": "object", "properties": _FILTER_PROPERTIES},
                            "page": {"type": "integer"},
                            "limit": {"type": "integer"},
                        },
                    },
                },
            ]
        }

    def _new_trace(self, operation: str, query: str | None) -> TraceContext | None:
        if not self.settings.observability.trace_enabled:
            return None
        return TraceContext(
            user_query=query,
            operation=operation,
            log_file=self.settings.observability.trace_file,
        )

    def _tools_call(self, params: dict[str, Any]) -> dict[str, Any]:
        name = params.get("name")
        arguments = params.get("arguments") or {}
        if not isinstance(arguments, dict):
            raise MCPError.invalid_params("tools/call.arguments must be an object")

        if name == "interpret_search_query":
            query = arguments.get("query")
            if not isinstance(query, str):
                raise MCPError.invalid_params("query must be a string", field="query")
            trace = self._new_trace("interpret", query)
            result = interpret_search_query(self.interpreter, query, trace=trace)
            if trace is not None:
                trace.finish()
            return result

        if name == "search_listings":
            query = arguments.get("query")
            if query is not None and not isinstance(query, str):
                raise MCPError.invalid_params("query must be a string", field="query")
            filters = arguments.get("filters")
            if filters is not None and not isinstance(filters, dict):
                raise MCPError.invalid_params("filters must be an object", field="filters")
            for key in ("page", "limit"):
                value = arguments.get(key)
                if value is not None and (
                    isinstance(value, bool) or not isinstance(value, int) or value <= 0
                ):
                    raise MCPError.invalid_params(f"{key} must be a positive integer", field=key)

            trace = self._new_trace("search", query)
            try:
                result = search_listings(
                    self.store,
                    query=query,
                    filters=filters,
                    page=arguments.get("page"),
                    limit=arguments.get("limit"),
                    trace=trace,
                )
            except ListingQueryError as e:
                raise MCPError.invalid_params(str(e)) from e
            if trace is not None:
                trace.finish()
            return result

        raise MCPError(METHOD_NOT_FOUND, f"Unknown tool: {name}")

    def handle_request(self, request_obj: dict[str, Any]) -> dict[str, Any]:
        if not isinstance(request_obj, dict):
            raise MCPError(INVALID_REQUEST, "Invalid JSON-RPC request object")

        method = request_obj.get("method")
        if not isinstance(method, str):
            raise MCPError(INVALID_REQUEST, "Missing or invalid method")

        params = request_obj.get("params") or {}
        if not isinstance(params, dict):
            raise MCPError.invalid_params("params must be an object")

        handler = self._methods.get(method)
        if handler is None:
            raise MCPError(METHOD_NOT_FOUND, f"Method not found: {method}")

        return handler(params)

    def handle_line(self, raw: str) -> dict[str, Any]:
        """Process one JSON-RPC line and build the response object."""
        request_id: Any = None
        try:
            request_obj = json.loads(raw)
        except ValueError:
            # also covers integer literals past the int conversion limit
            return error_response(None, PARSE_ERROR, "Parse error")
        try:
            request_id = request_obj.get("id") if isinstance(request_obj, dict) else None
            result = self.handle_request(request_obj)
            return {"jsonrpc": "2.0", "id": request_id, "result": result}
        except MCPError as e:
            return e.to_response(request_id)
        except Exception as e:  # noqa: BLE001
            self.logger.exception("Unhandled error while serving request")
            return error_response(request_id, INTERNAL_ERROR, str(e))

    def serve_stdio(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        stdin = stdin or sys.stdin
        stdout = stdout or sys.stdout
        for raw in stdin:
            raw = raw.strip()
            if not raw:
                continue
            response = self.handle_line(raw)
            stdout.write(json.dumps(response, ensure_ascii=False, default=str) + "\n")
            stdout.flush()
