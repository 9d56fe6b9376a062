"""JSON-RPC error codes and error envelopes for the listing search server."""

from __future__ import annotations

from typing import Any

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


def error_response(
    request_id: Any, code: int, message: str, data: dict[str, Any] | None = None
) -> dict[str, Any]:
    error: dict[str, Any] = {"code": code, "message": message}
    if data:
        error["data"] = data
    return {"jsonrpc": "2.0", "id": request_id, "error": error}


class MCPError(Exception):
    """A request failure reported to the client instead of crashing the loop."""

    def __init__(self, code: int, message: str, data: dict[str, Any] | None = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data or {}

    @classmethod
    def invalid_params(cls, message: str, **data: Any) -> "MCPError":
        return cls(INVALID_PARAMS, message, data or None)

    def to_dict(self) -> dict[str, Any]:
        return error_response(None, self.code, self.message, self.data)["error"]

    def to_response(self, request_id: Any) -> dict[str, Any]:
        return error_response(request_id, self.code, self.message, self.data)
