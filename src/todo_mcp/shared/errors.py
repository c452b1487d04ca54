from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Closed set of error kinds. Each value is the fixed ``(code, message)`` pair."""

    # JSON-RPC transport errors
    PARSE_ERROR = (-32700, "Parse error")
    INVALID_REQUEST = (-32600, "Invalid Request")
    METHOD_NOT_FOUND = (-32601, "Method not found")
    INVALID_PARAMS = (-32602, "Invalid params")
    INTERNAL_ERROR = (-32603, "Internal error")

    # MCP domain errors
    UNSUPPORTED_PROTOCOL = (-32000, "Protocol version not supported by server")
    CAPABILITY_NOT_SUPPORTED = (-32001, "Requested capability not supported")
    RESOURCE_NOT_FOUND = (-32002, "Requested resource does not exist")
    TOOL_NOT_FOUND = (-32003, "Requested tool does not exist")
    UNAUTHORIZED = (-32004, "Access denied for requested operation")
    RATE_LIMITED = (-32005, "Request rate limit exceeded")
    VALIDATION_ERROR = (-32006, "Request parameters failed validation")

    @property
    def code(self) -> int:
        return self.value[0]

    @property
    def message(self) -> str:
        return self.value[1]


class McpError(Exception):
    def __init__(self, kind: ErrorKind, data: Any = None) -> None:
        super().__init__(kind.message if data is None else f"{kind.message}: {data}")
        self.kind = kind
        self.data = data

    @property
    def code(self) -> int:
        return self.kind.code

    @property
    def message(self) -> str:
        return self.kind.message

    def to_dict(self) -> dict[str, Any]:
        error: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return error


def validation_error(data: str) -> McpError:
    return McpError(ErrorKind.VALIDATION_ERROR, data)


def to_mcp_error(exc: BaseException) -> McpError:
    if isinstance(exc, McpError):
        return exc
    return McpError(ErrorKind.INTERNAL_ERROR, str(exc))
