import json
from typing import Any, Dict, Optional

from .shared.errors import ErrorKind, McpError

PROTOCOL_VERSION = "2025-06-18"
JSONRPC_VERSION = "2.0"


def _reject_constant(token: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {token}")


def parse_message(line: str) -> Any:
    """Parse a single NDJSON line. Only JSON syntax is checked here."""
    try:
        return json.loads(line, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        # JSONDecodeError and UnicodeDecodeError are ValueErrors
        raise McpError(ErrorKind.PARSE_ERROR, str(exc)) from exc


def check_request(message: Any) -> Dict[str, Any]:
    """Check the JSON-RPC envelope of an already decoded message."""
    if not isinstance(message, dict):
        raise McpError(ErrorKind.INVALID_REQUEST, "Request must be an object")
    if message.get("jsonrpc") != JSONRPC_VERSION:
        raise McpError(ErrorKind.INVALID_REQUEST, "Invalid jsonrpc version")
    method = message.get("method")
    if not isinstance(method, str) or not method:
        raise McpError(ErrorKind.INVALID_REQUEST, "Method is required and must be a string")
    request_id = message.get("id")
    if request_id is not None and (isinstance(request_id, bool) or not isinstance(request_id, (str, int, float))):
        raise McpError(ErrorKind.INVALID_REQUEST, "ID must be a string or number")
    return message


def recover_id(message: Any) -> Any:
    """Best-effort id for an error response; None when it cannot be trusted."""
    if not isinstance(message, dict):
        return None
    request_id = message.get("id")
    if isinstance(request_id, bool) or not isinstance(request_id, (str, int, float)):
        return None
    return request_id


def serialize_message(message: Dict[str, Any]) -> str:
    """Serialize a JSON-RPC message as a compact JSON line."""
    return json.dumps(message, separators=(",", ":"), ensure_ascii=False) + "\n"


def make_result(request_id: Any, result: Any) -> Dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def make_error(request_id: Any, error: McpError) -> Dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "error": error.to_dict()}
