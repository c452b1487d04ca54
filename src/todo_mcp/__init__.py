"""In-memory todo list exposed as an MCP stdio server."""

from .protocol import PROTOCOL_VERSION, make_error, make_result, parse_message, serialize_message
from .server import MessageHandler, StdioServer, create_handler
from .shared.errors import ErrorKind, McpError
from .store import Task, TaskStore
from .tools import ToolRegistry

__all__ = [
    "PROTOCOL_VERSION",
    "ErrorKind",
    "McpError",
    "MessageHandler",
    "StdioServer",
    "Task",
    "TaskStore",
    "ToolRegistry",
    "create_handler",
    "make_error",
    "make_result",
    "parse_message",
    "serialize_message",
]
