import logging
import sys
from typing import Any, Callable, Dict, Optional

from .protocol import check_request, make_error, make_result, parse_message, recover_id, serialize_message
from .resources import ResourceReader
from .shared.config import ServerConfig
from .shared.errors import ErrorKind, McpError, to_mcp_error
from .shared.logging import get_logger, log_event
from .store import TaskStore
from .tools import ToolRegistry

logger = get_logger(__name__)

NOTIFICATION_PREFIX = "notifications/"
CAPABILITIES = {
    "tools": {"listChanged": True},
    "resources": {"subscribe": True, "listChanged": True},
    "logging": {},
}


class MessageHandler:
    """Routes one decoded JSON-RPC message to initialize, tools or resources."""

    def __init__(self, config: ServerConfig, tools: ToolRegistry, resources: ResourceReader) -> None:
        self.config = config
        self.tools = tools
        self.resources = resources
        self._methods: Dict[str, Callable[[Dict[str, Any]], Any]] = {
            "initialize": self._initialize,
            "tools/list": self._tools_list,
            "tools/call": self._tools_call,
            "resources/list": self._resources_list,
            "resources/read": self._resources_read,
        }

    def handle_message(self, line: str) -> Optional[Dict[str, Any]]:
        """Return the response for ``line``, or None when nothing must be sent."""
        message: Any = None
        notification = False
        try:
            message = parse_message(line)
            request = check_request(message)
            method = request["method"]
            request_id = request.get("id")
            notification = request_id is None or method.startswith(NOTIFICATION_PREFIX)
            log_event(logger, logging.DEBUG, "Incoming request", method=method, id=request_id)
            if method.startswith(NOTIFICATION_PREFIX):
                return None
            result = self._dispatch(method, request.get("params"))
        except Exception as exc:  # noqa: BLE001
            error = to_mcp_error(exc)
            if error.kind is ErrorKind.INTERNAL_ERROR:
                logger.exception("Unhandled error while processing request")
            request_id = recover_id(message)
            log_event(logger, logging.ERROR, "Request failed", id=request_id, error=error.to_dict())
            if notification:
                return None
            return make_error(request_id, error)

        if notification:
            return None
        log_event(logger, logging.DEBUG, "Request successful", id=request_id)
        return make_result(request_id, result)

    def _dispatch(self, method: str, raw_params: Any) -> Any:
        handler = self._methods.get(method)
        if handler is None:
            raise McpError(ErrorKind.METHOD_NOT_FOUND)
        if raw_params is None:
            params: Dict[str, Any] = {}
        elif isinstance(raw_params, dict):
            params = raw_params
        else:
            raise McpError(ErrorKind.INVALID_PARAMS, "params must be an object")
        return handler(params)

    def _initialize(self, params: Dict[str, Any]) -> Dict[str, Any]:
        capabilities = params.get("capabilities")
        if capabilities is not None and not isinstance(capabilities, dict):
            raise McpError(ErrorKind.VALIDATION_ERROR, "Client capabilities must be provided as an object")
        client_version = params.get("protocolVersion")
        if self.config.strict_protocol and client_version not in self.config.supported_protocol_versions:
            raise McpError(ErrorKind.UNSUPPORTED_PROTOCOL, f"Protocol version '{client_version}' is not supported")
        log_event(logger, logging.INFO, "MCP protocol event: initialize", client_version=client_version)
        return {
            "protocolVersion": self.config.protocol_version,
            "capabilities": CAPABILITIES,
            "serverInfo": {"name": self.config.name, "version": self.config.version},
        }

    def _tools_list(self, _: Dict[str, Any]) -> Dict[str, Any]:
        return {"tools": self.tools.list_tools()}

    def _tools_call(self, params: Dict[str, Any]) -> Dict[str, Any]:
        name = params.get("name")
        if not isinstance(name, str):
            raise McpError(ErrorKind.INVALID_PARAMS, "Tool name must be a string")
        return self.tools.call_tool(name, params.get("arguments"))

    def _resources_list(self, _: Dict[str, Any]) -> Dict[str, Any]:
        return {"resources": self.resources.list_resources()}

    def _resources_read(self, params: Dict[str, Any]) -> Dict[str, Any]:
        uri = params.get("uri")
        if not isinstance(uri, str):
            raise McpError(ErrorKind.INVALID_PARAMS, "Resource uri must be a string")
        return self.resources.read_resource(uri)


def create_handler(config: Optional[ServerConfig] = None, store: Optional[TaskStore] = None) -> MessageHandler:
    config = config or ServerConfig()
    store = store if store is not None else TaskStore()
    handler = MessageHandler(config, ToolRegistry(store), ResourceReader(store))
    log_event(
        logger,
        logging.INFO,
        "MCP Server initialized",
        server=config.name,
        version=config.version,
        protocol=config.protocol_version,
    )
    return handler


class StdioServer:
    def __init__(self, handler: Optional[MessageHandler] = None, stdin=None, stdout=None) -> None:
        self.handler = handler or create_handler()
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout

    def run(self) -> None:
        """Serve until EOF. Errors outside the message handler propagate."""
        logger.info("MCP Server started and listening on stdio")
        while True:
            line = self._stdin.readline()
            if line == "":
                break  # EOF
            line = line.strip()
            if not line:
                continue
            response = self.handler.handle_message(line)
            if response is None:
                continue
            self._stdout.write(serialize_message(response))
            self._stdout.flush()
        logger.info("Client disconnected")
