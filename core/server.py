from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .envelope import rpc_error, rpc_result
from .registry import ResourceHandler, ResourceRegistry, ToolHandler, ToolRegistry
from .validation import ValidationError, validate_arguments

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
RESOURCE_NOT_FOUND = -32002


class MCPServer:
    """JSON-RPC 2.0 dispatcher for MCP tools and resources.

    Units register themselves through :meth:`register_tool` and
    :meth:`register_resource`; transports hand every decoded message to
    :meth:`handle_message` and write back whatever it returns (``None`` for
    notifications).
    """

    def __init__(self, name: str = "leetcode-mcp-server", version: str = "1.0.0",
                 instructions: Optional[str] = None) -> None:
        self.name = name
        self.version = version
        self.instructions = instructions
        self.tools = ToolRegistry()
        self.resources = ResourceRegistry()

    # --- Registration ---
    def register_tool(self, name: str, description: str, input_schema: Dict[str, Any], handler: ToolHandler) -> None:
        self.tools.register(name, description, input_schema, handler)
        logger.debug("Registered tool %s", name)

    def register_resource(self, name: str, uri_template: str, metadata: Dict[str, Any],
                          handler: ResourceHandler) -> None:
        self.resources.register(name, uri_template, metadata, handler)
        logger.debug("Registered resource %s at %s", name, uri_template)

    # --- Dispatch ---
    async def handle_message(self, message: Any) -> Optional[Dict[str, Any]]:
        """Handle one incoming MCP message; returns the response or None for notifications."""
        if not isinstance(message, dict) or message.get("jsonrpc", "2.0") != "2.0":
            return rpc_error(None, INVALID_REQUEST, "Invalid Request")
        method = message.get("method")
        message_id = message.get("id")
        is_notification = "id" not in message
        if not isinstance(method, str):
            return None if is_notification else rpc_error(message_id, INVALID_REQUEST, "Invalid Request")

        response = await self._dispatch(method, message_id, message)
        # JSON-RPC notifications never get a reply, even when the method ran
        if is_notification:
            return None
        return response

    async def _dispatch(self, method: str, message_id: Any, message: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            if method == "initialize":
                return rpc_result(message_id, self._initialize_result())
            if method.startswith("notifications/"):
                return None
            if method == "ping":
                return rpc_result(message_id, {})
            if method == "tools/list":
                return rpc_result(message_id, {"tools": [t.describe() for t in self.tools.list_tools()]})
            if method == "tools/call":
                return await self.handle_tool_call(message)
            if method == "resources/list":
                return rpc_result(message_id, {"resources": [r.describe() for r in self.resources.list_resources()]})
            if method == "resources/templates/list":
                return rpc_result(message_id,
                                  {"resourceTemplates": [r.describe() for r in self.resources.list_templates()]})
            if method == "resources/read":
                return await self.handle_resource_read(message)
        except Exception as e:
            logger.exception("Error handling %s", method)
            return rpc_error(message_id, INTERNAL_ERROR, f"Internal error: {e}")
        return rpc_error(message_id, METHOD_NOT_FOUND, f"Method not found: {method}")

    async def handle_tool_call(self, message: Dict[str, Any]) -> Dict[str, Any]:
        params = message.get("params") or {}
        message_id = message.get("id")
        if not isinstance(params, dict):
            return rpc_error(message_id, INVALID_PARAMS, "Invalid params")
        tool_name = params.get("name")
        if not tool_name:
            return rpc_error(message_id, INVALID_PARAMS, "Missing tool name")

        entry = self.tools.get(tool_name)
        if entry is None:
            return rpc_error(message_id, METHOD_NOT_FOUND, f"Unknown tool: {tool_name}")

        try:
            arguments = validate_arguments(params.get("arguments"), entry.input_schema)
        except ValidationError as e:
            return rpc_error(message_id, INVALID_PARAMS, f"Invalid params: {e}")

        try:
            result = await entry.handler(arguments)
        except Exception as e:
            logger.exception("Tool %s failed", tool_name)
            return rpc_error(message_id, INTERNAL_ERROR, f"Tool execution error: {e}")
        return rpc_result(message_id, result)

    async def handle_resource_read(self, message: Dict[str, Any]) -> Dict[str, Any]:
        params = message.get("params") or {}
        message_id = message.get("id")
        if not isinstance(params, dict):
            return rpc_error(message_id, INVALID_PARAMS, "Invalid params")
        uri = params.get("uri")
        if not isinstance(uri, str) or not uri:
            return rpc_error(message_id, INVALID_PARAMS, "Missing resource uri")

        resolved = self.resources.resolve(uri)
        if resolved is None:
            return rpc_error(message_id, RESOURCE_NOT_FOUND, f"Resource not found: {uri}", {"uri": uri})
        entry, variables = resolved

        try:
            result = await entry.handler(uri, variables)
        except Exception as e:
            logger.exception("Resource %s failed for %s", entry.name, uri)
            return rpc_error(message_id, INTERNAL_ERROR, f"Resource read error: {e}")
        return rpc_result(message_id, result)

    def _initialize_result(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {
                "tools": {"listChanged": False},
                "resources": {"subscribe": False, "listChanged": False},
            },
            "serverInfo": {"name": self.name, "version": self.version},
        }
        if self.instructions:
            result["instructions"] = self.instructions
        return result
