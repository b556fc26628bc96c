"""
Tool service for MCP protocol.

This module provides a service answering MCP JSON-RPC requests with the
registered tools.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from cloud_mcp import __version__
from cloud_mcp.mcp.tools.errors import ToolNotFoundError, ToolValidationError
from cloud_mcp.mcp.tools.executor import ToolExecutor
from cloud_mcp.mcp.tools.formatter import RequestId, ToolResponseFormatter
from cloud_mcp.mcp.tools.models import ToolResult
from cloud_mcp.mcp.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

LATEST_PROTOCOL_VERSION = "2025-06-18"
SUPPORTED_PROTOCOL_VERSIONS = ["2025-06-18", "2025-03-26", "2024-11-05"]
SERVER_NAME = "cloud-mcp"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
TOOL_NOT_FOUND = -32001


class ToolService:
    """Service for executing tools through the MCP protocol."""

    def __init__(self, registry: ToolRegistry, executor: Optional[ToolExecutor] = None):
        """
        Initialize the tool service.

        Args:
            registry: The tool registry to use
            executor: The tool executor to use, or None to create a new one
        """
        self.registry = registry
        self.executor = executor if executor is not None else ToolExecutor(registry)
        self.formatter = ToolResponseFormatter()
        self._methods = {
            "initialize": self._initialize,
            "ping": self._ping,
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
        }

    async def execute_tool(self, tool_name: str, parameters: Optional[Dict[str, Any]]) -> ToolResult:
        """
        Execute a tool.

        Args:
            tool_name: The name of the tool to execute
            parameters: The parameters to pass to the tool

        Returns:
            The result of the tool execution

        Raises:
            ToolNotFoundError: If the tool is not registered
            ToolValidationError: If the parameters are invalid
        """
        return await self.executor.execute(tool_name, parameters)

    def get_tool_definitions(self) -> List[Dict[str, Any]]:
        """
        Get definitions for all available tools.

        Returns:
            A list of {name, description, inputSchema} entries
        """
        return self.formatter.format_definitions(self.registry.get_all_tools())

    async def handle_message(self, message: Any) -> Optional[Union[Dict[str, Any], List[Dict[str, Any]]]]:
        """
        Answer one JSON-RPC message or a batch of them.

        Args:
            message: The decoded request body

        Returns:
            The response, a list of responses for a batch, or None when
            nothing needs to be sent back (notifications only)
        """
        if isinstance(message, list):
            if not message:
                return self.formatter.format_error(None, INVALID_REQUEST, "Invalid Request: empty batch")
            responses = [await self._handle_batch_item(item) for item in message]
            responses = [response for response in responses if response is not None]
            return responses or None

        return await self.handle_request(message)

    async def _handle_batch_item(self, item: Any) -> Optional[Dict[str, Any]]:
        # a failing item gets its own error response
        try:
            return await self.handle_request(item)
        except Exception as e:
            logger.exception(f"Unhandled error answering batch item: {e}")
            request_id = item.get("id") if isinstance(item, dict) else None
            return self.formatter.format_error(request_id, INTERNAL_ERROR, "Internal error")

    async def handle_request(self, request: Any) -> Optional[Dict[str, Any]]:
        """
        Answer a single JSON-RPC request.

        Notifications (requests without an id) are accepted and produce no response.
        """
        if not isinstance(request, dict) or not isinstance(request.get("method"), str):
            return self.formatter.format_error(None, INVALID_REQUEST, "Invalid Request")

        method = request["method"]
        request_id = request.get("id")
        params = request.get("params") or {}

        if "id" not in request:
            logger.debug(f"Received notification: {method}")
            return None

        handler = self._methods.get(method)
        if handler is None:
            logger.warning(f"Unknown method: {method}")
            return self.formatter.format_error(request_id, METHOD_NOT_FOUND, f"Method not found: {method}")

        if not isinstance(params, dict):
            return self.formatter.format_error(request_id, INVALID_PARAMS, "Invalid params: expected an object")

        try:
            result = await handler(params)
        except ToolNotFoundError as e:
            return self.formatter.format_error(request_id, TOOL_NOT_FOUND, e.message, {"tool": e.tool_name})
        except ToolValidationError as e:
            return self.formatter.format_error(request_id, INVALID_PARAMS, e.message, e.to_dict())

        return self.formatter.format_response(request_id, result)

    async def _initialize(self, params: Dict[str, Any]) -> Dict[str, Any]:
        requested = params.get("protocolVersion")
        version = requested if requested in SUPPORTED_PROTOCOL_VERSIONS else LATEST_PROTOCOL_VERSION
        return {
            "protocolVersion": version,
            "capabilities": {"tools": {"listChanged": False}},
            "serverInfo": {"name": SERVER_NAME, "version": __version__},
        }

    async def _ping(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {}

    async def _list_tools(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {"tools": self.get_tool_definitions()}

    async def _call_tool(self, params: Dict[str, Any]) -> Dict[str, Any]:
        name = params.get("name")
        if not isinstance(name, str):
            raise ToolValidationError(None, "name", "required", "'name' is a required string")

        result = await self.execute_tool(name, params.get("arguments"))
        return self.formatter.format_result(result)
