"""
Tool response formatter for MCP protocol.

This module provides functionality for formatting tool results, tool
definitions and JSON-RPC envelopes.
"""

from typing import Any, Dict, List, Optional, Union

from cloud_mcp.mcp.tools.models import Tool, ToolResult

JSONRPC_VERSION = "2.0"

RequestId = Optional[Union[str, int]]


class ToolResponseFormatter:
    """Formatter for MCP tool responses."""

    def format_result(self, result: ToolResult) -> Dict[str, Any]:
        """
        Format a tool result for the MCP protocol response.

        Args:
            result: The tool result to format

        Returns:
            A dictionary holding the content blocks and the error flag
        """
        return result.to_dict()

    def format_definition(self, tool: Tool) -> Dict[str, Any]:
        """Format a tool for discovery."""
        return {"name": tool.name, "description": tool.description, "inputSchema": tool.input_schema}

    def format_definitions(self, tools: List[Tool]) -> List[Dict[str, Any]]:
        return [self.format_definition(tool) for tool in tools]

    def format_response(self, request_id: RequestId, result: Dict[str, Any]) -> Dict[str, Any]:
        """Wrap a result in a JSON-RPC response."""
        return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}

    def format_error(
        self, request_id: RequestId, code: int, message: str, data: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Wrap an error in a JSON-RPC error response.

        Args:
            request_id: The id of the failed request, or None if it could not be read
            code: The JSON-RPC error code
            message: A short description of the error
            data: Optional structured details

        Returns:
            A dictionary containing the formatted error
        """
        error = {"code": code, "message": message}
        if data is not None:
            error["data"] = data
        return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "error": error}
