"""
Tool registry for MCP protocol.

This module provides a registry for registering and looking up tools.
"""

from typing import Dict, List

from cloud_mcp.mcp.tools.errors import ToolNotFoundError
from cloud_mcp.mcp.tools.models import Tool


class ToolRegistry:
    """Registry for MCP tools."""

    def __init__(self):
        """Initialize an empty registry."""
        self._tools: Dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        """
        Register a tool with the registry.

        Args:
            tool: The tool to register

        Raises:
            ValueError: If a tool with the same name is already registered
        """
        if tool.name in self._tools:
            raise ValueError(f"Tool with name '{tool.name}' is already registered")

        self._tools[tool.name] = tool

    def get_tool(self, tool_name: str) -> Tool:
        """
        Get a tool by name.

        Args:
            tool_name: The name of the tool to get

        Returns:
            The requested tool

        Raises:
            ToolNotFoundError: If no tool with the given name is registered
        """
        if tool_name not in self._tools:
            raise ToolNotFoundError(tool_name)

        return self._tools[tool_name]

    def get_all_tools(self) -> List[Tool]:
        """
        Get all registered tools.

        Returns:
            A list of all registered tools, in registration order
        """
        return list(self._tools.values())
