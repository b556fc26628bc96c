"""
Tool executor for MCP protocol.

This module provides functionality for executing tools with parameter validation.
"""

import logging
from typing import Any, Dict, Optional

import jsonschema
from jsonschema.exceptions import best_match

from cloud_mcp.mcp.tools.errors import ToolValidationError
from cloud_mcp.mcp.tools.models import Tool, ToolResult
from cloud_mcp.mcp.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


class ToolExecutor:
    """Executor for MCP tools."""

    def __init__(self, registry: ToolRegistry):
        """
        Initialize the tool executor.

        Args:
            registry: The tool registry to use
        """
        self.registry = registry
        self._validators: Dict[str, jsonschema.Draft7Validator] = {}

    def _validator_for(self, tool: Tool) -> jsonschema.Draft7Validator:
        validator = self._validators.get(tool.name)
        if validator is None:
            validator = jsonschema.Draft7Validator(tool.input_schema)
            self._validators[tool.name] = validator
        return validator

    def validate_parameters(self, tool: Tool, parameters: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate tool parameters against the tool's schema.

        Args:
            tool: The tool to validate parameters for
            parameters: The parameters to validate

        Returns:
            The parameters with defaults applied for every missing optional field

        Raises:
            ToolValidationError: If a field violates the schema
        """
        error = best_match(self._validator_for(tool).iter_errors(parameters))
        if error is None:
            return tool.apply_defaults(parameters)

        field = error.path[0] if error.path else None
        if error.validator == "required":
            missing = [name for name in error.validator_value if name not in parameters]
            field = missing[0] if missing else None

        logger.warning(f"Parameter validation failed for tool '{tool.name}': {error.message}")
        raise ToolValidationError(tool.name, field, str(error.validator), error.message)

    async def execute(self, tool_name: str, parameters: Optional[Dict[str, Any]]) -> ToolResult:
        """
        Execute a tool with the given parameters.

        Args:
            tool_name: The name of the tool to execute
            parameters: The parameters to pass to the tool

        Returns:
            The result of the tool execution; handler failures become an error envelope

        Raises:
            ToolNotFoundError: If the tool is not registered
            ToolValidationError: If the parameters are invalid
        """
        logger.info(f"Attempting to execute tool: {tool_name}")
        if parameters is None:
            parameters = {}

        tool = self.registry.get_tool(tool_name)
        arguments = self.validate_parameters(tool, parameters)

        try:
            logger.info(f"Executing tool: {tool_name}")
            output = await tool.execute(arguments)
        except Exception as e:
            logger.exception(f"Error executing tool {tool_name}: {e}")
            return ToolResult.from_error(tool_name, str(e) or tool.error_message, arguments)

        logger.info(f"Tool execution completed: {tool_name}")
        return ToolResult.from_output(tool_name, output, arguments)
