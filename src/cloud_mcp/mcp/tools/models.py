"""
Tool models for the MCP protocol.

This module provides data models for tools, their parameters and their results.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional


@dataclass
class ToolParameter:
    """Parameter definition for a tool."""

    name: str
    description: str
    type: str
    required: bool = False
    default: Optional[Any] = None
    enum: Optional[List[Any]] = None
    minimum: Optional[int] = None
    maximum: Optional[int] = None
    min_length: Optional[int] = None

    def to_schema(self) -> Dict[str, Any]:
        """Convert parameter to JSON Schema."""
        schema = {"type": self.type, "description": self.description}

        if self.enum is not None:
            schema["enum"] = list(self.enum)

        if self.minimum is not None:
            schema["minimum"] = self.minimum

        if self.maximum is not None:
            schema["maximum"] = self.maximum

        if self.min_length is not None:
            schema["minLength"] = self.min_length

        if self.default is not None:
            schema["default"] = self.default

        return schema


@dataclass
class Tool:
    """Tool definition for MCP protocol."""

    name: str
    description: str
    parameters: List[ToolParameter]
    handler: Callable[[Dict[str, Any]], Awaitable[Any]]
    error_message: str = "Tool execution failed"

    def __post_init__(self):
        """Generate schema once; tools are not modified after registration."""
        self._input_schema = self._generate_schema()

    def _generate_schema(self) -> Dict[str, Any]:
        """Generate JSON Schema for the tool parameters."""
        properties = {}
        required = []

        for param in self.parameters:
            properties[param.name] = param.to_schema()
            if param.required:
                required.append(param.name)

        return {"type": "object", "properties": properties, "required": required}

    @property
    def input_schema(self) -> Dict[str, Any]:
        """Get the JSON Schema of the tool arguments."""
        return self._input_schema

    def apply_defaults(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        """
        Build the argument mapping the handler receives.

        Undeclared keys are dropped and missing optional fields get their defaults.
        Integral floats such as 5.0 pass "integer" validation, so they are
        converted to int here.
        """
        resolved = {}
        for param in self.parameters:
            value = arguments.get(param.name)
            if value is not None:
                if param.type == "integer" and isinstance(value, float):
                    value = int(value)
                resolved[param.name] = value
            elif param.default is not None:
                resolved[param.name] = param.default
        return resolved

    async def execute(self, parameters: Dict[str, Any]) -> Any:
        """
        Execute the tool with the given parameters.

        Args:
            parameters: Parameters to pass to the handler

        Returns:
            The result of the tool execution
        """
        return await self.handler(parameters)


@dataclass
class TextContent:
    """A text content block of a tool result."""

    text: str
    type: str = "text"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "text": self.text}


@dataclass
class ToolResult:
    """Result of a tool execution, in the MCP content envelope."""

    tool_name: str
    content: List[TextContent] = field(default_factory=list)
    is_error: bool = False
    parameters: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_output(cls, tool_name: str, output: Any, parameters: Optional[Dict[str, Any]] = None) -> "ToolResult":
        """
        Wrap a handler's return value.

        Strings are passed through as plain text; anything else is serialized as JSON.
        """
        text = output if isinstance(output, str) else json.dumps(output, indent=2)
        return cls(tool_name=tool_name, content=[TextContent(text=text)], parameters=parameters or {})

    @classmethod
    def from_error(cls, tool_name: str, message: str, parameters: Optional[Dict[str, Any]] = None) -> "ToolResult":
        """Build the error envelope: one text block holding {"error": message}."""
        text = json.dumps({"error": message}, indent=2)
        return cls(tool_name=tool_name, content=[TextContent(text=text)], is_error=True, parameters=parameters or {})

    @property
    def text(self) -> str:
        """Concatenated text of all content blocks."""
        return "".join(block.text for block in self.content)

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to the MCP wire representation."""
        return {"content": [block.to_dict() for block in self.content], "isError": self.is_error}
