"""
Exceptions raised while dispatching tool calls.
"""

from typing import Optional


class ToolError(Exception):
    """Base class for tool dispatch errors."""

    def __init__(self, tool_name: Optional[str], message: str):
        super().__init__(message)
        self.tool_name = tool_name
        self.message = message


class ToolNotFoundError(ToolError):
    """Raised when a call names a tool that is not registered."""

    def __init__(self, tool_name: str):
        super().__init__(tool_name, f"Tool '{tool_name}' not found")


class ToolValidationError(ToolError):
    """
    Raised when call arguments do not satisfy the tool's input schema.

    tool_name is None when the call does not name a tool at all.
    """

    def __init__(self, tool_name: Optional[str], field: Optional[str], constraint: str, message: str):
        prefix = f"Invalid arguments for tool '{tool_name}'" if tool_name is not None else "Invalid params"
        super().__init__(tool_name, f"{prefix}: {message}")
        self.field = field
        self.constraint = constraint
        self.detail = message

    def to_dict(self):
        return {"tool": self.tool_name, "field": self.field, "constraint": self.constraint, "message": self.detail}
