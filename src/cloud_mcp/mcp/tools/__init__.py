"""
Tool execution framework for MCP protocol.

This module provides classes for tool registration and execution.
"""

from .errors import ToolError, ToolNotFoundError, ToolValidationError
from .executor import ToolExecutor
from .formatter import ToolResponseFormatter
from .models import TextContent, Tool, ToolParameter, ToolResult
from .registry import ToolRegistry
from .service import ToolService
