"""
Demo tool implementations for MCP protocol.

These tools return synthetic data only.
"""

import random
from typing import Optional

from cloud_mcp.mcp.tools.demo.clock import Clock
from cloud_mcp.mcp.tools.registry import ToolRegistry

from .credits import CreditsTool
from .image import ImageGenerationTool
from .text import TextGenerationTool
from .usage import UsageTool


def create_demo_registry(rng: Optional[random.Random] = None, clock: Optional[Clock] = None) -> ToolRegistry:
    """Register all four demo tools in a new registry."""
    registry = ToolRegistry()
    registry.register(CreditsTool.create(clock))
    registry.register(UsageTool.create(rng, clock))
    registry.register(TextGenerationTool.create())
    registry.register(ImageGenerationTool.create())
    return registry
