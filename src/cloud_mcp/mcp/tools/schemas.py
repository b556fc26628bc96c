"""
Input schemas for the demo tools.

Each tool is declared once here: its name, description and the table of
fields it accepts, with bounds, enums and defaults. The executor validates
every call against the JSON Schema rendered from these tables.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List

from cloud_mcp.mcp.tools.models import Tool, ToolParameter

TEXT_MODELS = ["gpt-4o", "gpt-4o-mini", "claude-3-5-sonnet-20241022", "gemini-2.0-flash-exp"]
DEFAULT_TEXT_MODEL = "gpt-4o"

ASPECT_RATIOS = ["1:1", "16:9", "9:16", "4:3", "3:4"]


@dataclass(frozen=True)
class ToolSchema:
    """Declared shape of one tool."""

    name: str
    description: str
    parameters: List[ToolParameter]
    error_message: str

    def build(self, handler: Callable[[Dict[str, Any]], Awaitable[Any]]) -> Tool:
        """Bind a handler to this schema."""
        return Tool(
            name=self.name,
            description=self.description,
            parameters=list(self.parameters),
            handler=handler,
            error_message=self.error_message,
        )


CHECK_CREDITS = ToolSchema(
    name="check_credits",
    description="Check credit balance and recent transactions for your organization",
    parameters=[
        ToolParameter(
            name="includeTransactions",
            description="Include recent transactions in the response",
            type="boolean",
            default=False,
        ),
        ToolParameter(
            name="limit",
            description="Number of recent transactions to include",
            type="integer",
            minimum=1,
            maximum=20,
            default=5,
        ),
    ],
    error_message="Failed to check credits",
)

GET_RECENT_USAGE = ToolSchema(
    name="get_recent_usage",
    description="Get recent API usage statistics including models used, costs, and tokens",
    parameters=[
        ToolParameter(
            name="limit",
            description="Number of recent usage records to fetch",
            type="integer",
            minimum=1,
            maximum=50,
            default=10,
        ),
    ],
    error_message="Failed to fetch usage",
)

GENERATE_TEXT = ToolSchema(
    name="generate_text",
    description=(
        "Generate text using AI models (GPT-4, Claude, Gemini). "
        "This is a demo version that returns mock responses."
    ),
    parameters=[
        ToolParameter(
            name="prompt",
            description="The text prompt to generate from",
            type="string",
            required=True,
            min_length=1,
        ),
        ToolParameter(
            name="model",
            description="The AI model to use for generation",
            type="string",
            enum=TEXT_MODELS,
            default=DEFAULT_TEXT_MODEL,
        ),
        ToolParameter(
            name="maxLength",
            description="Maximum length of generated text",
            type="integer",
            minimum=1,
            maximum=4000,
            default=1000,
        ),
    ],
    error_message="Text generation failed",
)

GENERATE_IMAGE = ToolSchema(
    name="generate_image",
    description=(
        "Generate images using Google Gemini 2.5. "
        "This is a demo version that returns mock image URLs."
    ),
    parameters=[
        ToolParameter(
            name="prompt",
            description="Description of the image to generate",
            type="string",
            required=True,
            min_length=1,
        ),
        ToolParameter(
            name="aspectRatio",
            description="Aspect ratio for the generated image",
            type="string",
            enum=ASPECT_RATIOS,
            default="1:1",
        ),
    ],
    error_message="Image generation failed",
)

ALL_SCHEMAS = [CHECK_CREDITS, GET_RECENT_USAGE, GENERATE_TEXT, GENERATE_IMAGE]
