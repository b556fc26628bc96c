"""
Text generation tool for MCP protocol.

This is a demo tool: it never calls a model, it fills a canned template.
"""

from typing import Any, Dict

from cloud_mcp.mcp.tools.models import Tool
from cloud_mcp.mcp.tools.schemas import DEFAULT_TEXT_MODEL, GENERATE_TEXT

MOCK_RESPONSES = {
    "gpt-4o": (
        "[GPT-4o Mock Response]\n\n"
        'Your prompt: "{prompt}"\n\n'
        "This is a demonstration response from the MCP inspector. In a production environment, "
        "this would connect to the actual {model} API and generate real content based on your prompt.\n\n"
        "Key features:\n"
        "- Streaming support\n"
        "- Token counting\n"
        "- Cost tracking\n"
        "- Error handling\n\n"
        "To enable real generation, integrate with AI SDK Gateway or direct provider APIs."
    ),
    "gpt-4o-mini": (
        "[GPT-4o-mini Mock Response]\n\n"
        'Prompt received: "{prompt}"\n\n'
        "This lightweight model would provide faster, cost-effective responses for simpler tasks. "
        "Mock response demonstrates the structure and format."
    ),
    "claude-3-5-sonnet-20241022": (
        "[Claude 3.5 Sonnet Mock Response]\n\n"
        'Analyzing prompt: "{prompt}"\n\n'
        "Claude's response would emphasize thoughtful, nuanced answers with strong reasoning "
        "capabilities. This demo shows the integration pattern."
    ),
    "gemini-2.0-flash-exp": (
        "[Gemini 2.0 Flash Mock Response]\n\n"
        'Processing: "{prompt}"\n\n'
        "Google's Gemini would provide multimodal capabilities and fast inference. "
        "This is a structural demonstration."
    ),
}


def render_mock_text(prompt: str, model: str = DEFAULT_TEXT_MODEL, max_length: int = 1000) -> str:
    """Fill the model's template and cut it to max_length characters."""
    template = MOCK_RESPONSES.get(model, MOCK_RESPONSES[DEFAULT_TEXT_MODEL])
    return template.format(prompt=prompt, model=model)[:max_length]


async def generate_text_handler(parameters: Dict[str, Any]) -> str:
    return render_mock_text(
        parameters["prompt"],
        parameters.get("model", DEFAULT_TEXT_MODEL),
        parameters.get("maxLength", 1000),
    )


class TextGenerationTool:
    """Tool returning mock text completions."""

    @staticmethod
    def create() -> Tool:
        return GENERATE_TEXT.build(generate_text_handler)
