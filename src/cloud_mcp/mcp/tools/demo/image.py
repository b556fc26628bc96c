"""
Image generation tool for MCP protocol.

No image is produced; the response describes the request and points at a
placeholder image.
"""

from typing import Any, Dict
from urllib.parse import quote

from cloud_mcp.mcp.tools.models import Tool
from cloud_mcp.mcp.tools.schemas import GENERATE_IMAGE

PLACEHOLDER_URL = "https://placehold.co/1024x1024/png?text="
PROMPT_PREVIEW_LENGTH = 50
ESTIMATED_COST = 100

ASPECT_RATIO_DESCRIPTIONS = {
    "1:1": "square composition",
    "16:9": "wide landscape composition",
    "9:16": "tall portrait composition",
    "4:3": "landscape composition",
    "3:4": "portrait composition",
}


def placeholder_url(prompt: str) -> str:
    # Same escaping as JavaScript's encodeURIComponent
    return PLACEHOLDER_URL + quote(prompt[:PROMPT_PREVIEW_LENGTH], safe="-_.!~*'()")


async def generate_image_handler(parameters: Dict[str, Any]) -> Dict[str, Any]:
    """
    Describe the image that would be generated.

    Args:
        parameters: Dictionary containing:
            prompt: Description of the image
            aspectRatio: One of the supported aspect ratios

    Returns:
        The request echoed back with a placeholder URL and a cost estimate
    """
    prompt = parameters["prompt"]
    aspect_ratio = parameters.get("aspectRatio", "1:1")

    return {
        "message": "Image generation demo - mock response",
        "prompt": prompt,
        "aspectRatio": aspect_ratio,
        "description": ASPECT_RATIO_DESCRIPTIONS.get(aspect_ratio),
        "mockImageUrl": placeholder_url(prompt),
        "note": (
            "In production, this would generate a real image using Google Gemini 2.5 "
            "and upload to Vercel Blob storage"
        ),
        "estimatedCost": ESTIMATED_COST,
    }


class ImageGenerationTool:
    """Tool returning mock image descriptions."""

    @staticmethod
    def create() -> Tool:
        return GENERATE_IMAGE.build(generate_image_handler)
