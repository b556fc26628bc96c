"""
Usage statistics tool for MCP protocol.

Generates synthetic usage records. Token counts and costs come from an
injectable random source so callers can seed it.
"""

import random
from datetime import timedelta
from typing import Any, Awaitable, Callable, Dict, Optional

from cloud_mcp.mcp.tools.demo.clock import Clock, to_iso, utc_now
from cloud_mcp.mcp.tools.models import Tool
from cloud_mcp.mcp.tools.schemas import GET_RECENT_USAGE

USAGE_MODELS = ["gpt-4o", "gpt-4o-mini", "claude-3-5-sonnet-20241022"]
USAGE_TYPES = ["chat", "image"]
FAILED_EVERY = 10
FAILURE_MESSAGE = "Rate limit exceeded"


def build_usage_record(index: int, rng: random.Random, clock: Clock = utc_now) -> Dict[str, Any]:
    failed = index % FAILED_EVERY == 0
    input_cost = rng.randint(1, 10)
    output_cost = rng.randint(1, 5)
    return {
        "id": f"usage-{index + 1}",
        "type": USAGE_TYPES[index % len(USAGE_TYPES)],
        "model": USAGE_MODELS[index % len(USAGE_MODELS)],
        "provider": "anthropic" if index % 3 == 2 else "openai",
        "inputTokens": rng.randint(100, 1099),
        "outputTokens": rng.randint(50, 549),
        "inputCost": input_cost,
        "outputCost": output_cost,
        "totalCost": input_cost + output_cost,
        "isSuccessful": not failed,
        "errorMessage": FAILURE_MESSAGE if failed else None,
        "createdAt": to_iso(clock() - timedelta(hours=index)),
    }


def make_usage_handler(
    rng: Optional[random.Random] = None, clock: Clock = utc_now
) -> Callable[[Dict[str, Any]], Awaitable[Dict[str, Any]]]:
    source = rng or random.Random()

    async def usage_handler(parameters: Dict[str, Any]) -> Dict[str, Any]:
        limit = parameters.get("limit", 10)
        records = [build_usage_record(i, source, clock) for i in range(limit)]
        return {
            "usage": records,
            "summary": {
                "totalRecords": len(records),
                "totalCost": sum(record["totalCost"] for record in records),
            },
        }

    return usage_handler


class UsageTool:
    """Tool reporting recent API usage."""

    @staticmethod
    def create(rng: Optional[random.Random] = None, clock: Optional[Clock] = None) -> Tool:
        """
        Create a get_recent_usage tool.

        Args:
            rng: Random source for token counts and costs
            clock: Source of the current time

        Returns:
            A Tool instance for fetching usage records
        """
        return GET_RECENT_USAGE.build(make_usage_handler(rng, clock or utc_now))
