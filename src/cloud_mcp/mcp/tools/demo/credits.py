"""
Credit balance tool for MCP protocol.

Returns a fixed demo balance and, on request, a synthetic transaction history.
"""

from datetime import timedelta
from typing import Any, Awaitable, Callable, Dict, Optional

from cloud_mcp.mcp.tools.demo.clock import Clock, to_iso, utc_now
from cloud_mcp.mcp.tools.models import Tool
from cloud_mcp.mcp.tools.schemas import CHECK_CREDITS

DEMO_BALANCE = 10000
DEMO_ORGANIZATION_ID = "demo-org-123"
DEMO_ORGANIZATION_NAME = "Demo Organization"


def build_transactions(limit: int, clock: Clock = utc_now) -> list:
    """Alternate purchases and deductions, one day apart, newest first."""
    now = clock()
    transactions = []
    for i in range(limit):
        purchase = i % 2 == 0
        transactions.append(
            {
                "id": f"tx-{i + 1}",
                "amount": 100 if purchase else -50,
                "type": "purchase" if purchase else "deduction",
                "description": "Credit pack purchase" if purchase else "Text generation usage",
                "createdAt": to_iso(now - timedelta(days=i)),
            }
        )
    return transactions


def make_credits_handler(clock: Clock = utc_now) -> Callable[[Dict[str, Any]], Awaitable[Dict[str, Any]]]:
    async def check_credits_handler(parameters: Dict[str, Any]) -> Dict[str, Any]:
        """
        Report the organization's credit balance.

        Args:
            parameters: Dictionary containing:
                includeTransactions: Whether to attach recent transactions
                limit: Number of transactions to attach

        Returns:
            Balance and organization details, plus transactions when requested
        """
        response = {
            "balance": DEMO_BALANCE,
            "organizationId": DEMO_ORGANIZATION_ID,
            "organizationName": DEMO_ORGANIZATION_NAME,
        }

        if parameters.get("includeTransactions", False):
            response["transactions"] = build_transactions(parameters.get("limit", 5), clock)

        return response

    return check_credits_handler


class CreditsTool:
    """Tool reporting the demo credit balance."""

    @staticmethod
    def create(clock: Optional[Clock] = None) -> Tool:
        """
        Create a check_credits tool.

        Returns:
            A Tool instance for checking credits
        """
        return CHECK_CREDITS.build(make_credits_handler(clock or utc_now))
