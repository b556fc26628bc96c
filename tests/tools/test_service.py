"""
Tests for the ToolService JSON-RPC dispatch.
"""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from cloud_mcp.mcp.tools.executor import ToolExecutor
from cloud_mcp.mcp.tools.models import Tool
from cloud_mcp.mcp.tools.registry import ToolRegistry
from cloud_mcp.mcp.tools.schemas import CHECK_CREDITS
from cloud_mcp.mcp.tools.service import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    LATEST_PROTOCOL_VERSION,
    METHOD_NOT_FOUND,
    TOOL_NOT_FOUND,
    ToolService,
)


def rpc(method, params=None, request_id=1):
    message = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        message["params"] = params
    return message


def test_init_creates_executor():
    registry = ToolRegistry()
    service = ToolService(registry)

    assert service.registry is registry
    assert isinstance(service.executor, ToolExecutor)


def test_init_uses_given_executor():
    registry = ToolRegistry()
    executor = MagicMock(spec=ToolExecutor)

    assert ToolService(registry, executor).executor is executor


def test_get_tool_definitions(service):
    definitions = service.get_tool_definitions()

    assert [d["name"] for d in definitions] == ["check_credits", "get_recent_usage", "generate_text", "generate_image"]
    for definition in definitions:
        assert definition["description"]
        assert definition["inputSchema"]["type"] == "object"


@pytest.mark.asyncio
async def test_initialize_echoes_supported_version(service):
    response = await service.handle_request(rpc("initialize", {"protocolVersion": "2024-11-05"}))

    result = response["result"]
    assert result["protocolVersion"] == "2024-11-05"
    assert result["capabilities"] == {"tools": {"listChanged": False}}
    assert result["serverInfo"]["name"] == "cloud-mcp"


@pytest.mark.asyncio
async def test_initialize_unknown_version_gets_latest(service):
    response = await service.handle_request(rpc("initialize", {"protocolVersion": "1999-01-01"}))

    assert response["result"]["protocolVersion"] == LATEST_PROTOCOL_VERSION


@pytest.mark.asyncio
async def test_ping(service):
    assert await service.handle_request(rpc("ping", request_id="p")) == {"jsonrpc": "2.0", "id": "p", "result": {}}


@pytest.mark.asyncio
async def test_notification_has_no_response(service):
    assert await service.handle_request({"jsonrpc": "2.0", "method": "notifications/initialized"}) is None


@pytest.mark.asyncio
async def test_tools_list(service):
    response = await service.handle_request(rpc("tools/list"))

    tools = response["result"]["tools"]
    assert len(tools) == 4
    check_credits = next(t for t in tools if t["name"] == "check_credits")
    assert check_credits["inputSchema"]["properties"]["limit"]["maximum"] == 20


@pytest.mark.asyncio
async def test_tools_call_success(service):
    response = await service.handle_request(rpc("tools/call", {"name": "check_credits", "arguments": {}}))

    result = response["result"]
    assert result["isError"] is False
    assert json.loads(result["content"][0]["text"])["balance"] == 10000


@pytest.mark.asyncio
async def test_tools_call_without_arguments(service):
    response = await service.handle_request(rpc("tools/call", {"name": "get_recent_usage"}))

    payload = json.loads(response["result"]["content"][0]["text"])
    assert payload["summary"]["totalRecords"] == 10


@pytest.mark.asyncio
async def test_tools_call_unknown_tool_is_distinct(service):
    """Test that an unregistered name is rejected with its own error code."""
    response = await service.handle_request(rpc("tools/call", {"name": "delete_everything", "arguments": {}}))

    assert "result" not in response
    assert response["error"]["code"] == TOOL_NOT_FOUND
    assert response["error"]["data"] == {"tool": "delete_everything"}


@pytest.mark.asyncio
async def test_tools_call_limit_above_maximum_is_rejected(service):
    """Test that check_credits with limit=21 fails validation."""
    response = await service.handle_request(
        rpc("tools/call", {"name": "check_credits", "arguments": {"includeTransactions": True, "limit": 21}})
    )

    error = response["error"]
    assert error["code"] == INVALID_PARAMS
    assert error["data"]["tool"] == "check_credits"
    assert error["data"]["field"] == "limit"
    assert error["data"]["constraint"] == "maximum"


@pytest.mark.asyncio
async def test_validation_happens_before_handler():
    handler = AsyncMock(return_value="never")
    registry = ToolRegistry()
    registry.register(CHECK_CREDITS.build(handler))
    service = ToolService(registry)

    await service.handle_request(rpc("tools/call", {"name": "check_credits", "arguments": {"limit": 21}}))

    handler.assert_not_called()


@pytest.mark.asyncio
async def test_tools_call_handler_failure_is_envelope():
    registry = ToolRegistry()
    registry.register(Tool(name="broken", description="Fails", parameters=[], handler=AsyncMock(side_effect=KeyError("x"))))
    service = ToolService(registry)

    response = await service.handle_request(rpc("tools/call", {"name": "broken", "arguments": {}}))

    assert response["result"]["isError"] is True
    assert "error" in json.loads(response["result"]["content"][0]["text"])


@pytest.mark.asyncio
async def test_tools_call_missing_name(service):
    response = await service.handle_request(rpc("tools/call", {"arguments": {}}))

    assert response["error"]["code"] == INVALID_PARAMS
    assert response["error"]["data"]["field"] == "name"
    assert response["error"]["data"]["tool"] is None
    assert "None" not in response["error"]["message"]


@pytest.mark.asyncio
async def test_check_credits_accepts_integral_float_limit(service):
    """Test that limit=5.0 is treated as the integer 5."""
    result = await service.execute_tool("check_credits", {"includeTransactions": True, "limit": 5.0})

    assert result.is_error is False
    assert len(json.loads(result.text)["transactions"]) == 5


@pytest.mark.asyncio
async def test_get_recent_usage_accepts_integral_float_limit(service):
    result = await service.execute_tool("get_recent_usage", {"limit": 3.0})

    assert result.is_error is False
    payload = json.loads(result.text)
    assert payload["summary"]["totalRecords"] == 3
    assert len(payload["usage"]) == 3


@pytest.mark.asyncio
async def test_generate_text_accepts_integral_float_max_length(service):
    result = await service.execute_tool("generate_text", {"prompt": "hi", "maxLength": 100.0})

    assert result.is_error is False
    assert 0 < len(result.text) <= 100


@pytest.mark.asyncio
async def test_unknown_method(service):
    response = await service.handle_request(rpc("resources/list"))

    assert response["error"]["code"] == METHOD_NOT_FOUND


@pytest.mark.asyncio
@pytest.mark.parametrize("message", [{"jsonrpc": "2.0", "id": 1}, "tools/list", 42])
async def test_invalid_request(service, message):
    response = await service.handle_message(message)

    assert response["error"]["code"] == INVALID_REQUEST


@pytest.mark.asyncio
async def test_params_must_be_object(service):
    response = await service.handle_request({"jsonrpc": "2.0", "id": 3, "method": "tools/call", "params": [1]})

    assert response["error"]["code"] == INVALID_PARAMS


@pytest.mark.asyncio
async def test_batch(service):
    responses = await service.handle_message(
        [rpc("ping", request_id=1), {"jsonrpc": "2.0", "method": "notifications/initialized"}, rpc("tools/list", request_id=2)]
    )

    assert [r["id"] for r in responses] == [1, 2]


@pytest.mark.asyncio
async def test_batch_item_failure_is_isolated(service, monkeypatch):
    """Test that an unexpected error in one batch item leaves the others answered."""
    original = service._ping

    async def flaky_ping(params):
        if params.get("fail"):
            raise RuntimeError("unexpected")
        return await original(params)

    monkeypatch.setitem(service._methods, "ping", flaky_ping)

    responses = await service.handle_message(
        [rpc("ping", {"fail": True}, request_id=1), rpc("ping", request_id=2), rpc("tools/list", request_id=3)]
    )

    assert [r["id"] for r in responses] == [1, 2, 3]
    assert responses[0]["error"]["code"] == INTERNAL_ERROR
    assert responses[1]["result"] == {}
    assert len(responses[2]["result"]["tools"]) == 4


@pytest.mark.asyncio
async def test_batch_of_notifications_has_no_response(service):
    assert await service.handle_message([{"jsonrpc": "2.0", "method": "notifications/initialized"}]) is None


@pytest.mark.asyncio
async def test_empty_batch_is_invalid(service):
    response = await service.handle_message([])

    assert response["error"]["code"] == INVALID_REQUEST
