"""
Tests for the cloud-mcp command line.
"""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from cloud_mcp.main import cli


@pytest.fixture
def runner():
    return CliRunner()


def test_version(runner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "cloud-mcp" in result.output


def test_tools_lists_every_tool(runner):
    result = runner.invoke(cli, ["tools"], env={"COLUMNS": "200"})

    assert result.exit_code == 0
    for name in ("check_credits", "get_recent_usage", "generate_text", "generate_image"):
        assert name in result.output


def test_call_prints_result(runner):
    result = runner.invoke(cli, ["call", "check_credits", "--args", '{"includeTransactions": true, "limit": 2}'])

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["balance"] == 10000
    assert [t["id"] for t in payload["transactions"]] == ["tx-1", "tx-2"]


def test_call_plain_text_tool(runner):
    result = runner.invoke(cli, ["call", "generate_text", "--args", '{"prompt": "ping", "model": "gpt-4o-mini"}'])

    assert result.exit_code == 0
    assert result.output.startswith("[GPT-4o-mini Mock Response]")


def test_call_unknown_tool_fails(runner):
    result = runner.invoke(cli, ["call", "nope"])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_call_invalid_arguments_fail(runner):
    result = runner.invoke(cli, ["call", "get_recent_usage", "--args", '{"limit": 51}'])

    assert result.exit_code == 1
    assert "Invalid arguments" in result.output


def test_call_bad_json_fails(runner):
    result = runner.invoke(cli, ["call", "check_credits", "--args", "{oops"])

    assert result.exit_code == 1
    assert "Invalid JSON" in result.output


def test_serve_applies_options(runner, tmp_path):
    with patch("cloud_mcp.main.run") as run, patch("cloud_mcp.main.setup_logging"):
        result = runner.invoke(
            cli,
            [
                "serve",
                "--mode",
                "proxy",
                "--target",
                "http://downstream.test/api/mcp",
                "--port",
                "9001",
                "--timeout",
                "15",
                "--config",
                str(tmp_path / "config.yaml"),
            ],
        )

    assert result.exit_code == 0, result.output
    config = run.call_args.args[0]
    assert config.get_mode() == "proxy"
    assert config.get_target_url() == "http://downstream.test/api/mcp"
    assert config.get_port() == 9001
    assert config.get_request_timeout() == 15.0
