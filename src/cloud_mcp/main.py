"""
Command line entry point for cloud-mcp.
"""

import asyncio
import json
import logging
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import MODES, Config
from .mcp.tools.demo import create_demo_registry
from .mcp.tools.errors import ToolError
from .mcp.tools.service import ToolService
from .server import run
from .utils.log_config import setup_logging

console = Console()
log = logging.getLogger(__name__)

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, prog_name="cloud-mcp")
def cli():
    """Mock MCP tool server with a transparent proxy mode."""


@cli.command()
@click.option("--mode", type=click.Choice(MODES), default=None, help="Serve the demo tools or proxy downstream.")
@click.option("--host", default=None, help="Interface to bind.")
@click.option("--port", type=int, default=None, help="Port to listen on.")
@click.option("--target", default=None, help="Downstream URL used in proxy mode.")
@click.option("--timeout", type=float, default=None, help="Seconds allowed per request.")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="YAML configuration file.",
)
def serve(mode, host, port, target, timeout, config_file):
    """Run the MCP HTTP server."""
    config = Config(config_file)
    config.set("mode", mode)
    config.set("host", host)
    config.set("port", port)
    config.set("proxy_target_url", target)
    config.set("request_timeout", timeout)

    setup_logging(str(config.get("log_level", "INFO")))
    log.info(f"Listening on http://{config.get('host')}:{config.get_port()}{config.get('path')}")
    run(config)


@cli.command("tools")
def list_tools():
    """List the available tools and their arguments."""
    service = ToolService(create_demo_registry())

    table = Table(title="Available tools")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Arguments", style="green")

    for definition in service.get_tool_definitions():
        schema = definition["inputSchema"]
        required = set(schema.get("required", []))
        arguments = []
        for name, field in schema.get("properties", {}).items():
            marker = "*" if name in required else ""
            default = f" = {json.dumps(field['default'])}" if "default" in field else ""
            arguments.append(f"{name}{marker}: {field['type']}{default}")
        table.add_row(definition["name"], definition["description"], "\n".join(arguments))

    console.print(table)


@cli.command("call")
@click.argument("tool_name")
@click.option("--args", "raw_arguments", default="{}", help="Tool arguments as a JSON object.")
def call_tool(tool_name, raw_arguments):
    """Run one tool locally and print its result."""
    try:
        arguments = json.loads(raw_arguments)
    except json.JSONDecodeError as e:
        console.print(f"[bold red]Invalid JSON in --args:[/bold red] {escape(str(e))}")
        sys.exit(1)

    service = ToolService(create_demo_registry())
    try:
        result = asyncio.run(service.execute_tool(tool_name, arguments))
    except ToolError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(e.message)}")
        sys.exit(1)

    console.print(result.text, markup=False, highlight=False, soft_wrap=True)
    if result.is_error:
        sys.exit(1)


if __name__ == "__main__":
    cli()
