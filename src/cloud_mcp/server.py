"""
HTTP entry points for the MCP path.

Two deployment strategies serve the same path: ``local`` answers MCP
JSON-RPC requests with the demo tools, ``proxy`` forwards everything to a
downstream server. Exactly one is chosen when the application is built.
"""

import asyncio
import json
import logging
from typing import Optional

import aiohttp
from aiohttp import web

from cloud_mcp.config import Config
from cloud_mcp.mcp.proxy import ProxyDispatcher
from cloud_mcp.mcp.tools.demo import create_demo_registry
from cloud_mcp.mcp.tools.registry import ToolRegistry
from cloud_mcp.mcp.tools.service import INTERNAL_ERROR, PARSE_ERROR, ToolService

logger = logging.getLogger(__name__)

SERVICE_KEY = web.AppKey("tool_service", ToolService)
DISPATCHER_KEY = web.AppKey("proxy_dispatcher", ProxyDispatcher)
TIMEOUT_KEY = web.AppKey("request_timeout", float)


async def handle_rpc(request: web.Request) -> web.Response:
    """Answer a JSON-RPC message posted to the MCP path."""
    service = request.app[SERVICE_KEY]
    timeout = request.app[TIMEOUT_KEY]

    try:
        message = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning(f"Rejected unparseable request body: {e}")
        return web.json_response(service.formatter.format_error(None, PARSE_ERROR, "Parse error"), status=400)

    try:
        response = await asyncio.wait_for(service.handle_message(message), timeout)
    except asyncio.TimeoutError:
        logger.error(f"Request timed out after {timeout} seconds")
        error = service.formatter.format_error(
            _request_id(message), INTERNAL_ERROR, f"Request timed out after {timeout} seconds"
        )
        return web.json_response(error, status=504)
    except Exception as e:
        logger.exception(f"Unhandled error answering request: {e}")
        error = service.formatter.format_error(_request_id(message), INTERNAL_ERROR, "Internal error")
        return web.json_response(error, status=500)

    if response is None:
        return web.Response(status=202)
    return web.json_response(response)


async def handle_method_not_allowed(request: web.Request) -> web.Response:
    error = request.app[SERVICE_KEY].formatter.format_error(None, -32000, "Method not allowed.")
    return web.json_response(error, status=405, headers={"Allow": "POST"})


def _request_id(message):
    return message.get("id") if isinstance(message, dict) else None


def create_local_app(config: Config, registry: Optional[ToolRegistry] = None) -> web.Application:
    """
    Build the application that runs the tools in-process.

    Args:
        config: Server configuration
        registry: Tools to serve; defaults to the demo tools

    Returns:
        The aiohttp application
    """
    app = web.Application()
    app[SERVICE_KEY] = ToolService(registry if registry is not None else create_demo_registry())
    app[TIMEOUT_KEY] = config.get_request_timeout()

    path = config.get("path")
    app.router.add_post(path, handle_rpc)
    app.router.add_get(path, handle_method_not_allowed)
    app.router.add_delete(path, handle_method_not_allowed)
    return app


def create_proxy_app(config: Config, session: Optional[aiohttp.ClientSession] = None) -> web.Application:
    """
    Build the application that forwards every request downstream.

    Args:
        config: Server configuration
        session: Client session for outbound requests; one is created if omitted

    Returns:
        The aiohttp application
    """
    dispatcher = ProxyDispatcher(config.get_target_url(), config.get_request_timeout(), session)

    async def close_dispatcher(app: web.Application) -> None:
        await app[DISPATCHER_KEY].close()

    app = web.Application()
    app[DISPATCHER_KEY] = dispatcher
    app.on_cleanup.append(close_dispatcher)

    path = config.get("path")
    app.router.add_get(path, dispatcher.handle, allow_head=False)
    app.router.add_post(path, dispatcher.handle)
    app.router.add_delete(path, dispatcher.handle)
    return app


def create_app(config: Config) -> web.Application:
    """Build the application for the configured mode."""
    mode = config.get_mode()
    logger.info(f"Starting in {mode} mode")
    if mode == "proxy":
        logger.info(f"Forwarding {config.get('path')} to {config.get_target_url()}")
        return create_proxy_app(config)
    return create_local_app(config)


def run(config: Config) -> None:
    """Serve until interrupted."""
    web.run_app(
        create_app(config),
        host=config.get("host"),
        port=config.get_port(),
        handler_cancellation=True,
        print=None,
    )
