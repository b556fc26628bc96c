"""
Transparent proxy for MCP requests.

This module forwards every request on the MCP path to one downstream URL and
relays the answer back, streaming event-stream responses as they arrive.
"""

import asyncio
import logging
from typing import Mapping, Optional

import aiohttp
from aiohttp import web
from multidict import CIMultiDict

logger = logging.getLogger(__name__)

HOP_REQUEST_HEADERS = frozenset({"host", "connection", "content-length"})
# aiohttp frames the relayed body itself
FRAMING_RESPONSE_HEADERS = frozenset({"connection", "keep-alive", "transfer-encoding", "content-length"})
NO_BODY_METHODS = frozenset({"GET", "HEAD"})
EVENT_STREAM = "text/event-stream"


def filter_request_headers(headers: Mapping[str, str]) -> CIMultiDict:
    """Copy inbound headers, dropping host, connection and content-length."""
    forwarded = CIMultiDict()
    for key, value in headers.items():
        if key.lower() not in HOP_REQUEST_HEADERS:
            forwarded.add(key, value)
    return forwarded


def filter_response_headers(headers: Mapping[str, str]) -> CIMultiDict:
    relayed = CIMultiDict()
    for key, value in headers.items():
        if key.lower() not in FRAMING_RESPONSE_HEADERS:
            relayed.add(key, value)
    return relayed


def is_event_stream(content_type: Optional[str]) -> bool:
    return bool(content_type) and EVENT_STREAM in content_type.lower()


class ProxyDispatcher:
    """Forwards requests to a fixed downstream address."""

    def __init__(self, target_url: str, timeout: float = 60.0, session: Optional[aiohttp.ClientSession] = None):
        """
        Initialize the dispatcher.

        Args:
            target_url: Downstream URL every request is sent to
            timeout: Seconds allowed for one forwarded exchange, streaming included
            session: Client session to use, or None to create one on first use
        """
        self.target_url = target_url
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(auto_decompress=False)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the client session if the dispatcher created it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()

    async def handle(self, request: web.Request) -> web.StreamResponse:
        """
        Forward one request and relay the downstream response.

        Args:
            request: The inbound request

        Returns:
            The downstream response, or a 502 error envelope if the downstream
            could not be reached
        """
        headers = filter_request_headers(request.headers)
        body = None
        if request.method not in NO_BODY_METHODS:
            body = await request.text()

        logger.info(f"Proxying {request.method} {request.path} to {self.target_url}")
        try:
            async with self._get_session().request(
                request.method,
                self.target_url,
                headers=headers,
                data=body,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                allow_redirects=False,
                skip_auto_headers=("Content-Type",),
            ) as downstream:
                response_headers = filter_response_headers(downstream.headers)
                if is_event_stream(downstream.headers.get("Content-Type")):
                    return await self._relay_stream(request, downstream, response_headers)

                payload = await downstream.read()
                return web.Response(
                    body=payload,
                    status=downstream.status,
                    reason=downstream.reason,
                    headers=response_headers,
                )
        except asyncio.TimeoutError:
            logger.error(f"Proxy error: {self.target_url} did not answer within {self.timeout} seconds")
            return self.error_response(f"Request timed out after {self.timeout} seconds")
        except aiohttp.ClientError as e:
            logger.error(f"Proxy error: {e}")
            return self.error_response(str(e) or "Failed to proxy request")

    async def _relay_stream(
        self, request: web.Request, downstream: aiohttp.ClientResponse, headers: CIMultiDict
    ) -> web.StreamResponse:
        response = web.StreamResponse(status=downstream.status, reason=downstream.reason, headers=headers)
        await response.prepare(request)

        try:
            async for chunk in downstream.content.iter_any():
                await response.write(chunk)
        except ConnectionResetError:
            logger.info("Client disconnected from event stream")
            return response
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            # Headers are already sent; the client sees a truncated stream.
            logger.warning(f"Event stream from {self.target_url} ended early: {e!r}")

        await response.write_eof()
        return response

    def error_response(self, message: str) -> web.Response:
        return web.json_response(
            {"error": "proxy_error", "message": message, "target": self.target_url},
            status=502,
        )
