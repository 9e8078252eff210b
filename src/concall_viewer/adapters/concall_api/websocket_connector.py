"""aiohttp WebSocket connector for the analytics stream."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING

import aiohttp

from concall_viewer.adapters.concall_api.constants import STREAM_HEARTBEAT_SECONDS
from concall_viewer.domain.errors import StreamConnectionError
from concall_viewer.domain.ports.analytics_stream_connector import (
    AnalyticsStreamConnector,
    StreamConnection,
)

if TYPE_CHECKING:
    from aiohttp import ClientSession, ClientWebSocketResponse

logger = logging.getLogger(__name__)


class AiohttpStreamConnection(StreamConnection):
    """Open analytics WebSocket yielding text frames."""

    def __init__(self, ws: ClientWebSocketResponse) -> None:
        """Wrap an open aiohttp WebSocket."""
        self._ws = ws

    async def __aiter__(self) -> AsyncIterator[str]:
        """Yield text frames until the socket closes."""
        while True:
            try:
                msg = await self._ws.receive()
            except aiohttp.ClientError as e:
                raise StreamConnectionError(str(e)) from e

            if msg.type == aiohttp.WSMsgType.TEXT:
                yield msg.data
            elif msg.type == aiohttp.WSMsgType.BINARY:
                yield msg.data.decode("utf-8", errors="replace")
            elif msg.type == aiohttp.WSMsgType.ERROR:
                raise StreamConnectionError(f"WebSocket error: {self._ws.exception()}")
            elif msg.type in (
                aiohttp.WSMsgType.CLOSE,
                aiohttp.WSMsgType.CLOSING,
                aiohttp.WSMsgType.CLOSED,
            ):
                logger.debug(f"Analytics WebSocket closing (code {self._ws.close_code})")
                return

    async def close(self) -> None:
        """Close the WebSocket."""
        if not self._ws.closed:
            await self._ws.close()


class AiohttpStreamConnector(AnalyticsStreamConnector):
    """Opens analytics WebSockets on a shared aiohttp session."""

    def __init__(
        self,
        session: ClientSession,
        url: str,
        heartbeat_seconds: float = STREAM_HEARTBEAT_SECONDS,
    ) -> None:
        """Initialize the connector.

        Args:
            session: Shared aiohttp session.
            url: WebSocket URL of the analytics stream.
            heartbeat_seconds: Ping interval used to detect dead connections.
        """
        self._session = session
        self.url = url
        self.heartbeat_seconds = heartbeat_seconds

    async def open(self) -> AiohttpStreamConnection:
        """Open a new WebSocket to the analytics stream."""
        logger.info(f"Connecting to analytics stream at {self.url}")
        try:
            ws = await self._session.ws_connect(self.url, heartbeat=self.heartbeat_seconds)
        except (aiohttp.ClientError, TimeoutError) as e:
            raise StreamConnectionError(f"Could not connect to {self.url}: {e}") from e
        return AiohttpStreamConnection(ws)
