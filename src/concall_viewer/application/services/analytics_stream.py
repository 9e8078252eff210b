"""Supervisor for the persistent analytics connection."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from concall_viewer.domain.errors import StreamConnectionError
from concall_viewer.domain.models.connection_state import ConnectionState
from concall_viewer.domain.ports.analytics_stream_connector import (
    AnalyticsStreamConnector,  # noqa: TC001 - Runtime dependency: used in __init__ signature
    StreamConnection,
)

logger = logging.getLogger(__name__)

FrameHandler = Callable[[str], None]
Sleep = Callable[[float], Awaitable[None]]


class AnalyticsStreamSupervisor:
    """Keeps one analytics connection open, reconnecting with linear backoff.

    State machine: DISCONNECTED -> CONNECTING -> OPEN -> DISCONNECTED. After a
    disconnect the n-th consecutive retry waits ``reconnect_base_delay * n``
    seconds. Once ``max_reconnect_attempts`` retries have failed the
    supervisor stays DISCONNECTED for good.
    """

    def __init__(
        self,
        connector: AnalyticsStreamConnector,
        on_frame: FrameHandler,
        max_reconnect_attempts: int = 5,
        reconnect_base_delay: float = 3.0,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize the supervisor.

        Args:
            connector: Opens new connections.
            on_frame: Called with every received text frame.
            max_reconnect_attempts: Retries allowed before giving up.
            reconnect_base_delay: Delay unit in seconds for the linear backoff.
            sleep: Coroutine function used to wait between retries.
        """
        self.connector = connector
        self.on_frame = on_frame
        self.max_reconnect_attempts = max_reconnect_attempts
        self.reconnect_base_delay = reconnect_base_delay
        self.reconnect_attempt = 0
        self._sleep = sleep
        self._state = ConnectionState.DISCONNECTED
        self._exhausted = False
        self._connection: StreamConnection | None = None
        self._task: asyncio.Task | None = None

    @property
    def state(self) -> ConnectionState:
        """Current connection state."""
        return self._state

    @property
    def exhausted(self) -> bool:
        """True once all reconnect attempts have been used up."""
        return self._exhausted

    @property
    def running(self) -> bool:
        """True while the supervisor task is alive."""
        return self._task is not None and not self._task.done()

    def next_delay(self) -> float:
        """Delay before the next reconnect attempt."""
        return self.reconnect_base_delay * (self.reconnect_attempt + 1)

    def connect(self) -> None:
        """Start connecting unless a connection is already open or being opened."""
        if self.running:
            logger.debug(f"Analytics stream already {self._state.value}, ignoring connect")
            return
        if self._exhausted:
            logger.debug("Analytics stream gave up reconnecting, ignoring connect")
            return
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Close the connection and stop reconnecting."""
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                logger.info("Analytics stream supervisor cancelled")
        self._task = None
        await self._close_connection()
        self._state = ConnectionState.DISCONNECTED

    async def _run(self) -> None:
        while True:
            await self._connect_and_read()
            self._state = ConnectionState.DISCONNECTED

            if self.reconnect_attempt >= self.max_reconnect_attempts:
                self._exhausted = True
                logger.warning(
                    f"Analytics stream gave up after {self.reconnect_attempt} reconnect attempts; "
                    "live updates disabled"
                )
                return

            delay = self.next_delay()
            self.reconnect_attempt += 1
            logger.info(
                f"Reconnecting analytics stream in {delay:.1f}s "
                f"(attempt {self.reconnect_attempt}/{self.max_reconnect_attempts})"
            )
            await self._sleep(delay)

    async def _connect_and_read(self) -> None:
        self._state = ConnectionState.CONNECTING
        try:
            self._connection = await self.connector.open()
        except StreamConnectionError as e:
            logger.warning(f"Failed to open analytics stream: {e}")
            return
        except Exception as e:
            logger.error(f"Unexpected error opening analytics stream: {e}", exc_info=True)
            return

        self._state = ConnectionState.OPEN
        self.reconnect_attempt = 0
        logger.info("Analytics stream connected")

        try:
            async for frame in self._connection:
                self.on_frame(frame)
            logger.info("Analytics stream closed by server")
        except StreamConnectionError as e:
            logger.warning(f"Analytics stream broke: {e}")
        except Exception as e:
            logger.error(f"Unexpected error reading analytics stream: {e}", exc_info=True)
        finally:
            await self._close_connection()

    async def _close_connection(self) -> None:
        connection, self._connection = self._connection, None
        if connection is not None:
            try:
                await connection.close()
            except Exception as e:
                logger.debug(f"Error closing analytics stream: {e}")
