"""Process-wide analytics cache shared by all views."""

from __future__ import annotations

import asyncio
import itertools
import json
import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from concall_viewer.application.services.analytics_stream import AnalyticsStreamSupervisor, Sleep
from concall_viewer.application.services.single_flight import SingleFlight
from concall_viewer.domain.contracts.analytics_store import AnalyticsStoreProtocol
from concall_viewer.domain.errors import GatewayError
from concall_viewer.domain.models.analytics_snapshot import AnalyticsSnapshot, AnalyticsUpdateFrame
from concall_viewer.domain.models.analytics_update import (
    AnalyticsUpdate,
    DataUpdate,
    ErrorUpdate,
    Listener,
    SubscriptionToken,
)
from concall_viewer.domain.models.connection_state import ConnectionState
from concall_viewer.domain.models.error_info import ErrorInfo

if TYPE_CHECKING:
    from concall_viewer.domain.ports.analytics_stream_connector import AnalyticsStreamConnector
    from concall_viewer.domain.ports.concall_gateway import ConcallGateway

logger = logging.getLogger(__name__)

FETCH_KEY = "analytics"


class AnalyticsSyncStore(AnalyticsStoreProtocol):
    """Single source of truth for the live analytics snapshot.

    Views register listeners with ``subscribe``. Resident data is handed to
    new listeners immediately, concurrent fetches are collapsed into one
    request, and frames pushed over the analytics stream replace the snapshot
    for every listener at once. Only the store itself writes its state.
    """

    def __init__(
        self,
        gateway: ConcallGateway,
        connector: AnalyticsStreamConnector | None = None,
        max_reconnect_attempts: int = 5,
        reconnect_base_delay: float = 3.0,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize the store.

        Args:
            gateway: Gateway used to fetch snapshots.
            connector: Opens the analytics stream; None disables live updates.
            max_reconnect_attempts: Stream retries before giving up.
            reconnect_base_delay: Delay unit in seconds for stream reconnects.
            sleep: Coroutine function used to wait between stream retries.
        """
        self.gateway = gateway
        self._snapshot: AnalyticsSnapshot | None = None
        self._last_error: ErrorInfo | None = None
        self._listeners: dict[SubscriptionToken, Listener] = {}
        self._token_ids = itertools.count(1)
        self._snapshot_generation = 0
        self._single_flight: SingleFlight[AnalyticsSnapshot] = SingleFlight()
        self._stream: AnalyticsStreamSupervisor | None = None
        if connector is not None:
            self._stream = AnalyticsStreamSupervisor(
                connector,
                self.handle_stream_message,
                max_reconnect_attempts=max_reconnect_attempts,
                reconnect_base_delay=reconnect_base_delay,
                sleep=sleep,
            )

    @property
    def snapshot(self) -> AnalyticsSnapshot | None:
        """The resident snapshot, if any."""
        return self._snapshot

    @property
    def last_error(self) -> ErrorInfo | None:
        """The error of the latest failed fetch, cleared by the next snapshot."""
        return self._last_error

    @property
    def fetch_in_flight(self) -> bool:
        """True while an analytics fetch is pending."""
        return self._single_flight.in_flight(FETCH_KEY)

    @property
    def listener_count(self) -> int:
        """Number of registered listeners."""
        return len(self._listeners)

    @property
    def connection_state(self) -> ConnectionState:
        """State of the analytics stream."""
        if self._stream is None:
            return ConnectionState.DISCONNECTED
        return self._stream.state

    @property
    def stream(self) -> AnalyticsStreamSupervisor | None:
        """The stream supervisor, if live updates are enabled."""
        return self._stream

    def subscribe(self, listener: Listener) -> SubscriptionToken:
        """Register a listener for snapshots and errors.

        If a snapshot or error is resident the listener receives it before
        this call returns. Otherwise the first subscriber starts the single
        shared fetch and later ones wait for it.

        Args:
            listener: Callback receiving DataUpdate or ErrorUpdate.

        Returns:
            Token to pass to unsubscribe.
        """
        token = SubscriptionToken(next(self._token_ids))
        self._listeners[token] = listener

        resident = self._resident_update()
        if resident is not None:
            self._deliver(token, listener, resident)
        elif not self.fetch_in_flight:
            self._start_fetch()

        logger.debug(f"Analytics listener {token.id} subscribed ({len(self._listeners)} total)")
        return token

    def unsubscribe(self, token: SubscriptionToken) -> None:
        """Remove a listener. Unknown or already removed tokens are ignored."""
        if self._listeners.pop(token, None) is not None:
            logger.debug(
                f"Analytics listener {token.id} unsubscribed ({len(self._listeners)} left)"
            )

    async def refresh(self) -> AnalyticsSnapshot | None:
        """Fetch a fresh snapshot, sharing any fetch already in flight.

        Returns:
            The resident snapshot after the fetch (the previous one if it failed).
        """
        task = self._start_fetch()
        try:
            return await asyncio.shield(task)
        except GatewayError:
            return self._snapshot

    async def start(self) -> None:
        """Open the analytics stream. Calling it again is a no-op."""
        if self._stream is None:
            logger.info("Analytics stream disabled, serving fetched snapshots only")
            return
        self._stream.connect()

    async def stop(self) -> None:
        """Close the analytics stream and wait for a pending fetch to settle."""
        if self._stream is not None:
            await self._stream.stop()
        pending = self._single_flight.join(FETCH_KEY)
        if pending is not None:
            pending.cancel()
            try:
                await pending
            except (asyncio.CancelledError, GatewayError):
                pass

    def handle_stream_message(self, frame: str | bytes) -> None:
        """Apply a frame pushed over the analytics stream.

        Frames that are not valid ``analytics_update`` messages are dropped.
        """
        try:
            payload = json.loads(frame)
        except (TypeError, ValueError) as e:
            logger.warning(f"Dropping non-JSON analytics frame: {e}")
            return

        if not isinstance(payload, dict) or payload.get("type") != "analytics_update":
            logger.debug(f"Ignoring analytics frame: {payload!r}")
            return

        try:
            update = AnalyticsUpdateFrame.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Dropping malformed analytics frame: {e.error_count()} error(s)")
            return

        logger.debug(f"Received analytics update: total_visits={update.total_visits}")
        self._apply_snapshot(update.to_snapshot())

    def _resident_update(self) -> AnalyticsUpdate | None:
        if self._snapshot is not None:
            return DataUpdate(self._snapshot)
        if self._last_error is not None:
            return ErrorUpdate(self._last_error)
        return None

    def _start_fetch(self) -> asyncio.Task[AnalyticsSnapshot]:
        task, created = self._single_flight.do(FETCH_KEY, self._fetch)
        if created:
            logger.info("Fetching analytics snapshot")
            # Failures are delivered to listeners; keep asyncio from reporting them.
            task.add_done_callback(_consume_exception)
        return task

    async def _fetch(self) -> AnalyticsSnapshot:
        generation = self._snapshot_generation
        try:
            snapshot = await self.gateway.fetch_analytics()
        except GatewayError as e:
            logger.error(f"Failed to fetch analytics: {e.message}")
            self._last_error = ErrorInfo.from_error(e)
            self._single_flight.forget(FETCH_KEY)
            self._broadcast(ErrorUpdate(self._last_error, self._snapshot))
            raise

        self._single_flight.forget(FETCH_KEY)
        if generation != self._snapshot_generation and self._snapshot is not None:
            # A pushed frame is newer than this response.
            logger.debug(
                f"Discarding fetched analytics superseded by stream "
                f"(total_visits={snapshot.total_visits})"
            )
            return self._snapshot
        self._apply_snapshot(snapshot)
        return snapshot

    def _apply_snapshot(self, snapshot: AnalyticsSnapshot) -> None:
        self._snapshot_generation += 1
        self._snapshot = snapshot
        self._last_error = None
        self._broadcast(DataUpdate(snapshot))

    def _broadcast(self, update: AnalyticsUpdate) -> None:
        # Copy: listeners may unsubscribe while being notified.
        for token, listener in list(self._listeners.items()):
            if token in self._listeners:
                self._deliver(token, listener, update)

    def _deliver(self, token: SubscriptionToken, listener: Listener, update: AnalyticsUpdate) -> None:
        try:
            listener(update)
        except Exception as e:
            logger.error(f"Analytics listener {token.id} failed: {e}", exc_info=True)


def _consume_exception(task: asyncio.Task) -> None:
    if not task.cancelled():
        task.exception()
