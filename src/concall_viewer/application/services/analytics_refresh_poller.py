"""Periodic refresh of the analytics snapshot."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from concall_viewer.domain.contracts.analytics_poller import AnalyticsPollerProtocol

if TYPE_CHECKING:
    from concall_viewer.application.services.analytics_sync_store import AnalyticsSyncStore

logger = logging.getLogger(__name__)


class AnalyticsRefreshPoller(AnalyticsPollerProtocol):
    """Refreshes the shared analytics snapshot on a fixed interval.

    Complements the push stream for APIs that do not stream every counter.
    """

    def __init__(self, store: AnalyticsSyncStore, interval_seconds: float) -> None:
        """Initialize the poller.

        Args:
            store: Store whose snapshot is refreshed.
            interval_seconds: Seconds between refreshes; 0 or less disables polling.
        """
        self.store = store
        self.interval_seconds = interval_seconds
        self._task: asyncio.Task | None = None

    @property
    def enabled(self) -> bool:
        """True if polling is configured."""
        return self.interval_seconds > 0

    async def start(self) -> None:
        """Start the poller."""
        if not self.enabled:
            logger.info("Analytics refresh poller disabled")
            return

        if self._task is not None and not self._task.done():
            logger.warning("Analytics refresh poller already running")
            return

        self._task = asyncio.create_task(self._poll_loop())
        logger.info(f"Started analytics refresh poller (every {self.interval_seconds}s)")

    async def stop(self) -> None:
        """Stop the poller."""
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                logger.info("Analytics refresh poller cancelled")
            logger.info("Stopped analytics refresh poller")
        self._task = None

    async def _poll_loop(self) -> None:
        """Main polling loop."""
        try:
            while True:
                await asyncio.sleep(self.interval_seconds)
                await self.poll_once()
        except asyncio.CancelledError:
            logger.info("Analytics refresh poller cancelled")
            raise

    async def poll_once(self) -> None:
        """Refresh the snapshot once; failures are reported by the store."""
        snapshot = await self.store.refresh()
        logger.debug(
            f"Analytics refreshed: total_visits={snapshot.total_visits if snapshot else 'n/a'}"
        )
