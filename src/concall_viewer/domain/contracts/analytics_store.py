"""Protocol for the shared analytics store."""

from typing import Protocol

from concall_viewer.domain.models.analytics_snapshot import AnalyticsSnapshot
from concall_viewer.domain.models.analytics_update import Listener, SubscriptionToken
from concall_viewer.domain.models.error_info import ErrorInfo


class AnalyticsStoreProtocol(Protocol):
    """Protocol for the process-wide analytics cache views subscribe to."""

    @property
    def snapshot(self) -> AnalyticsSnapshot | None:
        """The resident snapshot, if any."""
        ...

    @property
    def last_error(self) -> ErrorInfo | None:
        """The error of the latest failed fetch, if not superseded by data."""
        ...

    def subscribe(self, listener: Listener) -> SubscriptionToken:
        """Register a listener for snapshots and errors."""
        ...

    def unsubscribe(self, token: SubscriptionToken) -> None:
        """Remove a listener; safe to call more than once."""
        ...

    async def start(self) -> None:
        """Open the live update connection."""
        ...

    async def stop(self) -> None:
        """Close the live update connection."""
        ...
