"""Protocol for periodic analytics refresh."""

from typing import Protocol


class AnalyticsPollerProtocol(Protocol):
    """Protocol for refreshing the analytics snapshot on an interval."""

    async def start(self) -> None:
        """Start the poller."""
        ...

    async def stop(self) -> None:
        """Stop the poller."""
        ...
