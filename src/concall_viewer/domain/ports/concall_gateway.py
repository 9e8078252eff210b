"""Concall gateway port."""

from typing import Protocol

from concall_viewer.domain.models.analytics_snapshot import AnalyticsSnapshot
from concall_viewer.domain.models.concall_page import ConcallPage


class ConcallGateway(Protocol):
    """Port for the remote concall API.

    Implementations raise ``GatewayError`` subclasses on failure.
    """

    async def list_page(self, page: int, limit: int | None = None) -> ConcallPage:
        """Get one page of all concall summaries."""
        ...

    async def search_page(self, name: str, page: int, limit: int | None = None) -> ConcallPage:
        """Get one page of concall summaries matching a company name."""
        ...

    async def fetch_analytics(self) -> AnalyticsSnapshot:
        """Get the current analytics snapshot."""
        ...
