"""Contracts (protocols) between application services and adapters."""

from concall_viewer.domain.contracts.analytics_poller import AnalyticsPollerProtocol
from concall_viewer.domain.contracts.analytics_store import AnalyticsStoreProtocol
from concall_viewer.domain.contracts.page_query_controller import (
    PageQueryControllerFactory,
    PageQueryControllerProtocol,
)
from concall_viewer.domain.contracts.state_broadcaster import StateBroadcasterProtocol

__all__ = [
    "AnalyticsPollerProtocol",
    "AnalyticsStoreProtocol",
    "PageQueryControllerFactory",
    "PageQueryControllerProtocol",
    "StateBroadcasterProtocol",
]
