"""Application services."""

from concall_viewer.application.services.analytics_refresh_poller import AnalyticsRefreshPoller
from concall_viewer.application.services.analytics_stream import AnalyticsStreamSupervisor
from concall_viewer.application.services.analytics_sync_store import AnalyticsSyncStore
from concall_viewer.application.services.page_query_controller import (
    PageQueryController,
    total_pages_for,
)
from concall_viewer.application.services.single_flight import SingleFlight

__all__ = [
    "AnalyticsRefreshPoller",
    "AnalyticsStreamSupervisor",
    "AnalyticsSyncStore",
    "PageQueryController",
    "SingleFlight",
    "total_pages_for",
]
