"""Domain models for the concall viewer."""

from concall_viewer.domain.models.analytics_snapshot import AnalyticsSnapshot, AnalyticsUpdateFrame
from concall_viewer.domain.models.analytics_update import (
    AnalyticsUpdate,
    DataUpdate,
    ErrorUpdate,
    Listener,
    SubscriptionToken,
)
from concall_viewer.domain.models.concall_page import ConcallPage, PageMeta
from concall_viewer.domain.models.concall_summary import NO_GUIDANCE, ConcallSummary
from concall_viewer.domain.models.connection_state import ConnectionState
from concall_viewer.domain.models.error_info import ErrorInfo
from concall_viewer.domain.models.page_query_state import (
    DEFAULT_PAGE_SIZE,
    PageQueryState,
    QueryMode,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "NO_GUIDANCE",
    "AnalyticsSnapshot",
    "AnalyticsUpdate",
    "AnalyticsUpdateFrame",
    "ConcallPage",
    "ConcallSummary",
    "ConnectionState",
    "DataUpdate",
    "ErrorInfo",
    "ErrorUpdate",
    "Listener",
    "PageMeta",
    "PageQueryState",
    "QueryMode",
    "SubscriptionToken",
]
