"""Domain layer - core models, errors and ports."""

from concall_viewer.domain.errors import (
    ConcallViewerError,
    GatewayError,
    MalformedResponseError,
    StreamConnectionError,
    TransportError,
)
from concall_viewer.domain.models import (
    AnalyticsSnapshot,
    ConcallPage,
    ConcallSummary,
    PageQueryState,
)
from concall_viewer.domain.ports import (
    AnalyticsStreamConnector,
    ConcallGateway,
    DisplayAdapter,
)

__all__ = [
    "AnalyticsSnapshot",
    "AnalyticsStreamConnector",
    "ConcallGateway",
    "ConcallPage",
    "ConcallSummary",
    "ConcallViewerError",
    "DisplayAdapter",
    "GatewayError",
    "MalformedResponseError",
    "PageQueryState",
    "StreamConnectionError",
    "TransportError",
]
