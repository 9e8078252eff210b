"""Ports (interfaces) for the ports-and-adapters architecture."""

from concall_viewer.domain.ports.analytics_stream_connector import (
    AnalyticsStreamConnector,
    StreamConnection,
)
from concall_viewer.domain.ports.concall_gateway import ConcallGateway
from concall_viewer.domain.ports.display_adapter import DisplayAdapter

__all__ = [
    "AnalyticsStreamConnector",
    "ConcallGateway",
    "DisplayAdapter",
    "StreamConnection",
]
