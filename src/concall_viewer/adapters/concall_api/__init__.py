"""Concall API adapters: HTTP gateway and analytics stream."""

from concall_viewer.adapters.concall_api.concall_api_gateway import ConcallApiGateway
from concall_viewer.adapters.concall_api.stream_endpoint import derive_stream_url
from concall_viewer.adapters.concall_api.websocket_connector import (
    AiohttpStreamConnection,
    AiohttpStreamConnector,
)

__all__ = [
    "AiohttpStreamConnection",
    "AiohttpStreamConnector",
    "ConcallApiGateway",
    "derive_stream_url",
]
