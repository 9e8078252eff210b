"""Adapters layer - external system integrations."""

from concall_viewer.adapters.config import AppConfig
from concall_viewer.adapters.concall_api import (
    AiohttpStreamConnector,
    ConcallApiGateway,
)

__all__ = [
    "AiohttpStreamConnector",
    "AppConfig",
    "ConcallApiGateway",
]
