"""Connection state of the analytics stream."""

from enum import Enum


class ConnectionState(Enum):
    """Lifecycle states of the persistent analytics connection."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    OPEN = "open"
