"""Paths and defaults of the concall API."""

LIST_CONCALLS_PATH = "/list_concalls"
FIND_CONCALLS_PATH = "/find_concalls"
ANALYTICS_PATH = "/analytics"
ANALYTICS_STREAM_PATH = "/ws/analytics"

# Local development API server, used for the stream when no URL is configured.
LOCAL_STREAM_URL = "ws://localhost:8080" + ANALYTICS_STREAM_PATH

# WebSocket ping interval in seconds.
STREAM_HEARTBEAT_SECONDS = 30.0

GENERIC_NETWORK_ERROR = "Network error"
