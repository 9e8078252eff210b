"""Derivation of the analytics WebSocket URL."""

from urllib.parse import urlsplit, urlunsplit

from concall_viewer.adapters.concall_api.constants import ANALYTICS_STREAM_PATH, LOCAL_STREAM_URL

_WS_SCHEMES = {"http": "ws", "https": "wss", "ws": "ws", "wss": "wss"}


def derive_stream_url(base_url: str, override: str | None = None, local: bool = False) -> str:
    """Build the analytics stream URL from the API origin.

    The scheme is swapped for its WebSocket counterpart (https -> wss,
    http -> ws) and the path replaced by the fixed stream path.

    Args:
        base_url: Any URL on the API origin, e.g. the API base URL.
        override: Explicit stream URL; wins over everything else.
        local: Use the local development server when no override is given.

    Returns:
        The WebSocket URL.
    """
    if override:
        return override
    if local:
        return LOCAL_STREAM_URL

    parts = urlsplit(base_url)
    scheme = _WS_SCHEMES.get(parts.scheme.lower())
    if scheme is None or not parts.netloc:
        raise ValueError(f"Cannot derive analytics stream URL from {base_url!r}")
    return urlunsplit((scheme, parts.netloc, ANALYTICS_STREAM_PATH, "", ""))
