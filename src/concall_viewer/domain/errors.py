"""Error taxonomy shared by gateway, store and controller."""


class ConcallViewerError(Exception):
    """Base class for all concall viewer errors."""


class GatewayError(ConcallViewerError):
    """A remote call failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize the error.

        Args:
            message: User-facing error message.
            status_code: HTTP status code, if the failure came with one.
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TransportError(GatewayError):
    """Network unreachable, timeout, or non-2xx HTTP status."""


class MalformedResponseError(GatewayError):
    """Response body could not be parsed into the expected shape."""


class StreamConnectionError(ConcallViewerError):
    """The analytics stream could not be opened or broke while reading."""
