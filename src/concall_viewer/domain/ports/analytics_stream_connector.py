"""Analytics stream connector port."""

from collections.abc import AsyncIterator
from typing import Protocol


class StreamConnection(Protocol):
    """An open persistent connection delivering text frames.

    Iteration ends when the remote side closes the connection. Transport
    failures raise ``StreamConnectionError``.
    """

    def __aiter__(self) -> AsyncIterator[str]:
        """Iterate over incoming text frames."""
        ...

    async def close(self) -> None:
        """Close the connection."""
        ...


class AnalyticsStreamConnector(Protocol):
    """Port for opening the analytics push channel."""

    async def open(self) -> StreamConnection:
        """Open a new connection, raising ``StreamConnectionError`` on failure."""
        ...
