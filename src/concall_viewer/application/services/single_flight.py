"""Single-flight de-duplication of concurrent async calls."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Hashable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SingleFlight(Generic[T]):
    """Guarded in-flight slot per operation key.

    While a call for a key is pending, every further caller for that key is
    handed the same task instead of starting a new call. The slot is released
    when the call finishes (or earlier via ``forget``).
    """

    def __init__(self) -> None:
        """Initialize with no calls in flight."""
        self._calls: dict[Hashable, asyncio.Task[T]] = {}

    def in_flight(self, key: Hashable) -> bool:
        """Check whether a call for the key is pending."""
        return key in self._calls

    def join(self, key: Hashable) -> asyncio.Task[T] | None:
        """Get the pending task for the key, if any."""
        return self._calls.get(key)

    def do(self, key: Hashable, fn: Callable[[], Awaitable[T]]) -> tuple[asyncio.Task[T], bool]:
        """Run fn unless a call for the key is already pending.

        Args:
            key: Identity of the operation.
            fn: Coroutine function performing the call.

        Returns:
            The task shared by all callers, and whether this call created it.
        """
        existing = self._calls.get(key)
        if existing is not None:
            logger.debug(f"Joining in-flight call for {key!r}")
            return existing, False

        task = asyncio.ensure_future(self._run(key, fn))
        self._calls[key] = task
        return task, True

    def forget(self, key: Hashable) -> None:
        """Release the slot for the key so the next caller starts a new call."""
        self._calls.pop(key, None)

    async def _run(self, key: Hashable, fn: Callable[[], Awaitable[T]]) -> T:
        try:
            return await fn()
        finally:
            # Only release the slot if a newer call has not taken it already.
            if self._calls.get(key) is asyncio.current_task():
                del self._calls[key]
