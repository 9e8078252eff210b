"""Controller for a paginated, searchable concall listing."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from concall_viewer.domain.contracts.page_query_controller import PageQueryControllerProtocol
from concall_viewer.domain.errors import GatewayError
from concall_viewer.domain.models.error_info import ErrorInfo
from concall_viewer.domain.models.page_query_state import (
    DEFAULT_PAGE_SIZE,
    PageQueryState,
    QueryMode,
)

if TYPE_CHECKING:
    from concall_viewer.domain.models.concall_page import ConcallPage
    from concall_viewer.domain.ports.concall_gateway import ConcallGateway

logger = logging.getLogger(__name__)


def total_pages_for(total: int, limit: int) -> int:
    """Number of pages needed for total items, never less than one."""
    if limit <= 0:
        return 1
    return max(1, -(-total // limit))


class PageQueryController(PageQueryControllerProtocol):
    """Drives one listing view: current page, search term and results.

    Each load bumps a generation counter; a response that arrives after a
    newer load was issued is discarded.
    """

    def __init__(self, gateway: ConcallGateway, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        """Initialize the controller.

        Args:
            gateway: Gateway for list and search calls.
            page_size: Number of concalls per page.
        """
        self.gateway = gateway
        self.page_size = page_size
        self._state = PageQueryState(page_size=page_size)
        self._generation = 0

    @property
    def state(self) -> PageQueryState:
        """Current listing state."""
        return self._state

    async def load_page(self, page: int, search_term: str = "") -> None:
        """Load a page, searching when the trimmed term is not blank.

        On failure the error is recorded and the listing is emptied.

        Args:
            page: 1-based page number.
            search_term: Company name filter; blank means no filter.
        """
        self._generation += 1
        generation = self._generation
        term = search_term.strip()
        self._state = replace(self._state, loading=True, error=None)

        try:
            if term:
                result = await self.gateway.search_page(term, page, self.page_size)
            else:
                result = await self.gateway.list_page(page, self.page_size)
            if generation != self._generation:
                logger.debug(f"Discarding superseded response for page {page}")
                return
            self._apply_result(result, term)
        except GatewayError as e:
            if generation != self._generation:
                logger.debug(f"Discarding superseded failure for page {page}: {e.message}")
                return
            logger.error(f"Failed to load concalls (page={page}, term={term!r}): {e.message}")
            self._state = replace(self._state, items=(), error=ErrorInfo.from_error(e))
        finally:
            if generation == self._generation:
                self._state = replace(self._state, loading=False)

    async def change_page(self, page: int) -> bool:
        """Go to an absolute page, keeping the current search term.

        Returns:
            False, without touching state, if the page is out of range.
        """
        if page < 1 or page > self._state.total_pages:
            logger.debug(f"Ignoring page change to {page} (1..{self._state.total_pages})")
            return False
        await self.load_page(page, self._state.search_term)
        return True

    async def next_page(self) -> bool:
        """Go to the next page."""
        return await self.change_page(self._state.current_page + 1)

    async def previous_page(self) -> bool:
        """Go to the previous page."""
        return await self.change_page(self._state.current_page - 1)

    async def search(self, term: str) -> None:
        """Search by company name; a blank term clears the search."""
        trimmed = term.strip()
        if not trimmed:
            await self.clear_search()
            return
        await self.load_page(1, trimmed)

    async def clear_search(self) -> None:
        """Drop the search term and show the first unfiltered page."""
        self._state = replace(self._state, search_term="", mode=QueryMode.LISTING)
        await self.load_page(1)

    def _apply_result(self, result: ConcallPage, term: str) -> None:
        meta = result.meta
        limit = meta.limit or self.page_size
        if meta.total_pages is not None and meta.total_pages >= 1:
            total_pages = meta.total_pages
        else:
            total_pages = total_pages_for(meta.total, limit)
        current_page = min(max(1, meta.page), total_pages)

        self._state = replace(
            self._state,
            items=tuple(result.data),
            current_page=current_page,
            total_pages=total_pages,
            total_count=max(0, meta.total),
            mode=QueryMode.SEARCHING if term else QueryMode.LISTING,
            search_term=term,
        )
        logger.debug(
            f"Loaded {len(result.data)} concalls (page {current_page}/{total_pages}, "
            f"total {meta.total}, term={term!r})"
        )
