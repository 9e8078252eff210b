"""Protocol for a paginated concall listing controller."""

from collections.abc import Callable
from typing import Protocol

from concall_viewer.domain.models.page_query_state import PageQueryState


class PageQueryControllerProtocol(Protocol):
    """Protocol for driving one paginated, optionally filtered listing."""

    @property
    def state(self) -> PageQueryState:
        """Current listing state."""
        ...

    async def load_page(self, page: int, search_term: str = "") -> None:
        """Load a page, searching when the term is not blank."""
        ...

    async def change_page(self, page: int) -> bool:
        """Go to an absolute page; returns False if it is out of range."""
        ...

    async def next_page(self) -> bool:
        """Go to the next page."""
        ...

    async def previous_page(self) -> bool:
        """Go to the previous page."""
        ...

    async def search(self, term: str) -> None:
        """Search by company name; a blank term clears the search."""
        ...

    async def clear_search(self) -> None:
        """Drop the search term and show the first unfiltered page."""
        ...


PageQueryControllerFactory = Callable[[], PageQueryControllerProtocol]
