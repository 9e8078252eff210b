"""State of a paginated, optionally filtered concall listing."""

from dataclasses import dataclass, field
from enum import Enum

from concall_viewer.domain.models.concall_summary import ConcallSummary
from concall_viewer.domain.models.error_info import ErrorInfo

DEFAULT_PAGE_SIZE = 12


class QueryMode(Enum):
    """Whether the listing is filtered by a search term."""

    LISTING = "listing"
    SEARCHING = "searching"


@dataclass(frozen=True)
class PageQueryState:
    """Snapshot of one controller's listing state."""

    items: tuple[ConcallSummary, ...] = field(default_factory=tuple)
    current_page: int = 1
    total_pages: int = 1
    total_count: int = 0
    mode: QueryMode = QueryMode.LISTING
    search_term: str = ""
    loading: bool = False
    error: ErrorInfo | None = None
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def is_searching(self) -> bool:
        """True when the listing is filtered by a search term."""
        return self.mode is QueryMode.SEARCHING

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to show (not loading)."""
        return not self.loading and not self.items

    @property
    def has_previous(self) -> bool:
        """True when a previous page exists."""
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        """True when a next page exists."""
        return self.current_page < self.total_pages
