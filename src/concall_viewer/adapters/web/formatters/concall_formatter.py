"""Formatting of concalls, pagination and analytics for display."""

from typing import Any

from concall_viewer.adapters.config.app_config import AppConfig
from concall_viewer.adapters.web.state.analytics_panel_state import AnalyticsPanelState
from concall_viewer.domain.models.concall_summary import ConcallSummary
from concall_viewer.domain.models.page_query_state import PageQueryState

NO_GUIDANCE_TEXT = "No guidance provided"


class ConcallFormatter:
    """Turns listing and analytics state into template data."""

    def __init__(self, config: AppConfig) -> None:
        """Initialize the formatter.

        Args:
            config: Application configuration with title settings.
        """
        self.config = config

    def format_guidance(self, concall: ConcallSummary) -> str:
        """Guidance text, or a placeholder for the "NA" sentinel."""
        return concall.guidance if concall.has_guidance else NO_GUIDANCE_TEXT

    def guidance_class(self, concall: ConcallSummary) -> str:
        """CSS class for the guidance paragraph."""
        return "guidance-text" if concall.has_guidance else "guidance-text no-guidance"

    def empty_message(self, state: PageQueryState) -> str:
        """Message shown when a loaded page has no concalls."""
        if state.is_searching:
            return f'No results found for "{state.search_term}"'
        return "No concalls available at the moment"

    def results_header(self, state: PageQueryState) -> str:
        """Header above search results, e.g. 'Found 3 results for "Acme"'."""
        if not state.is_searching:
            return ""
        plural = "" if state.total_count == 1 else "s"
        return f'Found {state.total_count} result{plural} for "{state.search_term}"'

    def pagination_info(self, state: PageQueryState) -> str:
        """Pagination summary, e.g. 'Page 1 of 3 (25 total)'."""
        return f"Page {state.current_page} of {state.total_pages} ({state.total_count} total)"

    @staticmethod
    def format_count(value: int | None) -> str:
        """Thousands-separated counter, 0 when missing."""
        return f"{value or 0:,}"

    def format_concall(self, concall: ConcallSummary) -> dict[str, str]:
        """Template data for one concall card."""
        return {
            "name": concall.name,
            "date": concall.date,
            "guidance": self.format_guidance(concall),
            "guidance_class": self.guidance_class(concall),
        }

    def format_analytics(self, panel: AnalyticsPanelState) -> dict[str, Any]:
        """Template data for the analytics panel."""
        snapshot = panel.snapshot
        return {
            "analytics_loading": panel.show_loading,
            "analytics_error": panel.error if panel.show_error else "",
            "has_analytics_error": panel.show_error,
            "total_visits": self.format_count(snapshot.total_visits if snapshot else 0),
            "has_unique_users": snapshot is not None and snapshot.unique_users is not None,
            "unique_users": self.format_count(snapshot.unique_users if snapshot else 0),
        }

    def build_assigns(
        self, query: PageQueryState, panel: AnalyticsPanelState, search_input: str = ""
    ) -> dict[str, Any]:
        """Build all template variables for the concalls page."""
        show_list = not query.loading and bool(query.items)
        return {
            "title": self.config.title,
            "subtitle": self.config.subtitle,
            "search_input": search_input,
            "is_search_mode": query.is_searching,
            "search_term": query.search_term,
            "loading": query.loading,
            "has_error": query.error is not None,
            "error": query.error.message if query.error else "",
            "is_empty": query.is_empty,
            "empty_message": self.empty_message(query),
            "results_header": self.results_header(query),
            "concalls": [self.format_concall(c) for c in query.items],
            "show_pagination": show_list,
            "pagination_info": self.pagination_info(query),
            "has_previous": query.has_previous,
            "has_next": query.has_next,
            **self.format_analytics(panel),
        }
