"""Concalls LiveView state dataclass."""

from dataclasses import dataclass, field

from concall_viewer.adapters.web.state.analytics_panel_state import AnalyticsPanelState
from concall_viewer.domain.contracts.page_query_controller import PageQueryControllerProtocol
from concall_viewer.domain.models.analytics_update import SubscriptionToken
from concall_viewer.domain.models.page_query_state import PageQueryState


@dataclass
class ConcallsState:
    """State for the concalls LiveView."""

    query: PageQueryState = field(default_factory=PageQueryState)
    analytics: AnalyticsPanelState = field(default_factory=AnalyticsPanelState)
    search_input: str = ""
    # Per-connection handles, not rendered.
    controller: PageQueryControllerProtocol | None = None
    subscription: SubscriptionToken | None = None
    topic: str = ""
