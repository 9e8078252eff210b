"""State for the concalls LiveView."""

from concall_viewer.adapters.web.state.analytics_panel_state import AnalyticsPanelState
from concall_viewer.adapters.web.state.concalls_state import ConcallsState

__all__ = ["AnalyticsPanelState", "ConcallsState"]
