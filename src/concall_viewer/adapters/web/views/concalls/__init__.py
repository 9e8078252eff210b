"""Concalls LiveView."""

from concall_viewer.adapters.web.views.concalls.concalls import (
    ConcallsLiveView,
    create_concalls_live_view,
)

__all__ = ["ConcallsLiveView", "create_concalls_live_view"]
