"""State of the analytics panel shown by a view."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from concall_viewer.domain.models.analytics_update import AnalyticsUpdate, DataUpdate

if TYPE_CHECKING:
    from concall_viewer.domain.contracts.analytics_store import AnalyticsStoreProtocol
    from concall_viewer.domain.models.analytics_snapshot import AnalyticsSnapshot


@dataclass(frozen=True)
class AnalyticsPanelState:
    """What the analytics panel renders.

    A resident snapshot always wins over an error: once data has been shown,
    later failures stay invisible.
    """

    snapshot: AnalyticsSnapshot | None = None
    error: str | None = None
    loading: bool = True

    @property
    def show_loading(self) -> bool:
        """Spinner only while nothing at all is resident."""
        return self.loading and self.snapshot is None

    @property
    def show_error(self) -> bool:
        """Error only while no snapshot is resident."""
        return self.error is not None and self.snapshot is None

    @classmethod
    def from_update(cls, update: AnalyticsUpdate) -> AnalyticsPanelState:
        """Derive panel state from a store update."""
        if isinstance(update, DataUpdate):
            return cls(snapshot=update.snapshot, loading=False)
        return cls(snapshot=update.snapshot, error=update.error.message, loading=False)

    @classmethod
    def from_store(cls, store: AnalyticsStoreProtocol) -> AnalyticsPanelState:
        """Derive panel state from whatever the store holds right now."""
        if store.snapshot is None and store.last_error is None:
            return cls()
        return cls(
            snapshot=store.snapshot,
            error=store.last_error.message if store.last_error else None,
            loading=False,
        )
