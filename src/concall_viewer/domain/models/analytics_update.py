"""Updates delivered to analytics listeners."""

from collections.abc import Callable
from dataclasses import dataclass

from concall_viewer.domain.models.analytics_snapshot import AnalyticsSnapshot
from concall_viewer.domain.models.error_info import ErrorInfo


@dataclass(frozen=True)
class DataUpdate:
    """A new snapshot is resident."""

    snapshot: AnalyticsSnapshot


@dataclass(frozen=True)
class ErrorUpdate:
    """A fetch failed.

    ``snapshot`` carries the last resident snapshot, if any, so that views
    showing data can keep showing it.
    """

    error: ErrorInfo
    snapshot: AnalyticsSnapshot | None = None


AnalyticsUpdate = DataUpdate | ErrorUpdate
Listener = Callable[[AnalyticsUpdate], None]


@dataclass(frozen=True)
class SubscriptionToken:
    """Handle returned by subscribe, used to unsubscribe."""

    id: int
