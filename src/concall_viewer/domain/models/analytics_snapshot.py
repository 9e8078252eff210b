"""Analytics snapshot domain model."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class AnalyticsSnapshot(BaseModel):
    """Latest analytics counters as reported by the concall API.

    A snapshot always replaces the previous one; counters are never merged.
    The optional fields are only filled by API versions that report
    per-endpoint statistics.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    total_visits: int = Field(ge=0)
    unique_users: int | None = Field(default=None, ge=0)
    api_hits: int | None = Field(default=None, ge=0)
    endpoint_stats: dict[str, int] = Field(default_factory=dict)


class AnalyticsUpdateFrame(BaseModel):
    """Text frame pushed over the analytics WebSocket."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: Literal["analytics_update"]
    total_visits: StrictInt = Field(ge=0)

    def to_snapshot(self) -> AnalyticsSnapshot:
        """Convert the frame into a snapshot."""
        return AnalyticsSnapshot(total_visits=self.total_visits)
