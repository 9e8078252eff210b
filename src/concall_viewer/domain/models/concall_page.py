"""Paged concall response models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from concall_viewer.domain.models.concall_summary import ConcallSummary


class PageMeta(BaseModel):
    """Pagination metadata returned next to a page of results."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    page: int = 1
    limit: int | None = None
    total_pages: int | None = Field(default=None, alias="totalPages")
    total: int = 0


class ConcallPage(BaseModel):
    """One page of concall summaries."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    data: list[ConcallSummary] = Field(default_factory=list)
    meta: PageMeta = Field(default_factory=PageMeta)

    @field_validator("data", mode="before")
    @classmethod
    def null_data_is_empty(cls, v: Any) -> Any:
        """The API serialises an empty result set as null."""
        return [] if v is None else v

    @field_validator("meta", mode="before")
    @classmethod
    def null_meta_is_default(cls, v: Any) -> Any:
        """Missing metadata falls back to a single empty page."""
        return {} if v is None else v
