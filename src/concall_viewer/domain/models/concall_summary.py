"""Concall summary domain model."""

from pydantic import BaseModel, ConfigDict

NO_GUIDANCE = "NA"


class ConcallSummary(BaseModel):
    """Summary of a single earnings call."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    date: str
    guidance: str = ""

    @property
    def has_guidance(self) -> bool:
        """False only for the "NA" sentinel; an empty string is still guidance."""
        return self.guidance != NO_GUIDANCE
