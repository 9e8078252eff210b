"""Error info domain model."""

from pydantic import BaseModel, ConfigDict

from concall_viewer.domain.errors import GatewayError


class ErrorInfo(BaseModel):
    """User-facing description of a failed remote call."""

    model_config = ConfigDict(frozen=True)

    message: str
    status_code: int | None = None

    @classmethod
    def from_error(cls, error: Exception) -> "ErrorInfo":
        """Build error info from a gateway (or any other) exception."""
        if isinstance(error, GatewayError):
            return cls(message=error.message, status_code=error.status_code)
        return cls(message=str(error) or type(error).__name__)
