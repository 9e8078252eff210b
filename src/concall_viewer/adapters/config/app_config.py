"""12-factor configuration adapter using environment variables."""

from typing import Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from concall_viewer.adapters.concall_api.stream_endpoint import derive_stream_url
from concall_viewer.domain.models.page_query_state import DEFAULT_PAGE_SIZE


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=8000, description="Port to bind the server to")
    environment: str = Field(
        default="local",
        validation_alias=AliasChoices("config_env", "environment"),
        description="Deployment environment: 'local' or 'prod' (set via CONFIG_ENV)",
    )

    # Concall API configuration
    api_base_url: str = Field(
        default="http://localhost:8080/api",
        description="Base URL of the concall API (list_concalls, find_concalls, analytics)",
    )
    api_timeout_seconds: int = Field(
        default=10, description="Timeout for concall API requests in seconds"
    )
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE, description="Number of concalls shown per page"
    )

    # Analytics configuration
    analytics_stream_url: str | None = Field(
        default=None,
        description="WebSocket URL for live analytics; derived from api_base_url if unset",
    )
    max_reconnect_attempts: int = Field(
        default=5, description="Analytics stream reconnect attempts before giving up"
    )
    reconnect_base_delay_seconds: float = Field(
        default=3.0,
        description="Base delay for analytics stream reconnects (n-th retry waits n times this)",
    )
    analytics_refresh_interval_seconds: int = Field(
        default=0,
        description="Interval between analytics snapshot refreshes in seconds (0 disables)",
    )

    # Display configuration
    title: str = Field(default="Cipher", description="Page title displayed in browser tab")
    subtitle: str = Field(
        default="Real-time guidance derived from every concall",
        description="Subtitle displayed under the page title",
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is either 'local' or 'prod'."""
        if v.lower() not in ("local", "prod"):
            raise ValueError("environment must be either 'local' or 'prod'")
        return v.lower()

    @field_validator("page_size")
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        """Validate page size is positive."""
        if v < 1:
            raise ValueError("page_size must be at least 1")
        return v

    @field_validator("max_reconnect_attempts", "analytics_refresh_interval_seconds")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        """Validate counters and intervals are not negative."""
        if v < 0:
            raise ValueError("value must not be negative")
        return v

    @field_validator("reconnect_base_delay_seconds")
    @classmethod
    def validate_reconnect_delay(cls, v: float) -> float:
        """Validate reconnect delay is positive."""
        if v <= 0:
            raise ValueError("reconnect_base_delay_seconds must be positive")
        return v

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        """Validate the API base URL is absolute and strip trailing slashes."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("api_base_url must start with http:// or https://")
        return v.rstrip("/")

    def stream_url(self) -> str:
        """Resolve the analytics WebSocket URL."""
        return derive_stream_url(
            self.api_base_url,
            override=self.analytics_stream_url,
            local=self.environment == "local",
        )

    @classmethod
    def for_testing(cls, **overrides: Any) -> "AppConfig":
        """Build a config that ignores any .env file."""
        return cls(_env_file=None, **overrides)
