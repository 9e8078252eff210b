"""Tests for configuration adapter."""

import pytest

from concall_viewer.adapters.config import AppConfig

ENV_KEYS = [
    "HOST",
    "PORT",
    "CONFIG_ENV",
    "ENVIRONMENT",
    "API_BASE_URL",
    "PAGE_SIZE",
    "ANALYTICS_STREAM_URL",
    "MAX_RECONNECT_ATTEMPTS",
    "RECONNECT_BASE_DELAY_SECONDS",
    "ANALYTICS_REFRESH_INTERVAL_SECONDS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove configuration variables inherited from the shell."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_config_loads_defaults() -> None:
    """Given no environment variables, when loading config, then defaults are used."""
    config = AppConfig.for_testing()

    assert config.host == "0.0.0.0"
    assert config.port == 8000
    assert config.environment == "local"
    assert config.api_base_url == "http://localhost:8080/api"
    assert config.page_size == 12
    assert config.max_reconnect_attempts == 5
    assert config.reconnect_base_delay_seconds == 3.0
    assert config.analytics_refresh_interval_seconds == 0


def test_config_loads_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given environment variables, when loading config, then they are used."""
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("CONFIG_ENV", "PROD")
    monkeypatch.setenv("API_BASE_URL", "https://concalls.example.com/api/")
    monkeypatch.setenv("PAGE_SIZE", "20")

    config = AppConfig.for_testing()

    assert config.port == 9000
    assert config.environment == "prod"
    assert config.api_base_url == "https://concalls.example.com/api"
    assert config.page_size == 20


def test_config_validates_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given an unknown environment, when loading config, then validation error is raised."""
    monkeypatch.setenv("CONFIG_ENV", "staging")

    with pytest.raises(ValueError, match="environment must be either"):
        AppConfig.for_testing()


@pytest.mark.parametrize(
    ("field", "value", "message"),
    [
        ("page_size", 0, "page_size must be at least 1"),
        ("max_reconnect_attempts", -1, "must not be negative"),
        ("reconnect_base_delay_seconds", 0, "must be positive"),
        ("api_base_url", "localhost:8080/api", "must start with http"),
    ],
)
def test_config_rejects_invalid_values(field: str, value: object, message: str) -> None:
    """Given an invalid value, when building config, then validation error names the problem."""
    with pytest.raises(ValueError, match=message):
        AppConfig.for_testing(**{field: value})


def test_local_environment_streams_from_localhost() -> None:
    """Given the local environment, when resolving the stream URL, then the local server is used."""
    config = AppConfig.for_testing(api_base_url="https://concalls.example.com/api")

    assert config.stream_url() == "ws://localhost:8080/ws/analytics"


def test_prod_environment_streams_from_api_origin() -> None:
    """Given the prod environment, when resolving the stream URL, then it is derived from the API origin."""
    config = AppConfig.for_testing(
        environment="prod", api_base_url="https://concalls.example.com/api"
    )

    assert config.stream_url() == "wss://concalls.example.com/ws/analytics"


def test_explicit_stream_url_wins() -> None:
    """Given an explicit stream URL, when resolving, then it is used as is."""
    config = AppConfig.for_testing(
        environment="prod", analytics_stream_url="wss://live.example.com/analytics"
    )

    assert config.stream_url() == "wss://live.example.com/analytics"


def test_unused_reload_variable_is_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given RELOAD=true in the environment, when loading config, then no reload setting exists."""
    monkeypatch.setenv("RELOAD", "true")

    config = AppConfig.for_testing()

    assert "reload" not in AppConfig.model_fields
    assert not hasattr(config, "reload")
