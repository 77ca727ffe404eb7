"""Tests for configuration loading and validation."""

import pytest
from pydantic import ValidationError

from webhook_trigger.adapters.driven.config.settings import Settings, load_settings
from webhook_trigger.ports.settings import SettingsPort

__all__ = []

ENV_VARS = (
    "WEBHOOK_TIMEOUT_MS",
    "WEBHOOK_RETRY_ATTEMPTS",
    "WEBHOOK_USER_AGENT",
    "ZAPIER_WEBHOOK_URL",
    "APP_ENVIRONMENT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    """Start every test without webhook variables (a local .env may set them)."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_load_settings_uses_defaults() -> None:
    """Unset variables should fall back to documented defaults."""
    settings = load_settings()

    assert settings.timeout_ms == 10_000
    assert settings.retry_attempts == 3
    assert settings.user_agent == "Optimizely-Opal-Tools/1.0"
    assert settings.default_webhook_url is None
    assert settings.environment == "development"
    assert settings.log_level == "INFO"


def test_load_settings_reads_environment(monkeypatch) -> None:
    """All variables should be read from the environment."""
    monkeypatch.setenv("WEBHOOK_TIMEOUT_MS", "2500")
    monkeypatch.setenv("WEBHOOK_RETRY_ATTEMPTS", "5")
    monkeypatch.setenv("WEBHOOK_USER_AGENT", "Custom/2.0")
    monkeypatch.setenv("ZAPIER_WEBHOOK_URL", "https://hooks.zapier.com/hooks/catch/1/abc/")
    monkeypatch.setenv("APP_ENVIRONMENT", "production")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.timeout_ms == 2_500
    assert settings.retry_attempts == 5
    assert settings.user_agent == "Custom/2.0"
    assert settings.default_webhook_url == "https://hooks.zapier.com/hooks/catch/1/abc/"
    assert settings.environment == "production"
    assert settings.log_level == "DEBUG"


def test_load_settings_rejects_non_integer_timeout(monkeypatch) -> None:
    """A non-numeric timeout should raise RuntimeError naming the variable."""
    monkeypatch.setenv("WEBHOOK_TIMEOUT_MS", "soon")

    with pytest.raises(RuntimeError, match="WEBHOOK_TIMEOUT_MS must be an integer"):
        load_settings()


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("WEBHOOK_TIMEOUT_MS", "0"),
        ("WEBHOOK_RETRY_ATTEMPTS", "0"),
        ("ZAPIER_WEBHOOK_URL", "not a url"),
        ("LOG_LEVEL", "chatty"),
    ],
)
def test_load_settings_rejects_invalid_values(monkeypatch, name: str, value: str) -> None:
    """Out-of-range or malformed values should fail validation."""
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError):
        load_settings()


def test_settings_treats_empty_default_url_as_unset() -> None:
    """An empty default URL should be normalised to None."""
    assert Settings(default_webhook_url="").default_webhook_url is None


def test_settings_rejects_negative_retries() -> None:
    """Settings model should enforce at least one attempt."""
    with pytest.raises(ValidationError):
        Settings(retry_attempts=-1)


def test_settings_to_port() -> None:
    """to_port should carry every dispatch-relevant field."""
    settings = Settings(
        timeout_ms=3_000,
        retry_attempts=2,
        user_agent="Agent/1",
        default_webhook_url="http://localhost:8080/hook",
        environment="test",
    )

    assert settings.to_port() == SettingsPort(
        timeout_ms=3_000,
        retry_attempts=2,
        user_agent="Agent/1",
        default_webhook_url="http://localhost:8080/hook",
        environment="test",
    )
