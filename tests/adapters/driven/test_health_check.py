"""Tests for health check validator."""
import logging
from unittest.mock import patch

import pytest

from webhook_trigger.adapters.driven.config.health_check import main, worst_case_dispatch_sec
from webhook_trigger.adapters.driven.config.settings import Settings

__all__ = []


def test_health_check_success() -> None:
    """Health check should return 0 when configuration loads successfully."""
    with patch("webhook_trigger.adapters.driven.config.health_check.load_settings") as mock_load:
        mock_load.return_value = Settings(default_webhook_url="https://hooks.example.com/1")
        result = main()

    assert result == 0


def test_health_check_success_without_default_webhook() -> None:
    """A missing default webhook is allowed; callers then pass webhookUrl."""
    with patch("webhook_trigger.adapters.driven.config.health_check.load_settings") as mock_load:
        mock_load.return_value = Settings()
        result = main()

    assert result == 0


def test_health_check_failure_on_config_error() -> None:
    """Health check should return 1 when configuration fails to load."""
    with patch("webhook_trigger.adapters.driven.config.health_check.load_settings") as mock_load:
        mock_load.side_effect = RuntimeError("WEBHOOK_TIMEOUT_MS must be an integer (got: x)")
        result = main()

    assert result == 1


def test_health_check_applies_log_level_from_environment(monkeypatch) -> None:
    """LOG_LEVEL should set the level of the application loggers."""
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.delenv("WEBHOOK_TIMEOUT_MS", raising=False)
    monkeypatch.delenv("WEBHOOK_RETRY_ATTEMPTS", raising=False)
    monkeypatch.delenv("ZAPIER_WEBHOOK_URL", raising=False)

    assert main() == 0
    assert logging.getLogger("webhook_trigger").level == logging.DEBUG

    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    assert main() == 0
    assert logging.getLogger("webhook_trigger").level == logging.WARNING


def test_worst_case_dispatch_counts_timeouts_and_linear_backoff() -> None:
    """Defaults give 3 x 10s timeouts plus 1s + 2s of backoff."""
    assert worst_case_dispatch_sec(Settings()) == 33.0
    assert worst_case_dispatch_sec(Settings(retry_attempts=1, timeout_ms=500)) == 0.5


def test_health_check_warns_on_long_retry_budget(caplog: pytest.LogCaptureFixture) -> None:
    """A retry budget above the request deadline should be flagged but stay healthy."""
    with patch("webhook_trigger.adapters.driven.config.health_check.load_settings") as mock_load:
        mock_load.return_value = Settings(retry_attempts=5, timeout_ms=20_000)
        with caplog.at_level(logging.WARNING, logger="webhook_trigger"):
            result = main()

    assert result == 0
    assert "Worst-case dispatch takes 110.0s" in caplog.text
