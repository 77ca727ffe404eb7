"""Configuration loading from environment variables."""

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, field_validator

from webhook_trigger.ports.settings import SettingsPort

__all__ = ["Settings", "load_settings"]

load_dotenv()

logger = logging.getLogger(__name__)
_http_url_adapter = TypeAdapter(HttpUrl)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseModel):
    """Runtime configuration for the webhook trigger service.

    Attributes:
        timeout_ms: Per-attempt timeout in milliseconds (must be positive).
        retry_attempts: Maximum delivery attempts (at least 1).
        user_agent: Outbound User-Agent header.
        default_webhook_url: Fallback webhook when the caller passes none.
        environment: Deployment tag added to every payload.
        log_level: Level for the application loggers.
    """

    timeout_ms: int = Field(default=10_000, gt=0, description="Per-attempt timeout in ms.")
    retry_attempts: int = Field(default=3, ge=1, description="Maximum delivery attempts.")
    user_agent: str = Field(
        default="Optimizely-Opal-Tools/1.0",
        min_length=1,
        description="User-Agent header sent with every webhook call.",
    )
    default_webhook_url: str | None = Field(
        default=None,
        description=(
            "Webhook used when a trigger call carries no webhookUrl. "
            "If not set, callers must always pass one."
        ),
    )
    environment: str = Field(default="development", description="Deployment tag.")
    log_level: str = Field(default="INFO", description="Application log level.")

    @field_validator("default_webhook_url")
    @classmethod
    def validate_default_webhook_url(cls, v: str | None) -> str | None:
        """Validate that the default webhook (if provided) is an HTTP(S) URL.

        Args:
            v: Webhook URL to validate (can be None).

        Returns:
            The validated URL or None.

        Raises:
            ValueError: If URL is invalid.
        """
        if not v:
            return None
        try:
            _http_url_adapter.validate_python(v)
        except Exception as e:
            raise ValueError(f"Invalid default webhook URL: {e}") from e
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level {v!r}; expected one of {', '.join(_LOG_LEVELS)}")
        return level

    def to_port(self) -> SettingsPort:
        """Wrap configuration into the port consumed by the trigger logic."""
        return SettingsPort(
            timeout_ms=self.timeout_ms,
            retry_attempts=self.retry_attempts,
            user_agent=self.user_agent,
            default_webhook_url=self.default_webhook_url,
            environment=self.environment,
        )


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise RuntimeError(f"{name} must be an integer (got: {raw})") from e


def load_settings() -> Settings:
    """Load and validate settings from the environment.

    All variables are optional:
    - WEBHOOK_TIMEOUT_MS: Per-attempt timeout (default 10000).
    - WEBHOOK_RETRY_ATTEMPTS: Maximum attempts (default 3).
    - WEBHOOK_USER_AGENT: Outbound User-Agent (default Optimizely-Opal-Tools/1.0).
    - ZAPIER_WEBHOOK_URL: Default webhook URL (default unset).
    - APP_ENVIRONMENT: Deployment tag (default development).
    - LOG_LEVEL: Application log level (default INFO).

    Returns:
        Validated Settings object.

    Raises:
        RuntimeError: If a numeric variable is not an integer.
        ValueError: If configuration is invalid.
    """
    settings = Settings(
        timeout_ms=_int_from_env("WEBHOOK_TIMEOUT_MS", 10_000),
        retry_attempts=_int_from_env("WEBHOOK_RETRY_ATTEMPTS", 3),
        user_agent=os.getenv("WEBHOOK_USER_AGENT") or "Optimizely-Opal-Tools/1.0",
        default_webhook_url=os.getenv("ZAPIER_WEBHOOK_URL"),
        environment=os.getenv("APP_ENVIRONMENT") or "development",
        log_level=os.getenv("LOG_LEVEL") or "INFO",
    )

    logger.info(
        f"Webhook trigger configured: timeout={settings.timeout_ms}ms, "
        f"retries={settings.retry_attempts}, "
        f"default_webhook={settings.default_webhook_url or '<none>'}, "
        f"environment={settings.environment}"
    )

    return settings
