"""Settings port definition (DTO)."""

from dataclasses import dataclass

__all__ = ["SettingsPort"]


@dataclass(frozen=True)
class SettingsPort:
    """Runtime settings for webhook triggering.

    Built once at startup and handed to the trigger logic explicitly, so the
    dispatch path never reads process-wide configuration.

    Attributes:
        timeout_ms: Per-attempt timeout in milliseconds.
        retry_attempts: Maximum attempts per dispatch.
        user_agent: Value of the outbound User-Agent header.
        default_webhook_url: Fallback target when the caller supplies none.
        environment: Deployment tag copied into every payload.
        source: Source tag copied into every payload.
    """

    timeout_ms: int = 10_000
    retry_attempts: int = 3
    user_agent: str = "Optimizely-Opal-Tools/1.0"
    default_webhook_url: str | None = None
    environment: str = "development"
    source: str = "optimizely-opal-tools"
