"""Healthcheck validator for container orchestration."""

import logging

from webhook_trigger.adapters.driven.config.settings import Settings, load_settings
from webhook_trigger.adapters.driven.logging.logging_config import configure_logs
from webhook_trigger.core.dispatcher import linear_backoff_sec

__all__ = ["main", "worst_case_dispatch_sec"]

logger = logging.getLogger(__name__)

# Typical request deadline of the serverless host running the tool endpoints
MAX_DISPATCH_SEC = 60.0


def worst_case_dispatch_sec(settings: Settings) -> float:
    """Longest a single dispatch can block: every attempt times out, plus all backoff pauses."""
    timeouts = settings.retry_attempts * settings.timeout_ms / 1_000
    pauses = sum(linear_backoff_sec(n) for n in range(1, settings.retry_attempts))
    return timeouts + pauses


def main() -> int:
    """Run health check for container orchestration.

    Loads the webhook settings, applies LOG_LEVEL, and warns when the
    configuration cannot work well in practice (no default webhook, or a
    retry budget that outlasts a typical request deadline).

    Returns:
        0 if healthy, 1 if unhealthy.
    """
    configure_logs()

    try:
        settings = load_settings()
    except (RuntimeError, ValueError) as exc:
        logger.error(f"Webhook trigger healthcheck FAILED: {exc}")
        return 1

    configure_logs(settings.log_level)

    if settings.default_webhook_url is None:
        logger.warning("No default webhook configured; every trigger call must pass webhookUrl")

    budget = worst_case_dispatch_sec(settings)
    if budget > MAX_DISPATCH_SEC:
        logger.warning(
            f"Worst-case dispatch takes {budget:.1f}s "
            f"({settings.retry_attempts} attempts x {settings.timeout_ms}ms + backoff), "
            f"above {MAX_DISPATCH_SEC:.0f}s; callers may time out before the result"
        )

    logger.info(
        f"Webhook trigger healthcheck OK (worst-case dispatch {budget:.1f}s, "
        f"log level {settings.log_level})"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
