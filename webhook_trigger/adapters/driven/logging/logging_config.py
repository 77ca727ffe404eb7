"""Console logging setup for the webhook trigger."""

import logging

__all__ = ["configure_logs"]

_HANDLER_NAME = "webhook_trigger.console"


def configure_logs(level: str = "INFO") -> None:
    """Configure console logging.

    Sets up:
    - Root logger at INFO level with one console handler (idempotent).
    - Framework loggers (aiohttp, asyncio) at WARNING level.
    - Application loggers (webhook_trigger) at the requested level.

    Args:
        level: Level name for the application loggers.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"
    date_format = "%d/%m/%y %H:%M:%S"

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(log_format, date_format))
        root.addHandler(handler)

    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.getLogger("webhook_trigger").setLevel(level.upper())
