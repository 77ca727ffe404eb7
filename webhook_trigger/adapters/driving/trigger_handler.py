"""Framework-agnostic handler for the webhook trigger tool."""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from webhook_trigger.core.dispatcher import WebhookDispatcher
from webhook_trigger.core.trigger import (
    TriggerParameters,
    build_dispatch_request,
    status_code_for,
    to_response_body,
)
from webhook_trigger.ports.dispatch import Failure, FailureKind
from webhook_trigger.ports.http import HttpTransportPort
from webhook_trigger.ports.metrics import MetricsPort
from webhook_trigger.ports.settings import SettingsPort

__all__ = ["handle_trigger"]

logger = logging.getLogger(__name__)


async def handle_trigger(
    body: Mapping[str, Any],
    settings: SettingsPort,
    transport: HttpTransportPort,
    metrics: MetricsPort | None = None,
) -> tuple[int, dict[str, Any]]:
    """Handle one trigger call from the tool runtime.

    Steps:
    1. Parse the JSON body into TriggerParameters.
    2. Validate and resolve defaults (message, webhook URL).
    3. Dispatch with retries.
    4. Render the result as (status code, JSON body).

    Args:
        body: Decoded request body.
        settings: Runtime settings.
        transport: Transport used by the dispatcher.
        metrics: Optional delivery metrics collector.

    Returns:
        HTTP status code and JSON-serializable response body.
    """
    try:
        try:
            params = TriggerParameters.model_validate(body)
        except ValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) or "body" for err in e.errors())
            failure = Failure(
                reason=f"Invalid parameters: {fields}",
                attempts=0,
                kind=FailureKind.VALIDATION,
            )
            return status_code_for(failure), to_response_body(failure, None)

        request = build_dispatch_request(params, settings)
        if isinstance(request, Failure):
            logger.info(f"Trigger rejected: {request.reason}")
            return status_code_for(request), to_response_body(request, params.message)

        dispatcher = WebhookDispatcher(transport, metrics)
        result = await dispatcher.dispatch(request)
        return status_code_for(result), to_response_body(result, params.message)
    except Exception as e:  # noqa: BLE001
        logger.error(f"Unhandled error in trigger handler: {e}", exc_info=True)
        return 500, {"success": False, "message": f"Unexpected error: {e}"}
