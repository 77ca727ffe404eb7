"""Caller-side trigger logic: validate parameters, build the request, render the result."""

import logging
from datetime import datetime, timezone
from typing import Any, assert_never

from pydantic import BaseModel, ConfigDict, Field

from webhook_trigger.ports.dispatch import DispatchRequest, DispatchResult, Failure, FailureKind, Success
from webhook_trigger.ports.settings import SettingsPort

__all__ = [
    "DEFAULT_EXPERIMENT_ID",
    "DEFAULT_PRIORITY",
    "DEFAULT_USER_NAME",
    "TriggerParameters",
    "build_dispatch_request",
    "status_code_for",
    "to_response_body",
]

logger = logging.getLogger(__name__)

DEFAULT_USER_NAME = "Optimizely Opal Tool"
DEFAULT_EXPERIMENT_ID = "unknown"
DEFAULT_PRIORITY = "normal"


class TriggerParameters(BaseModel):
    """Parameters of a webhook trigger call, as sent by the tool caller.

    Field names follow the camelCase wire format; snake_case works too.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", str_strip_whitespace=True)

    webhook_url: str | None = Field(default=None, alias="webhookUrl")
    message: str | None = None
    user_name: str | None = Field(default=None, alias="userName")
    experiment_id: str | None = Field(default=None, alias="experimentId")
    priority: str | None = None


def build_dispatch_request(
    params: TriggerParameters,
    settings: SettingsPort,
    now: datetime | None = None,
) -> DispatchRequest | Failure:
    """Resolve defaults and build the dispatch request.

    Args:
        params: Caller parameters.
        settings: Runtime settings (default URL, limits, tags).
        now: Timestamp to stamp into the payload; current UTC time if omitted.

    Returns:
        A ready DispatchRequest, or a validation Failure when the message or
        a resolvable webhook URL is missing. No request is built in that case.
    """
    if not params.message:
        return Failure(reason="Message is required", attempts=0, kind=FailureKind.VALIDATION)

    target_url = params.webhook_url or settings.default_webhook_url
    if not target_url:
        return Failure(reason="Webhook URL is required", attempts=0, kind=FailureKind.VALIDATION)

    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    payload: dict[str, Any] = {
        "message": params.message,
        "userName": params.user_name or DEFAULT_USER_NAME,
        "experimentId": params.experiment_id or DEFAULT_EXPERIMENT_ID,
        "priority": params.priority or DEFAULT_PRIORITY,
        "timestamp": timestamp,
        "source": settings.source,
        "environment": settings.environment,
    }
    headers = {
        "Content-Type": "application/json",
        "User-Agent": settings.user_agent,
    }
    return DispatchRequest(
        target_url=target_url,
        payload=payload,
        headers=headers,
        timeout_ms=settings.timeout_ms,
        max_attempts=settings.retry_attempts,
    )


def to_response_body(result: DispatchResult, message: str | None) -> dict[str, Any]:
    """Render a dispatch result as the tool's JSON response body."""
    match result:
        case Success(http_status=status, response_body=data, attempts=attempts):
            return {
                "success": True,
                "message": f'Successfully triggered webhook with message: "{message}"',
                "zapierResponse": {"status": status, "data": data, "attempts": attempts},
            }
        case Failure(kind=FailureKind.TRANSPORT | FailureKind.REMOTE_REJECTION, reason=reason):
            return {"success": False, "message": f"Failed to trigger webhook: {reason}"}
        case Failure(kind=FailureKind.VALIDATION | FailureKind.UNEXPECTED, reason=reason):
            return {"success": False, "message": reason}
        case _:
            assert_never(result)


def status_code_for(result: DispatchResult) -> int:
    """Map a dispatch result to the HTTP status of the tool response."""
    match result:
        case Success():
            return 200
        case Failure(kind=FailureKind.VALIDATION):
            return 400
        case Failure(kind=FailureKind.TRANSPORT | FailureKind.REMOTE_REJECTION):
            return 502
        case Failure(kind=FailureKind.UNEXPECTED):
            return 500
        case _:
            assert_never(result)
