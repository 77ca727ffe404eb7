"""Dispatch port definition (request and result DTOs)."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

__all__ = ["DispatchRequest", "DispatchResult", "Failure", "FailureKind", "Success"]


@dataclass(slots=True, frozen=True)
class DispatchRequest:
    """One webhook delivery to perform.

    Attributes:
        target_url: Webhook URL to POST to.
        payload: JSON-serializable body. Its shape is opaque to the dispatcher.
        headers: Extra request headers (content type, user agent).
        timeout_ms: Hard deadline for a single attempt, connect + response.
        max_attempts: Upper bound on attempts, including the first one.
    """

    target_url: str
    payload: dict[str, Any]
    headers: dict[str, str] = field(default_factory=dict)
    timeout_ms: int = 10_000
    max_attempts: int = 3

    def __post_init__(self) -> None:
        if self.timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be positive (got: {self.timeout_ms})")
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1 (got: {self.max_attempts})")


class FailureKind(enum.Enum):
    """Why a dispatch ended without a 2xx response."""

    VALIDATION = "validation"
    TRANSPORT = "transport"
    REMOTE_REJECTION = "remote_rejection"
    UNEXPECTED = "unexpected"


@dataclass(slots=True, frozen=True)
class Success:
    """Webhook accepted the delivery with a 2xx status."""

    http_status: int
    response_body: Any
    attempts: int


@dataclass(slots=True, frozen=True)
class Failure:
    """Delivery did not succeed.

    Attributes:
        reason: Human-readable description of the last error.
        attempts: Attempts actually made (0 when rejected before sending).
        kind: Error category.
        status_code: Last remote HTTP status, only for remote rejections.
    """

    reason: str
    attempts: int
    kind: FailureKind = FailureKind.UNEXPECTED
    status_code: int | None = None


DispatchResult = Success | Failure
