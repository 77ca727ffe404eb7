"""Metrics port definition (interface and DTO)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from webhook_trigger.ports.dispatch import DispatchResult, FailureKind

__all__ = ["DeliveryAttemptDto", "MetricsPort"]


@dataclass(slots=True, frozen=True)
class DeliveryAttemptDto:
    """Immutable snapshot of one attempt within a dispatch.

    Attributes:
        attempt: 1-based attempt number inside its dispatch.
        started_at_sec: Monotonic seconds when the request left the process.
        finished_at_sec: Monotonic seconds when the attempt ended.
        failure: Why the attempt failed; None for a 2xx reply.
        status_code: HTTP status when a response arrived; None otherwise.
    """

    attempt: int
    started_at_sec: float
    finished_at_sec: float
    failure: FailureKind | None = None
    status_code: int | None = None

    @property
    def is_failed(self) -> bool:
        return self.failure is not None


class MetricsPort(Protocol):
    """Interface for recording webhook delivery metrics.

    The dispatcher calls update() after each attempt and record_dispatch()
    once per dispatch; log lines call __str__() to render summaries.
    """

    def update(self, attempt: DeliveryAttemptDto, /) -> None:
        """Record a finished attempt."""
        ...

    def record_dispatch(self, result: DispatchResult, /) -> None:
        """Record the outcome of a whole dispatch."""
        ...

    def __str__(self) -> str:
        """Return concise textual summary for humans."""
        ...
