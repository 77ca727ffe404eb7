"""In-memory counters for webhook deliveries."""

from __future__ import annotations

from collections import Counter

from webhook_trigger.ports.dispatch import DispatchResult, Failure, FailureKind, Success
from webhook_trigger.ports.metrics import DeliveryAttemptDto, MetricsPort

__all__ = ["Metrics"]


class Metrics(MetricsPort):
    """Process-lifetime delivery counters.

    Per attempt: transport errors, 4xx and 5xx rejections, mean latency.
    Per dispatch: delivered vs failed, and how many attempts each delivered
    dispatch needed (a rising share of 2+ means the webhook is flaky).

    Not thread-safe; create one instance per event loop.
    """

    def __init__(self) -> None:
        self.attempt_failures: Counter[str] = Counter()
        self.attempts_to_deliver: Counter[int] = Counter()
        self.delivered = 0
        self.failed: Counter[FailureKind] = Counter()
        self._attempts = 0
        self._latency_total_ms = 0.0

    def update(self, attempt: DeliveryAttemptDto) -> None:
        self._attempts += 1
        self._latency_total_ms += (attempt.finished_at_sec - attempt.started_at_sec) * 1_000.0
        if attempt.failure is FailureKind.REMOTE_REJECTION and attempt.status_code is not None:
            self.attempt_failures[f"{attempt.status_code // 100}xx"] += 1
        elif attempt.failure is not None:
            self.attempt_failures[attempt.failure.value] += 1

    def record_dispatch(self, result: DispatchResult) -> None:
        match result:
            case Success(attempts=attempts):
                self.delivered += 1
                self.attempts_to_deliver[attempts] += 1
            case Failure(kind=kind):
                self.failed[kind] += 1

    @property
    def dispatches(self) -> int:
        return self.delivered + self.failed.total()

    @property
    def retried_deliveries(self) -> int:
        """Delivered dispatches that needed more than one attempt."""
        return sum(n for attempts, n in self.attempts_to_deliver.items() if attempts > 1)

    def __str__(self) -> str:
        """Return human-readable one-line summary for logging."""
        if not self.dispatches and not self._attempts:
            return "Metrics: waiting for data …"

        avg_latency = self._latency_total_ms / self._attempts if self._attempts else 0.0
        errors = ", ".join(f"{k}={v}" for k, v in sorted(self.attempt_failures.items())) or "none"
        return (
            f"delivered={self.delivered}/{self.dispatches} "
            f"(retried={self.retried_deliveries}) | "
            f"attempts={self._attempts} | "
            f"errors: {errors} | "
            f"latency={avg_latency:.1f} ms"
        )
