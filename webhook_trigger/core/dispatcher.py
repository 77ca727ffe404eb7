"""Webhook delivery with bounded retries and linear backoff."""

import asyncio
import logging

from webhook_trigger.ports.dispatch import DispatchRequest, DispatchResult, Failure, FailureKind, Success
from webhook_trigger.ports.http import HttpTransportPort, TransportError
from webhook_trigger.ports.metrics import DeliveryAttemptDto, MetricsPort

__all__ = ["WebhookDispatcher", "linear_backoff_sec"]

logger = logging.getLogger(__name__)


def linear_backoff_sec(attempt: int, step_sec: float = 1.0) -> float:
    """Return the pause after a failed attempt (1-based): 1s, 2s, 3s, ..."""
    return step_sec * attempt


class WebhookDispatcher:
    """Deliver a payload to a webhook, retrying on any non-2xx outcome.

    Attempts are strictly sequential with a linear pause between them.
    4xx and 5xx responses are retried alike; the failure kind and last status
    are kept on the result so a caller can tell them apart.

    The dispatcher keeps no per-dispatch state, so one instance can serve
    concurrent callers.
    """

    def __init__(
        self,
        transport: HttpTransportPort,
        metrics: MetricsPort | None = None,
        *,
        backoff_step_sec: float = 1.0,
    ) -> None:
        """Initialize dispatcher.

        Args:
            transport: Sends one JSON POST per call.
            metrics: Optional collector updated after every attempt and dispatch.
            backoff_step_sec: Pause unit; attempt n is followed by n units.
        """
        self.transport = transport
        self.metrics = metrics
        self.backoff_step_sec = backoff_step_sec

    async def dispatch(self, request: DispatchRequest) -> DispatchResult:
        """Deliver request, never raising.

        Args:
            request: Target, payload, headers and limits.

        Returns:
            Success on the first 2xx response, Failure otherwise.
        """
        result = await self._deliver(request)
        if self.metrics is not None:
            self.metrics.record_dispatch(result)
            logger.info(f"Delivery metrics: {self.metrics}")
        return result

    async def _deliver(self, request: DispatchRequest) -> DispatchResult:
        if not request.target_url:
            logger.warning("Webhook dispatch skipped: missing target url")
            return Failure(reason="missing target url", attempts=0, kind=FailureKind.VALIDATION)

        loop = asyncio.get_running_loop()
        last_reason = ""
        last_kind = FailureKind.UNEXPECTED
        last_status: int | None = None

        for attempt in range(1, request.max_attempts + 1):
            started = loop.time()
            try:
                reply = await self.transport.post_json(
                    request.target_url,
                    request.payload,
                    request.headers,
                    request.timeout_ms,
                )
            except TransportError as e:
                last_reason = str(e) or type(e).__name__
                last_kind = FailureKind.TRANSPORT
                last_status = None
                self._record(attempt, started, loop.time(), FailureKind.TRANSPORT, None)
                logger.warning(
                    f"Webhook error: {request.target_url} - {last_reason} "
                    f"(attempt {attempt}/{request.max_attempts})"
                )
            except Exception as e:  # noqa: BLE001
                self._record(attempt, started, loop.time(), FailureKind.UNEXPECTED, None)
                logger.error(f"Unexpected error delivering webhook: {e}", exc_info=True)
                return Failure(
                    reason=f"Unexpected error: {e}",
                    attempts=attempt,
                    kind=FailureKind.UNEXPECTED,
                )
            else:
                if reply.ok:
                    self._record(attempt, started, loop.time(), None, reply.status)
                    logger.info(
                        f"Webhook delivered: {request.target_url} "
                        f"(attempt {attempt}, status {reply.status})"
                    )
                    return Success(
                        http_status=reply.status,
                        response_body=reply.body,
                        attempts=attempt,
                    )
                self._record(attempt, started, loop.time(), FailureKind.REMOTE_REJECTION, reply.status)
                last_reason = f"HTTP {reply.status} {reply.reason}".rstrip()
                last_kind = FailureKind.REMOTE_REJECTION
                last_status = reply.status
                logger.warning(
                    f"Webhook rejected: {request.target_url} - {last_reason} "
                    f"(attempt {attempt}/{request.max_attempts})"
                )

            if attempt < request.max_attempts:
                delay = linear_backoff_sec(attempt, self.backoff_step_sec)
                logger.debug(f"Waiting {delay:.1f}s before retry...")
                await asyncio.sleep(delay)

        logger.error(
            f"Webhook failed after {request.max_attempts} attempts: "
            f"{request.target_url} - {last_reason}"
        )
        return Failure(
            reason=last_reason,
            attempts=request.max_attempts,
            kind=last_kind,
            status_code=last_status,
        )

    def _record(
        self,
        attempt: int,
        started: float,
        finished: float,
        failure: FailureKind | None,
        status_code: int | None,
    ) -> None:
        if self.metrics is None:
            return
        self.metrics.update(
            DeliveryAttemptDto(
                attempt=attempt,
                started_at_sec=started,
                finished_at_sec=finished,
                failure=failure,
                status_code=status_code,
            )
        )
