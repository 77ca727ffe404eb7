"""HTTP transport port definition (interface and DTO)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

__all__ = ["HttpReply", "HttpTransportPort", "TransportError"]


class TransportError(Exception):
    """Network-level failure: timeout, refused connection, DNS, broken stream."""


@dataclass(slots=True, frozen=True)
class HttpReply:
    """Response received for one outbound request.

    Attributes:
        status: HTTP status code.
        reason: HTTP reason phrase (may be empty).
        body: Decoded JSON body, or the raw text when it is not JSON.
    """

    status: int
    reason: str
    body: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class HttpTransportPort(Protocol):
    """Sends a single JSON POST. Implementations never retry."""

    async def post_json(
        self,
        url: str,
        payload: dict[str, Any],
        headers: dict[str, str],
        timeout_ms: int,
    ) -> HttpReply:
        """POST payload as JSON and return the response.

        Args:
            url: Target URL.
            payload: JSON-serializable body.
            headers: Request headers.
            timeout_ms: Deadline for the whole attempt.

        Returns:
            The received response, whatever its status.

        Raises:
            TransportError: On timeout or connection failure.
        """
        ...
