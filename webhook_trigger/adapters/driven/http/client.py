"""aiohttp transport adapter for webhook delivery."""

import asyncio
import json
import logging
from types import TracebackType
from typing import Any

import aiohttp
from aiohttp import ClientTimeout

from webhook_trigger.ports.http import HttpReply, HttpTransportPort, TransportError

__all__ = ["HttpClient", "decode_body"]

logger = logging.getLogger(__name__)


class HttpClient(HttpTransportPort):
    """Single-shot JSON POST over a shared aiohttp session.

    Retries are the dispatcher's job; this adapter sends exactly one request
    per call and translates network failures into TransportError.
    """

    def __init__(self) -> None:
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "HttpClient":
        """Enter async context manager (start session).

        Returns:
            Self for use in async with statement.
        """
        self.session = aiohttp.ClientSession()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Exit async context manager (close session)."""
        if self.session:
            await self.session.close()
            self.session = None

    async def post_json(
        self,
        url: str,
        payload: dict[str, Any],
        headers: dict[str, str],
        timeout_ms: int,
    ) -> HttpReply:
        """POST payload as JSON within timeout_ms (connect + full response).

        Args:
            url: Target URL.
            payload: JSON-serializable body.
            headers: Request headers.
            timeout_ms: Hard deadline for the attempt in milliseconds.

        Returns:
            Response status, reason and decoded body.

        Raises:
            RuntimeError: If session not initialized.
            TransportError: On timeout or any aiohttp client error.
        """
        if self.session is None:
            raise RuntimeError("Session not initialized; use 'async with' context manager")

        client_timeout = ClientTimeout(total=timeout_ms / 1_000)
        try:
            async with self.session.post(
                url, json=payload, headers=headers, timeout=client_timeout
            ) as resp:
                raw = await resp.read()
                return HttpReply(
                    status=resp.status,
                    reason=resp.reason or "",
                    body=decode_body(raw, resp.charset),
                )
        except asyncio.TimeoutError as e:
            raise TransportError(f"Request timed out after {timeout_ms} ms") from e
        except aiohttp.ClientError as e:
            raise TransportError(f"{type(e).__name__}: {e}") from e


def decode_body(raw: bytes, charset: str | None = None) -> Any:
    """Return parsed JSON when the body is JSON, else its text.

    Undecodable bytes are replaced rather than raised: a 2xx reply means the
    webhook already accepted the delivery, whatever its body looks like.
    """
    try:
        text = raw.decode(charset or "utf-8", errors="replace")
    except LookupError:
        logger.debug(f"Unknown response charset {charset!r}, decoding as utf-8")
        text = raw.decode("utf-8", errors="replace")
    if not text:
        return text
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        logger.debug("Response body is not JSON, keeping raw text")
        return text
