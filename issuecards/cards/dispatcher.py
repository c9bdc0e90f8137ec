"""Deliver card events to the card-creation function.

Each event is sent as its own ``POST`` request. Delivery succeeds when the
request completes at the transport level; the downstream status code is
recorded on the outcome but does not affect success.
"""

from __future__ import annotations

import typing as typ

import httpx
import msgspec

from issuecards.errors import PollStage
from issuecards.logging import get_logger, log_debug

from .models import CardEvent, DispatchOutcome

logger = get_logger(__name__)

_DEFAULT_TIMEOUT_S = 20.0


class EventEncoder(typ.Protocol):
    """Serialize a card event into a request body."""

    def encode(self, obj: typ.Any, /) -> bytes:  # noqa: ANN401 - msgspec signature
        """Return the encoded bytes for ``obj``."""
        ...


# These bytes only occur inside JSON strings, so replacing them never
# touches the document structure.
_SAFE_ESCAPES: tuple[tuple[bytes, bytes], ...] = (
    (b"&", b"\\u0026"),
    (b"<", b"\\u003c"),
    (b">", b"\\u003e"),
    ("\u2028".encode(), b"\\u2028"),
    ("\u2029".encode(), b"\\u2029"),
)


class EscapingJSONEncoder:
    """msgspec JSON encoder that also escapes HTML-sensitive characters.

    ``&``, ``<``, ``>``, U+2028 and U+2029 are written as ``\\uXXXX``
    escapes. The output decodes to the same value as plain msgspec output.
    """

    def __init__(self) -> None:
        """Create the underlying msgspec encoder."""
        self._encoder = msgspec.json.Encoder()

    def encode(self, obj: typ.Any, /) -> bytes:  # noqa: ANN401 - msgspec signature
        """Return the escaped compact JSON encoding of ``obj``."""
        payload = self._encoder.encode(obj)
        for raw, escaped in _SAFE_ESCAPES:
            if raw in payload:
                payload = payload.replace(raw, escaped)
        return payload


_DEFAULT_ENCODER = EscapingJSONEncoder()


def encode_event(event: CardEvent) -> bytes:
    """Return the compact JSON wire encoding of ``event``."""
    return _DEFAULT_ENCODER.encode(event)


class CardDispatcher:
    """Post card events to a fixed endpoint, one request per event.

    Parameters
    ----------
    endpoint
        URL of the card-creation function.
    http_client
        Optional shared ``httpx.AsyncClient``; when omitted the dispatcher
        creates and owns one with a ``timeout_s`` per-operation timeout.
    encoder
        Optional serializer; defaults to :class:`EscapingJSONEncoder`.

    """

    def __init__(
        self,
        endpoint: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout_s: float = _DEFAULT_TIMEOUT_S,
        encoder: EventEncoder | None = None,
    ) -> None:
        """Bind the dispatcher to ``endpoint``."""
        self._endpoint = endpoint
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout_s)
        self._encoder: EventEncoder = encoder or _DEFAULT_ENCODER

    @property
    def endpoint(self) -> str:
        """Return the URL events are posted to."""
        return self._endpoint

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def dispatch(self, event: CardEvent) -> DispatchOutcome:
        """Send ``event`` and report how far delivery got.

        Failures are returned as unsuccessful outcomes rather than raised.
        """
        try:
            payload = self._encoder.encode(event)
        except (msgspec.EncodeError, TypeError, ValueError) as exc:
            return DispatchOutcome.failed(event, PollStage.SERIALIZE, str(exc))

        try:
            request = self._client.build_request(
                "POST",
                self._endpoint,
                content=payload,
                headers={"Content-Type": "application/json"},
            )
        except (httpx.InvalidURL, TypeError, ValueError) as exc:
            return DispatchOutcome.failed(event, PollStage.REQUEST, str(exc))

        try:
            response = await self._client.send(request)
        except httpx.HTTPError as exc:
            return DispatchOutcome.failed(
                event, PollStage.SEND, str(exc) or type(exc).__name__
            )

        log_debug(
            logger,
            "Card function responded with HTTP %d for %r",
            response.status_code,
            event.title,
        )
        return DispatchOutcome.delivered(event, response.status_code)


__all__ = [
    "CardDispatcher",
    "EscapingJSONEncoder",
    "EventEncoder",
    "encode_event",
]
