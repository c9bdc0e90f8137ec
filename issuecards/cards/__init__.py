"""Card event construction and delivery."""

from __future__ import annotations

from .builder import CardEventBuilder, describe_issue
from .dispatcher import CardDispatcher, EscapingJSONEncoder, encode_event
from .models import Card, CardDestination, CardEvent, DispatchOutcome

__all__ = [
    "Card",
    "CardDestination",
    "CardDispatcher",
    "CardEvent",
    "CardEventBuilder",
    "DispatchOutcome",
    "EscapingJSONEncoder",
    "describe_issue",
    "encode_event",
]
