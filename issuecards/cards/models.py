"""Card events and dispatch outcomes.

A :class:`CardEvent` encodes to the JSON body the card-creation function
accepts::

    {"card": {"title": "...", "description": "..."},
     "config": {"board": "...", "list": "..."}}

``config`` and its members are omitted when unset.
"""

from __future__ import annotations

import dataclasses

import msgspec

from issuecards.errors import CardDispatchError, PollStage


class Card(msgspec.Struct, frozen=True, kw_only=True):
    """Title and description of the card to create."""

    title: str
    description: str


class CardDestination(msgspec.Struct, frozen=True, kw_only=True, omit_defaults=True):
    """Board and list the card is created in."""

    board: str | None = None
    list_name: str | None = msgspec.field(default=None, name="list")


class CardEvent(msgspec.Struct, frozen=True, kw_only=True, omit_defaults=True):
    """One issue expressed as a to-be-created card."""

    card: Card
    config: CardDestination | None = None

    @property
    def title(self) -> str:
        """Return the card title."""
        return self.card.title

    @property
    def description(self) -> str:
        """Return the card description."""
        return self.card.description

    @property
    def destination(self) -> CardDestination | None:
        """Return the board/list destination, if any."""
        return self.config


@dataclasses.dataclass(frozen=True, slots=True)
class DispatchOutcome:
    """Result of delivering one card event.

    Attributes
    ----------
    event
        The event that was dispatched.
    success
        ``True`` when the request reached the downstream service.
    stage
        Dispatch step that failed; ``None`` on success.
    error_detail
        Description of the failure; ``None`` on success.
    status_code
        HTTP status returned downstream, when a response was received.

    """

    event: CardEvent
    success: bool
    stage: PollStage | None = None
    error_detail: str | None = None
    status_code: int | None = None

    @classmethod
    def delivered(cls, event: CardEvent, status_code: int) -> DispatchOutcome:
        """Return a successful outcome."""
        return cls(event=event, success=True, status_code=status_code)

    @classmethod
    def failed(
        cls, event: CardEvent, stage: PollStage, detail: str
    ) -> DispatchOutcome:
        """Return an unsuccessful outcome for ``stage``."""
        return cls(event=event, success=False, stage=stage, error_detail=detail)

    def to_error(self) -> CardDispatchError:
        """Return the invocation error describing this failed outcome."""
        if self.success or self.stage is None:
            msg = "successful outcomes have no error"
            raise ValueError(msg)
        return CardDispatchError(
            self.error_detail or "",
            stage=self.stage,
            title=self.event.title,
        )


__all__ = ["Card", "CardDestination", "CardEvent", "DispatchOutcome"]
