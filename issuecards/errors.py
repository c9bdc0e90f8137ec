"""Invocation-level errors.

Every failure that ends an invocation is a :class:`PollError`. The ``stage``
attribute names the pipeline step that failed and ``str(exc)`` is the
human-readable message returned to the caller.
"""

from __future__ import annotations

import enum


class PollStage(enum.StrEnum):
    """Pipeline steps that can fail an invocation."""

    CREDENTIALS = "credentials"
    CONFIG = "config"
    FETCH = "fetch"
    SERIALIZE = "serialize"
    REQUEST = "request"
    SEND = "send"


class PollError(Exception):
    """Base class for errors that fail a poll invocation.

    Attributes
    ----------
    stage
        Pipeline step that raised the error.

    """

    stage: PollStage

    def __init__(self, message: str, *, stage: PollStage) -> None:
        """Initialise with the caller-facing message and failing stage."""
        self.stage = stage
        super().__init__(message)


class CredentialError(PollError):
    """Raised when the issue tracker access token cannot be read."""

    def __init__(self, detail: str) -> None:
        """Initialise from the underlying retrieval failure."""
        self.detail = detail
        super().__init__(
            f"error reading GitHub personal access token: {detail}",
            stage=PollStage.CREDENTIALS,
        )


class PollerConfigError(PollError):
    """Raised when a configuration value cannot be used."""

    def __init__(self, message: str, *, key: str) -> None:
        """Initialise with a message and the offending configuration key."""
        self.key = key
        super().__init__(message, stage=PollStage.CONFIG)

    @classmethod
    def invalid_interval(cls, raw: str) -> PollerConfigError:
        """Return an error for an interval that is not a non-negative integer."""
        return cls(
            f"error getting timeinterval: invalid interval {raw!r}, "
            "expected a non-negative whole number of minutes",
            key="interval",
        )


class IssueFetchError(PollError):
    """Raised when the issue tracker cannot list issues."""

    def __init__(self, detail: str) -> None:
        """Initialise from the underlying client failure."""
        self.detail = detail
        super().__init__(
            f"error getting new issues from GitHub: {detail}",
            stage=PollStage.FETCH,
        )


_DISPATCH_PREFIXES: dict[PollStage, str] = {
    PollStage.SERIALIZE: "error marshalling GitHub issue for Trello",
    PollStage.REQUEST: "error sending message to Trello function",
    PollStage.SEND: "received error from Trello function",
}


class CardDispatchError(PollError):
    """Raised when a card event cannot be delivered under the abort policy."""

    def __init__(self, detail: str, *, stage: PollStage, title: str = "") -> None:
        """Initialise with the failing dispatch stage and detail."""
        if stage not in _DISPATCH_PREFIXES:
            msg = f"{stage} is not a dispatch stage"
            raise ValueError(msg)
        self.detail = detail
        self.title = title
        super().__init__(f"{_DISPATCH_PREFIXES[stage]}: {detail}", stage=stage)


__all__ = [
    "CardDispatchError",
    "CredentialError",
    "IssueFetchError",
    "PollError",
    "PollStage",
    "PollerConfigError",
]
