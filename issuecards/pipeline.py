"""Polling window, card fan-out, and result aggregation.

One :meth:`IssueCardPipeline.run` call covers a single invocation: compute
the checkpoint, list open issues changed since it, build one card event per
issue, and dispatch the events in fetch order. Dispatch is strictly
sequential.

Under :attr:`FailurePolicy.ABORT` (the default) the first failed dispatch
ends the run with a :class:`~issuecards.errors.CardDispatchError` and later
events are never sent. :attr:`FailurePolicy.CONTINUE` dispatches every event
and reports failed outcomes in :attr:`PollResult.failures`.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses
import datetime as dt
import enum
import typing as typ

from issuecards.cards.builder import CardEventBuilder
from issuecards.common.time import utcnow
from issuecards.errors import IssueFetchError
from issuecards.github.errors import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubResponseShapeError,
)
from issuecards.observability import PollEventLogger

if typ.TYPE_CHECKING:
    from issuecards.cards.dispatcher import CardDispatcher
    from issuecards.cards.models import DispatchOutcome
    from issuecards.config import PollerConfig
    from issuecards.github.client import IssueSource
    from issuecards.github.models import Issue

_FETCH_ERRORS = (GitHubAPIError, GitHubConfigError, GitHubResponseShapeError)


def compute_checkpoint(now: dt.datetime, interval_minutes: int) -> dt.datetime:
    """Return the lower bound of the polling window, ``now - interval``."""
    if interval_minutes < 0:
        msg = f"interval_minutes must be non-negative, got {interval_minutes}"
        raise ValueError(msg)
    return now - dt.timedelta(minutes=interval_minutes)


class FailurePolicy(enum.StrEnum):
    """How a failed card dispatch affects the rest of the run."""

    ABORT = "abort"
    CONTINUE = "continue"


@dataclasses.dataclass(frozen=True, slots=True)
class PollResult:
    """Outcome of one invocation.

    Attributes
    ----------
    processed_count
        Number of issues found and handed to the dispatcher.
    failures
        Failed dispatch outcomes in fetch order. Always empty under
        :attr:`FailurePolicy.ABORT`.

    """

    processed_count: int
    failures: tuple[DispatchOutcome, ...] = ()

    @property
    def succeeded(self) -> bool:
        """Return ``True`` when no dispatch failed."""
        return not self.failures

    def summary(self) -> str:
        """Return the human-readable invocation summary."""
        text = f"found a total of {self.processed_count} new issues"
        if not self.failures:
            return text
        details = "; ".join(
            f"{outcome.event.title!r} ({outcome.stage}): {outcome.error_detail}"
            for outcome in self.failures
        )
        return f"{text}, {len(self.failures)} failed to dispatch: {details}"


class IssueCardPipeline:
    """Turn recently changed issues into dispatched card events."""

    def __init__(  # noqa: PLR0913
        self,
        config: PollerConfig,
        issues: IssueSource,
        dispatcher: CardDispatcher,
        *,
        policy: FailurePolicy = FailurePolicy.ABORT,
        clock: cabc.Callable[[], dt.datetime] = utcnow,
        event_logger: PollEventLogger | None = None,
    ) -> None:
        """Wire the pipeline to its collaborators."""
        self._config = config
        self._issues = issues
        self._dispatcher = dispatcher
        self._policy = policy
        self._clock = clock
        self._builder = CardEventBuilder.for_config(config)
        self._event_logger = event_logger or PollEventLogger()

    async def run(self) -> PollResult:
        """Run one poll.

        Raises
        ------
        IssueFetchError
            If the issue listing fails.
        CardDispatchError
            If a dispatch fails under :attr:`FailurePolicy.ABORT`.

        """
        since = compute_checkpoint(self._clock(), self._config.interval_minutes)
        issues = await self._fetch(since)
        self._event_logger.log_issues_fetched(since, len(issues))

        failures: list[DispatchOutcome] = []
        for index, event in enumerate(self._builder.build_all(issues)):
            outcome = await self._dispatcher.dispatch(event)
            if outcome.success:
                self._event_logger.log_card_dispatched(index, outcome)
                continue

            self._event_logger.log_card_failed(index, outcome)
            if self._policy is FailurePolicy.ABORT:
                raise outcome.to_error()
            failures.append(outcome)

        return PollResult(processed_count=len(issues), failures=tuple(failures))

    async def _fetch(self, since: dt.datetime) -> list[Issue]:
        try:
            return await self._issues.list_issues_since(since)
        except _FETCH_ERRORS as exc:
            raise IssueFetchError(str(exc)) from exc


__all__ = [
    "FailurePolicy",
    "IssueCardPipeline",
    "PollResult",
    "compute_checkpoint",
]
