"""Structured log events for poll invocations.

Events are emitted as ``[event.type] key=value ...`` lines: INFO for progress,
WARNING for individual card failures, ERROR for failed invocations.
"""

from __future__ import annotations

import enum
import typing as typ

from issuecards.errors import (
    CardDispatchError,
    CredentialError,
    IssueFetchError,
    PollerConfigError,
)
from issuecards.github.errors import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubResponseShapeError,
)
from issuecards.logging import (
    format_event_message,
    get_logger,
    log_exception,
    log_info,
    log_warning,
)

if typ.TYPE_CHECKING:
    import datetime as dt

    from issuecards.cards.models import DispatchOutcome
    from issuecards.pipeline import PollResult

logger = get_logger(__name__)

_HTTP_SERVER_ERROR_THRESHOLD = 500


class PollEventType(enum.StrEnum):
    """Structured log event types."""

    RUN_STARTED = "poll.run.started"
    RUN_COMPLETED = "poll.run.completed"
    RUN_FAILED = "poll.run.failed"
    ISSUES_FETCHED = "poll.issues.fetched"
    CARD_DISPATCHED = "poll.card.dispatched"
    CARD_FAILED = "poll.card.failed"


class ErrorCategory(enum.StrEnum):
    """Categories used to route failed-invocation alerts."""

    CONFIGURATION = "configuration"
    CREDENTIALS = "credentials"
    TRANSIENT = "transient"
    CLIENT_ERROR = "client_error"
    SCHEMA_DRIFT = "schema_drift"
    DISPATCH = "dispatch"
    UNKNOWN = "unknown"


def _categorize_github_error(exc: BaseException | None) -> ErrorCategory:
    if isinstance(exc, GitHubResponseShapeError):
        return ErrorCategory.SCHEMA_DRIFT
    if isinstance(exc, GitHubConfigError):
        return ErrorCategory.CREDENTIALS
    if isinstance(exc, GitHubAPIError):
        # No status code means the request never completed.
        if exc.status_code is None or exc.status_code >= _HTTP_SERVER_ERROR_THRESHOLD:
            return ErrorCategory.TRANSIENT
        return ErrorCategory.CLIENT_ERROR
    return ErrorCategory.UNKNOWN


_EXCEPTION_CATEGORY_MAP: tuple[tuple[type[BaseException], ErrorCategory], ...] = (
    (PollerConfigError, ErrorCategory.CONFIGURATION),
    (CredentialError, ErrorCategory.CREDENTIALS),
    (CardDispatchError, ErrorCategory.DISPATCH),
)


def categorize_error(exc: BaseException) -> ErrorCategory:
    """Categorize an invocation failure for alerting.

    Fetch errors are classified by the GitHub error that caused them.
    """
    if isinstance(exc, IssueFetchError):
        return _categorize_github_error(exc.__cause__)

    for exc_type, category in _EXCEPTION_CATEGORY_MAP:
        if isinstance(exc, exc_type):
            return category

    return _categorize_github_error(exc)


class PollEventLogger:
    """Emit poll lifecycle events through femtologging."""

    def log_run_started(self, started_at: dt.datetime) -> None:
        """Log the start of an invocation."""
        log_info(
            logger,
            "%s",
            format_event_message(
                PollEventType.RUN_STARTED, started_at=started_at.isoformat()
            ),
        )

    def log_issues_fetched(self, since: dt.datetime, count: int) -> None:
        """Log how many issues the fetch returned."""
        log_info(
            logger,
            "%s",
            format_event_message(
                PollEventType.ISSUES_FETCHED,
                since=since.isoformat(),
                issues_found=count,
            ),
        )

    def log_card_dispatched(self, index: int, outcome: DispatchOutcome) -> None:
        """Log a delivered card event."""
        log_info(
            logger,
            "%s",
            format_event_message(
                PollEventType.CARD_DISPATCHED,
                index=index,
                title=repr(outcome.event.title),
                status_code=outcome.status_code,
            ),
        )

    def log_card_failed(self, index: int, outcome: DispatchOutcome) -> None:
        """Log a card event that could not be delivered."""
        log_warning(
            logger,
            "%s",
            format_event_message(
                PollEventType.CARD_FAILED,
                index=index,
                title=repr(outcome.event.title),
                stage=outcome.stage,
                error_detail=outcome.error_detail,
            ),
        )

    def log_run_completed(self, result: PollResult, duration: dt.timedelta) -> None:
        """Log a finished invocation with its counts."""
        log_info(
            logger,
            "%s",
            format_event_message(
                PollEventType.RUN_COMPLETED,
                duration_seconds=f"{duration.total_seconds():.3f}",
                processed_count=result.processed_count,
                failed_count=len(result.failures),
            ),
        )

    def log_run_failed(self, error: BaseException, duration: dt.timedelta) -> None:
        """Log a failed invocation with its error category."""
        log_exception(
            logger,
            format_event_message(
                PollEventType.RUN_FAILED,
                duration_seconds=f"{duration.total_seconds():.3f}",
                error_type=type(error).__name__,
                error_category=categorize_error(error),
                error_message=error,
            ),
            error,
        )


__all__ = [
    "ErrorCategory",
    "PollEventLogger",
    "PollEventType",
    "categorize_error",
]
