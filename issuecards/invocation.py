"""Single poll invocation, from credentials to result.

:func:`run_invocation` reads the GitHub token, resolves configuration, and
runs the pipeline with freshly created HTTP clients that are closed before it
returns. Credential and configuration problems are raised before any network
call is made.
"""

from __future__ import annotations

import collections.abc as cabc
import contextlib
import dataclasses
import typing as typ

from issuecards.cards.dispatcher import CardDispatcher
from issuecards.common.time import utcnow
from issuecards.config import ConfigSource, EnvironmentConfigSource, PollerConfig
from issuecards.credentials import (
    GITHUB_TOKEN_SECRET,
    MountedSecretStore,
    SecretNotFoundError,
    SecretStore,
)
from issuecards.errors import CredentialError, PollError
from issuecards.github.client import GitHubIssuesClient, GitHubRestConfig
from issuecards.github.errors import GitHubConfigError
from issuecards.observability import PollEventLogger
from issuecards.pipeline import FailurePolicy, IssueCardPipeline, PollResult

if typ.TYPE_CHECKING:
    import datetime as dt

    import httpx


@dataclasses.dataclass(frozen=True, slots=True)
class InvocationDependencies:
    """Collaborators used by each invocation.

    Attributes
    ----------
    config_source
        Source of the poller configuration keys.
    secret_store
        Store holding the ``github-accesstoken`` secret.
    http_client
        Optional ``httpx.AsyncClient`` shared by the GitHub client and the
        dispatcher. When ``None`` each creates and closes its own.
    github_api_url
        Base URL of the GitHub REST API.
    policy
        Failure policy applied to card dispatch.
    clock
        Source of the current instant.

    """

    config_source: ConfigSource = dataclasses.field(
        default_factory=EnvironmentConfigSource
    )
    secret_store: SecretStore = dataclasses.field(default_factory=MountedSecretStore)
    http_client: httpx.AsyncClient | None = None
    github_api_url: str = "https://api.github.com"
    policy: FailurePolicy = FailurePolicy.ABORT
    clock: cabc.Callable[[], dt.datetime] = utcnow


def _read_github_config(store: SecretStore, api_url: str) -> GitHubRestConfig:
    try:
        secret = store.get_secret(GITHUB_TOKEN_SECRET)
    except SecretNotFoundError as exc:
        raise CredentialError(str(exc)) from exc
    try:
        config = GitHubRestConfig.from_secret(secret)
    except GitHubConfigError as exc:
        raise CredentialError(str(exc)) from exc
    return dataclasses.replace(config, api_url=api_url)


async def _run_pipeline(
    deps: InvocationDependencies, event_logger: PollEventLogger
) -> PollResult:
    github_config = _read_github_config(deps.secret_store, deps.github_api_url)
    config = PollerConfig.from_source(deps.config_source)

    async with contextlib.AsyncExitStack() as stack:
        issues = GitHubIssuesClient(github_config, http_client=deps.http_client)
        stack.push_async_callback(issues.aclose)
        dispatcher = CardDispatcher(config.card_endpoint, http_client=deps.http_client)
        stack.push_async_callback(dispatcher.aclose)

        pipeline = IssueCardPipeline(
            config,
            issues,
            dispatcher,
            policy=deps.policy,
            clock=deps.clock,
            event_logger=event_logger,
        )
        return await pipeline.run()


async def run_invocation(
    deps: InvocationDependencies | None = None,
    *,
    event_logger: PollEventLogger | None = None,
) -> PollResult:
    """Run one poll and return its result.

    Raises
    ------
    PollError
        Subclass naming the failed stage: credentials, configuration, fetch,
        or card dispatch.

    """
    resolved = deps or InvocationDependencies()
    events = event_logger or PollEventLogger()
    started_at = resolved.clock()
    events.log_run_started(started_at)

    try:
        result = await _run_pipeline(resolved, events)
    except PollError as exc:
        events.log_run_failed(exc, resolved.clock() - started_at)
        raise

    events.log_run_completed(result, resolved.clock() - started_at)
    return result


__all__ = ["InvocationDependencies", "run_invocation"]
