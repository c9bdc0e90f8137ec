"""Unit tests for end-to-end poll invocations."""

from __future__ import annotations

import typing as typ

import pytest

from issuecards.config import EnvironmentConfigSource
from issuecards.credentials import GITHUB_TOKEN_SECRET, StaticSecretStore
from issuecards.errors import (
    CardDispatchError,
    CredentialError,
    IssueFetchError,
    PollerConfigError,
    PollStage,
)
from issuecards.invocation import InvocationDependencies, run_invocation
from issuecards.pipeline import FailurePolicy
from tests.helpers.fake_services import (
    CARD_ENDPOINT,
    GATEWAY_URL,
    GITHUB_API_URL,
    FakeServices,
    fixed_clock,
    issue_json,
)


def _deps(
    services: FakeServices,
    *,
    env: dict[str, str] | None = None,
    secrets: dict[str, bytes] | None = None,
    **kwargs: typ.Any,  # noqa: ANN401
) -> InvocationDependencies:
    resolved_env = {"ofgateway": GATEWAY_URL}
    resolved_env.update(env or {})
    return InvocationDependencies(
        config_source=EnvironmentConfigSource(resolved_env),
        secret_store=StaticSecretStore(
            {GITHUB_TOKEN_SECRET: b"gh-token\n"} if secrets is None else secrets
        ),
        http_client=services.client(),
        github_api_url=GITHUB_API_URL,
        clock=fixed_clock,
        **kwargs,
    )


class TestRunInvocation:
    """Tests for wiring credentials, configuration, and the pipeline."""

    @pytest.mark.asyncio
    async def test_success_reports_processed_count(self) -> None:
        """Fetched issues are dispatched and counted."""
        services = FakeServices(
            issues=[issue_json("One", number=1), issue_json("Two", number=2)]
        )

        result = await run_invocation(_deps(services))

        assert result.summary() == "found a total of 2 new issues"
        assert [str(req.url) for req in services.card_requests] == [CARD_ENDPOINT] * 2
        github_request = services.github_requests[0]
        assert github_request.headers["Authorization"] == "Bearer gh-token"
        assert github_request.url.params["since"] == "2024-05-01T10:00:00Z"

    @pytest.mark.asyncio
    async def test_interval_controls_the_window(self) -> None:
        """The configured interval sets the since parameter."""
        services = FakeServices()

        await run_invocation(_deps(services, env={"interval": "60"}))

        assert services.github_requests[0].url.params["since"] == (
            "2024-05-01T11:00:00Z"
        )

    @pytest.mark.asyncio
    async def test_malformed_interval_fails_before_network(self) -> None:
        """A bad interval fails without contacting GitHub or the gateway."""
        services = FakeServices(issues=[issue_json("One")])

        with pytest.raises(PollerConfigError) as exc_info:
            await run_invocation(_deps(services, env={"interval": "abc"}))

        assert "timeinterval" in str(exc_info.value)
        assert "'abc'" in str(exc_info.value)
        assert services.github_requests == []
        assert services.card_requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["99999999999999999999", "1000000000000"])
    async def test_out_of_range_interval_is_a_config_error(self, raw: str) -> None:
        """An interval reaching past the earliest timestamp is a config error."""
        services = FakeServices(issues=[issue_json("One")])

        with pytest.raises(PollerConfigError) as exc_info:
            await run_invocation(_deps(services, env={"interval": raw}))

        assert str(exc_info.value).startswith("error getting timeinterval:")
        assert isinstance(exc_info.value.__cause__, OverflowError)
        assert services.github_requests == []

    @pytest.mark.asyncio
    async def test_missing_token_fails_before_network(self) -> None:
        """A missing secret is a credential error with no network calls."""
        services = FakeServices(issues=[issue_json("One")])

        with pytest.raises(CredentialError) as exc_info:
            await run_invocation(_deps(services, secrets={}))

        assert exc_info.value.stage is PollStage.CREDENTIALS
        assert str(exc_info.value).startswith(
            "error reading GitHub personal access token:"
        )
        assert services.github_requests == []

    @pytest.mark.asyncio
    async def test_blank_token_is_a_credential_error(self) -> None:
        """An empty token file is rejected before any request."""
        services = FakeServices()

        with pytest.raises(CredentialError, match="non-empty"):
            await run_invocation(
                _deps(services, secrets={GITHUB_TOKEN_SECRET: b"\n"})
            )

        assert services.github_requests == []

    @pytest.mark.asyncio
    async def test_github_rejection_fails_the_invocation(self) -> None:
        """GitHub errors surface as fetch failures."""
        services = FakeServices(issues=[issue_json("One")], github_status=401)

        with pytest.raises(IssueFetchError, match="HTTP 401"):
            await run_invocation(_deps(services))

        assert services.card_requests == []

    @pytest.mark.asyncio
    async def test_dispatch_failure_aborts_remaining_events(self) -> None:
        """The second send fails and the third is never attempted."""
        services = FakeServices(
            issues=[issue_json(f"Issue {n}", number=n) for n in (1, 2, 3)],
            fail_card_numbers=frozenset({2}),
        )

        with pytest.raises(CardDispatchError) as exc_info:
            await run_invocation(_deps(services))

        assert exc_info.value.title == "Issue 2"
        assert len(services.card_requests) == 2

    @pytest.mark.asyncio
    async def test_continue_policy_returns_partial_result(self) -> None:
        """The continue policy reports failures instead of raising."""
        services = FakeServices(
            issues=[issue_json(f"Issue {n}", number=n) for n in (1, 2, 3)],
            fail_card_numbers=frozenset({2}),
        )

        result = await run_invocation(
            _deps(services, policy=FailurePolicy.CONTINUE)
        )

        assert result.processed_count == 3
        assert [o.event.title for o in result.failures] == ["Issue 2"]
        assert len(services.card_requests) == 3
