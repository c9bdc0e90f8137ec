"""GitHub REST client that lists issues changed since a checkpoint."""

from __future__ import annotations

import dataclasses
import typing as typ

import httpx
import msgspec

from issuecards.common.time import to_github_timestamp

from .errors import GitHubAPIError, GitHubConfigError, GitHubResponseShapeError
from .models import Issue, IssuePayload

if typ.TYPE_CHECKING:
    import datetime as dt

_HTTP_ERROR_STATUS_THRESHOLD = 400
_ERROR_DETAIL_LIMIT = 200


class IssueSource(typ.Protocol):
    """Interface for listing open issues changed since a timestamp."""

    async def list_issues_since(self, since: dt.datetime) -> list[Issue]:
        """Return open issues created or updated at or after ``since``."""
        ...


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubRestConfig:
    """Configuration for the GitHub REST issues client.

    ``issue_filter`` follows the ``filter`` query parameter of
    ``GET /user/issues``; ``assigned`` is GitHub's default.
    """

    token: str
    api_url: str = "https://api.github.com"
    timeout_s: float = 20.0
    user_agent: str = "issuecards/0.1"
    per_page: int = 100
    issue_filter: str = "assigned"

    @classmethod
    def from_secret(cls, secret: bytes) -> GitHubRestConfig:
        """Build configuration from raw token secret bytes."""
        try:
            token = secret.decode("utf-8").strip()
        except UnicodeDecodeError as exc:
            raise GitHubConfigError.undecodable_token() from exc
        if not token:
            raise GitHubConfigError.empty_token()
        return cls(token=token)


_ISSUE_LIST_DECODER = msgspec.json.Decoder(list[IssuePayload])


def _decode_issues(content: bytes) -> list[Issue]:
    try:
        payloads = _ISSUE_LIST_DECODER.decode(content)
    except msgspec.DecodeError as exc:
        raise GitHubResponseShapeError.undecodable(str(exc)) from exc
    return [payload.to_issue() for payload in payloads]


def _error_detail(response: httpx.Response) -> str:
    text = response.text.strip()
    if len(text) > _ERROR_DETAIL_LIMIT:
        return text[:_ERROR_DETAIL_LIMIT] + "..."
    return text


def _next_page_url(response: httpx.Response) -> str | None:
    """Return the ``rel="next"`` URL from the ``Link`` header, if any."""
    next_link = response.links.get("next")
    if not next_link:
        return None
    url = next_link.get("url")
    return url if isinstance(url, str) and url else None


class GitHubIssuesClient:
    """GitHub REST implementation of :class:`IssueSource`.

    Lists open issues for the authenticated user through
    ``GET /user/issues``, following ``Link`` pagination until exhausted.
    """

    def __init__(
        self,
        config: GitHubRestConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the client with the provided API configuration."""
        if not config.token.strip():
            raise GitHubConfigError.empty_token()

        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=config.timeout_s)
        self._headers = {
            "Authorization": f"Bearer {config.token}",
            "User-Agent": config.user_agent,
            "Accept": "application/vnd.github+json",
        }

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def list_issues_since(self, since: dt.datetime) -> list[Issue]:
        """Return open issues updated at or after ``since``, oldest page first."""
        params: dict[str, str | int] | None = {
            "filter": self._config.issue_filter,
            "state": "open",
            "since": to_github_timestamp(since),
            "per_page": self._config.per_page,
        }
        url: str | None = f"{self._config.api_url.rstrip('/')}/user/issues"
        issues: list[Issue] = []
        while url is not None:
            response = await self._get(url, params)
            issues.extend(_decode_issues(response.content))
            url = _next_page_url(response)
            # Next-page URLs already carry the query string.
            params = None
        return issues

    async def _get(
        self, url: str, params: dict[str, str | int] | None
    ) -> httpx.Response:
        try:
            response = await self._client.get(
                url, params=params, headers=self._headers
            )
        except httpx.TimeoutException as exc:
            raise GitHubAPIError.timeout() from exc
        except httpx.RequestError as exc:
            raise GitHubAPIError.network_error(str(exc)) from exc
        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            raise GitHubAPIError.http_error(
                response.status_code, _error_detail(response)
            )
        return response


__all__ = ["GitHubIssuesClient", "GitHubRestConfig", "IssueSource"]
