"""GitHub issue listing client and records."""

from __future__ import annotations

from .client import GitHubIssuesClient, GitHubRestConfig, IssueSource
from .errors import GitHubAPIError, GitHubConfigError, GitHubResponseShapeError
from .models import Issue, IssuePayload

__all__ = [
    "GitHubAPIError",
    "GitHubConfigError",
    "GitHubIssuesClient",
    "GitHubResponseShapeError",
    "GitHubRestConfig",
    "Issue",
    "IssuePayload",
    "IssueSource",
]
