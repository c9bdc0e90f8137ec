"""Issue records returned by the GitHub REST API."""

from __future__ import annotations

import dataclasses
import datetime as dt

import msgspec


class _RepositoryPayload(msgspec.Struct, kw_only=True):
    html_url: str | None = None
    full_name: str | None = None


class IssuePayload(msgspec.Struct, kw_only=True):
    """Subset of a ``GET /user/issues`` item that the poller reads.

    Unknown fields are ignored and every field is optional so that partial
    records still map to cards.
    """

    id: int | None = None
    number: int | None = None
    title: str | None = None
    body: str | None = None
    html_url: str | None = None
    state: str | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None
    repository: _RepositoryPayload | None = None

    def to_issue(self) -> Issue:
        """Convert into an :class:`Issue`, substituting empty strings."""
        repository = self.repository or _RepositoryPayload()
        return Issue(
            id=self.id,
            number=self.number,
            title=self.title or "",
            body=self.body or "",
            repository_url=repository.html_url or "",
            html_url=self.html_url or "",
            state=self.state or "",
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


@dataclasses.dataclass(frozen=True, slots=True)
class Issue:
    """An issue visible to the authenticated user."""

    title: str = ""
    body: str = ""
    repository_url: str = ""
    html_url: str = ""
    id: int | None = None
    number: int | None = None
    state: str = ""
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


__all__ = ["Issue", "IssuePayload"]
