"""Map GitHub issues onto card events."""

from __future__ import annotations

import dataclasses
import typing as typ

from .models import Card, CardDestination, CardEvent

if typ.TYPE_CHECKING:
    from issuecards.config import PollerConfig
    from issuecards.github.models import Issue


def describe_issue(issue: Issue) -> str:
    """Return the two-line card description linking back to the issue."""
    return f"Repository: {issue.repository_url}\nDirect link: {issue.html_url}"


@dataclasses.dataclass(frozen=True, slots=True)
class CardEventBuilder:
    """Build card events addressed to one board/list."""

    destination: CardDestination

    @classmethod
    def for_config(cls, config: PollerConfig) -> CardEventBuilder:
        """Return a builder targeting the configured board and list."""
        return cls(
            destination=CardDestination(board=config.board, list_name=config.list_name)
        )

    def build(self, issue: Issue) -> CardEvent:
        """Return the card event for ``issue``."""
        return CardEvent(
            card=Card(title=issue.title, description=describe_issue(issue)),
            config=self.destination,
        )

    def build_all(self, issues: typ.Iterable[Issue]) -> list[CardEvent]:
        """Return one card event per issue, preserving order."""
        return [self.build(issue) for issue in issues]


__all__ = ["CardEventBuilder", "describe_issue"]
