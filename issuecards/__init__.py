"""issuecards: turn recently changed GitHub issues into Trello card events."""

from __future__ import annotations

from issuecards.config import PollerConfig
from issuecards.errors import PollError
from issuecards.invocation import InvocationDependencies, run_invocation
from issuecards.pipeline import (
    FailurePolicy,
    IssueCardPipeline,
    PollResult,
    compute_checkpoint,
)

__all__ = [
    "FailurePolicy",
    "InvocationDependencies",
    "IssueCardPipeline",
    "PollError",
    "PollResult",
    "PollerConfig",
    "compute_checkpoint",
    "run_invocation",
]
