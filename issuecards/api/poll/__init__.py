"""Poll invocation resource."""

from issuecards.api.poll.resources import PollResource

__all__ = ["PollResource"]
