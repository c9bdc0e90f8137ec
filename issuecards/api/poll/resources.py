"""Invocation resource that runs one poll per request.

The request body is ignored: the trigger is the request itself, typically
sent by a cron connector. Successful runs answer ``200`` with the plain-text
summary; failures raise :class:`~issuecards.errors.PollError`, which the app's
error handler turns into a ``500`` with the error message as the body.

Usage
-----
Register the resource on the Falcon app::

    from issuecards.api.poll.resources import PollResource

    app.add_route("/", PollResource(dependencies))

"""

from __future__ import annotations

import typing as typ

import falcon

from issuecards.invocation import InvocationDependencies, run_invocation

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

__all__ = ["PollResource"]


class PollResource:
    """Run a poll invocation on GET or POST."""

    def __init__(self, dependencies: InvocationDependencies | None = None) -> None:
        """Store the collaborators used for every invocation."""
        self._dependencies = dependencies or InvocationDependencies()

    async def _invoke(self, resp: Response) -> None:
        result = await run_invocation(self._dependencies)
        resp.content_type = falcon.MEDIA_TEXT
        resp.text = result.summary()
        # Partial failures only occur under the continue policy.
        resp.status = falcon.HTTP_200 if result.succeeded else falcon.HTTP_500

    async def on_post(self, _req: Request, resp: Response) -> None:
        """Handle POST / by running one poll."""
        await self._invoke(resp)

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET / by running one poll."""
        await self._invoke(resp)
