"""Falcon error handlers for failed poll invocations.

Usage
-----
Register the handler on the Falcon app::

    from issuecards.api.errors import handle_poll_error
    from issuecards.errors import PollError

    app.add_error_handler(PollError, handle_poll_error)

"""

from __future__ import annotations

import typing as typ

import falcon

from issuecards.errors import PollError

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

__all__ = ["PollError", "handle_poll_error"]


async def handle_poll_error(
    _req: Request,
    resp: Response,
    ex: PollError,
    _params: dict[str, typ.Any],
) -> None:
    """Map a ``PollError`` to an HTTP 500 plain-text response.

    Parameters
    ----------
    _req
        Falcon request (unused).
    resp
        Falcon response whose status and body are set.
    ex
        The failed invocation's error; its message becomes the body.
    _params
        URI template parameters (unused).

    """
    resp.status = falcon.HTTP_500
    resp.content_type = falcon.MEDIA_TEXT
    resp.text = str(ex)
