"""Application factory for the issuecards Falcon ASGI application.

Usage
-----
Create an app that reads configuration from the environment and the token
from the mounted secrets directory::

    app = create_app()

Create an app with explicit collaborators::

    from issuecards.api.app import create_app
    from issuecards.invocation import InvocationDependencies

    app = create_app(InvocationDependencies(config_source=source))

"""

from __future__ import annotations

import falcon.asgi

from issuecards.api.errors import handle_poll_error
from issuecards.api.health.resources import HealthResource, ReadyResource
from issuecards.api.poll.resources import PollResource
from issuecards.errors import PollError
from issuecards.invocation import InvocationDependencies

__all__ = ["create_app"]


def create_app(
    dependencies: InvocationDependencies | None = None,
) -> falcon.asgi.App:
    """Create and configure the Falcon ASGI application.

    Parameters
    ----------
    dependencies
        Collaborators used by each invocation. ``None`` uses the
        environment and the mounted secrets directories.

    Returns
    -------
    falcon.asgi.App
        App serving ``/`` (poll invocation), ``/health`` and ``/ready``.

    """
    app = falcon.asgi.App()  # type: ignore[no-matching-overload]  # Falcon stubs

    app.add_route("/", PollResource(dependencies or InvocationDependencies()))
    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource())

    app.add_error_handler(PollError, handle_poll_error)

    return app
