"""issuecards HTTP API layer.

Public API
----------
create_app
    Application factory that configures the Falcon ASGI app with the poll
    invocation route and the health probes.
"""

from issuecards.api.app import create_app

__all__ = ["create_app"]
