"""issuecards runtime entrypoint for function deployments.

This module provides the ASGI application factory used by Granian. The app
reads poller configuration from the environment and the GitHub token from
the mounted secrets directories on every invocation.

Server settings are driven by environment variables:

- ``ISSUECARDS_HOST``: Bind address (default ``0.0.0.0``)
- ``ISSUECARDS_PORT``: Listen port (default ``8080``)
- ``ISSUECARDS_LOG_LEVEL``: Log level (default ``INFO``)

Run the service directly with ``python -m issuecards.runtime``.
"""

from __future__ import annotations

import os
import typing as typ

from issuecards.logging import (
    configure_logging,
    get_logger,
    log_error,
    log_info,
    log_warning,
)

if typ.TYPE_CHECKING:
    import falcon.asgi

__all__ = ["create_app", "main"]

logger = get_logger(__name__)

_MIN_PORT = 1
_MAX_PORT = 65535


def _parse_port(port_str: str) -> int:
    """Parse and validate a port number string.

    Raises
    ------
    SystemExit
        If port_str is not a valid integer in range 1-65535.

    """
    try:
        port = int(port_str)
        if not (_MIN_PORT <= port <= _MAX_PORT):
            msg = f"port {port} outside valid range {_MIN_PORT}-{_MAX_PORT}"
            raise ValueError(msg)  # noqa: TRY301 - unify conversion and range errors
    except ValueError as exc:
        log_error(
            logger,
            "Invalid ISSUECARDS_PORT value: %r (must be %d-%d): %s",
            port_str,
            _MIN_PORT,
            _MAX_PORT,
            exc,
        )
        raise SystemExit(1) from exc
    return port


def create_app() -> falcon.asgi.App:
    """Create the Falcon ASGI application with default collaborators."""
    from issuecards.api.app import create_app as _create_api_app

    return _create_api_app()


def main() -> None:
    """Start the issuecards runtime server using Granian."""
    from granian import Granian
    from granian.constants import Interfaces

    host = os.environ.get("ISSUECARDS_HOST", "0.0.0.0")  # noqa: S104 - bind all interfaces for container
    port = _parse_port(os.environ.get("ISSUECARDS_PORT", "8080"))
    log_level_str = os.environ.get("ISSUECARDS_LOG_LEVEL", "INFO")

    normalized_level, invalid_level = configure_logging(log_level_str)
    if invalid_level:
        log_warning(
            logger,
            "Invalid ISSUECARDS_LOG_LEVEL %r, falling back to %s",
            log_level_str,
            normalized_level,
        )

    log_info(
        logger,
        "Starting issuecards runtime on %s:%d (log_level=%s)",
        host,
        port,
        normalized_level,
    )

    server = Granian(
        "issuecards.runtime:create_app",
        address=host,
        port=port,
        interface=Interfaces.ASGI,
        factory=True,
    )
    server.serve()


if __name__ == "__main__":
    main()
