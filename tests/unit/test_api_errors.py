"""Unit tests for issuecards.api.errors error handlers.

Usage
-----
Run with pytest::

    pytest tests/unit/test_api_errors.py

"""

from __future__ import annotations

import falcon
import falcon.asgi
import falcon.testing
import pytest

from issuecards.api.errors import handle_poll_error
from issuecards.errors import (
    CardDispatchError,
    CredentialError,
    IssueFetchError,
    PollError,
    PollerConfigError,
    PollStage,
)


class _RaisingResource:
    """Resource that raises a preconfigured PollError."""

    def __init__(self, error: PollError) -> None:
        self._error = error

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        raise self._error


def _client(error: PollError) -> falcon.testing.TestClient:
    app = falcon.asgi.App()
    app.add_route("/poll", _RaisingResource(error))
    app.add_error_handler(PollError, handle_poll_error)
    return falcon.testing.TestClient(app)


@pytest.mark.parametrize(
    ("error", "body"),
    [
        (
            CredentialError("secret missing"),
            "error reading GitHub personal access token: secret missing",
        ),
        (
            IssueFetchError("GitHub REST HTTP 401"),
            "error getting new issues from GitHub: GitHub REST HTTP 401",
        ),
        (
            CardDispatchError("bad payload", stage=PollStage.SERIALIZE),
            "error marshalling GitHub issue for Trello: bad payload",
        ),
        (
            CardDispatchError("invalid URL", stage=PollStage.REQUEST),
            "error sending message to Trello function: invalid URL",
        ),
    ],
)
def test_poll_errors_map_to_500_text(error: PollError, body: str) -> None:
    """Every PollError becomes a 500 with its message as the body."""
    result = _client(error).simulate_get("/poll")

    assert result.status == falcon.HTTP_500, "expected HTTP 500"
    assert result.text == body
    assert result.headers["content-type"].startswith("text/plain")


def test_config_error_message_names_interval() -> None:
    """Interval errors identify the parse failure."""
    result = _client(PollerConfigError.invalid_interval("abc")).simulate_get("/poll")

    assert result.status == falcon.HTTP_500
    assert "timeinterval" in result.text
    assert "'abc'" in result.text


def test_dispatch_error_rejects_non_dispatch_stage() -> None:
    """CardDispatchError only accepts dispatch stages."""
    with pytest.raises(ValueError, match="not a dispatch stage"):
        CardDispatchError("boom", stage=PollStage.FETCH)
