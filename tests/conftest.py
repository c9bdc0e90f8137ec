"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import pytest

from issuecards.config import CONFIG_KEYS

_RUNTIME_VARIABLES = ("ISSUECARDS_HOST", "ISSUECARDS_PORT", "ISSUECARDS_LOG_LEVEL")


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop poller and runtime variables inherited from the shell."""
    for key in (*CONFIG_KEYS, *_RUNTIME_VARIABLES):
        monkeypatch.delenv(key, raising=False)
