"""Unit tests for poller configuration resolution."""

from __future__ import annotations

import os
from unittest import mock

import pytest

from issuecards.config import EnvironmentConfigSource, PollerConfig, parse_interval
from issuecards.errors import PollerConfigError, PollStage


class TestPollerConfigFromSource:
    """Tests for resolving configuration keys."""

    def test_defaults_when_nothing_is_set(self) -> None:
        """Every key falls back to its documented default."""
        config = PollerConfig.from_source(EnvironmentConfigSource({}))

        assert config.interval_minutes == 120, "Expected default interval"
        assert config.board == "Main", "Expected default board"
        assert config.list_name == "Tomorrow", "Expected default list"
        assert config.gateway_url == "http://gateway.openfaas:8080"
        assert config.card_function == "trellocard"
        assert config.card_endpoint == (
            "http://gateway.openfaas:8080/function/trellocard"
        )

    def test_reads_every_key(self) -> None:
        """Custom values override each default."""
        source = EnvironmentConfigSource(
            {
                "interval": "15",
                "trelloboard": "Ops",
                "trellolist": "Inbox",
                "ofgateway": "http://localhost:8080/",
                "trellofunction": "cards",
            }
        )
        config = PollerConfig.from_source(source)

        assert config == PollerConfig(
            interval_minutes=15,
            board="Ops",
            list_name="Inbox",
            gateway_url="http://localhost:8080/",
            card_function="cards",
        )
        assert config.card_endpoint == "http://localhost:8080/function/cards"

    def test_from_env_reads_process_environment(self) -> None:
        """from_env resolves keys from os.environ."""
        env = {"interval": "60", "trelloboard": "Team"}
        with mock.patch.dict(os.environ, env, clear=True):
            config = PollerConfig.from_env()

        assert config.interval_minutes == 60
        assert config.board == "Team"
        assert config.list_name == "Tomorrow"

    @pytest.mark.parametrize(
        "raw",
        [
            "abc",
            "",
            " ",
            "1.5",
            "-5",
            "12abc",
            "0x10",
            "1_000",
            "99999999999999999999",
            "1000000000000",
        ],
    )
    def test_malformed_interval_is_a_config_error(self, raw: str) -> None:
        """Malformed intervals fail instead of defaulting."""
        source = EnvironmentConfigSource({"interval": raw})
        with pytest.raises(PollerConfigError) as exc_info:
            PollerConfig.from_source(source)

        error = exc_info.value
        assert error.key == "interval"
        assert error.stage is PollStage.CONFIG
        assert str(error).startswith("error getting timeinterval:")
        assert repr(raw) in str(error), "Error should quote the raw value"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("0", 0), ("60", 60), ("+30", 30), ("0120", 120)],
)
def test_parse_interval_accepts_whole_minutes(raw: str, expected: int) -> None:
    """Non-negative base-10 integers parse."""
    assert parse_interval(raw) == expected
