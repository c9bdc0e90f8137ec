"""Poller configuration resolved from a key/value source.

The recognised keys and their defaults mirror the function's deployment
environment:

- ``interval``: lookback window in minutes (default ``120``)
- ``trelloboard``: destination board (default ``Main``)
- ``trellolist``: destination list (default ``Tomorrow``)
- ``ofgateway``: invocation gateway base URL
  (default ``http://gateway.openfaas:8080``)
- ``trellofunction``: downstream card function name (default ``trellocard``)
"""

from __future__ import annotations

import dataclasses
import datetime as dt
import os
import re
import typing as typ

from issuecards.common.time import utcnow
from issuecards.errors import PollerConfigError

_DEFAULT_INTERVAL = "120"
_DEFAULT_BOARD = "Main"
_DEFAULT_LIST = "Tomorrow"
_DEFAULT_GATEWAY = "http://gateway.openfaas:8080"
_DEFAULT_FUNCTION = "trellocard"

_INTERVAL_PATTERN = re.compile(r"\+?[0-9]+")

CONFIG_KEYS: tuple[str, ...] = (
    "interval",
    "trelloboard",
    "trellolist",
    "ofgateway",
    "trellofunction",
)


class ConfigSource(typ.Protocol):
    """Resolve configuration values by key."""

    def get(self, key: str, default: str) -> str:
        """Return the value for ``key`` or ``default`` when it is unset."""
        ...


class EnvironmentConfigSource:
    """Read configuration from the process environment.

    An empty variable counts as set, so ``interval=""`` is rejected rather
    than replaced by the default.
    """

    def __init__(self, environ: typ.Mapping[str, str] | None = None) -> None:
        """Bind to ``environ`` (``os.environ`` when omitted)."""
        self._environ = os.environ if environ is None else environ

    def get(self, key: str, default: str) -> str:
        """Return the environment value for ``key`` or ``default``."""
        value = self._environ.get(key)
        return default if value is None else value


def parse_interval(raw: str) -> int:
    """Parse a lookback interval in minutes.

    Raises
    ------
    PollerConfigError
        If ``raw`` is not a non-negative base-10 integer, or is too large
        for the window start to be a representable timestamp.

    """
    if not _INTERVAL_PATTERN.fullmatch(raw):
        raise PollerConfigError.invalid_interval(raw)
    try:
        minutes = int(raw)
        utcnow() - dt.timedelta(minutes=minutes)  # OverflowError past datetime.min
    except (OverflowError, ValueError) as exc:
        raise PollerConfigError.invalid_interval(raw) from exc
    return minutes


@dataclasses.dataclass(frozen=True, slots=True)
class PollerConfig:
    """Invocation-wide settings for the poll pipeline.

    Attributes
    ----------
    interval_minutes
        Width of the polling window.
    board
        Board every card event is addressed to.
    list_name
        List every card event is addressed to.
    gateway_url
        Base URL of the function gateway.
    card_function
        Name of the downstream card-creation function.

    """

    interval_minutes: int = int(_DEFAULT_INTERVAL)
    board: str = _DEFAULT_BOARD
    list_name: str = _DEFAULT_LIST
    gateway_url: str = _DEFAULT_GATEWAY
    card_function: str = _DEFAULT_FUNCTION

    @property
    def card_endpoint(self) -> str:
        """Return the URL card events are posted to."""
        return f"{self.gateway_url.rstrip('/')}/function/{self.card_function}"

    @classmethod
    def from_source(cls, source: ConfigSource) -> PollerConfig:
        """Resolve every recognised key from ``source``.

        Raises
        ------
        PollerConfigError
            If the interval is malformed.

        """
        return cls(
            interval_minutes=parse_interval(source.get("interval", _DEFAULT_INTERVAL)),
            board=source.get("trelloboard", _DEFAULT_BOARD),
            list_name=source.get("trellolist", _DEFAULT_LIST),
            gateway_url=source.get("ofgateway", _DEFAULT_GATEWAY),
            card_function=source.get("trellofunction", _DEFAULT_FUNCTION),
        )

    @classmethod
    def from_env(cls) -> PollerConfig:
        """Resolve configuration from the process environment."""
        return cls.from_source(EnvironmentConfigSource())


__all__ = [
    "CONFIG_KEYS",
    "ConfigSource",
    "EnvironmentConfigSource",
    "PollerConfig",
    "parse_interval",
]
