"""Clock helpers."""

from __future__ import annotations

import datetime as dt


def utcnow() -> dt.datetime:
    """Return the current instant as an aware UTC timestamp."""
    return dt.datetime.now(dt.UTC)


def to_github_timestamp(value: dt.datetime) -> str:
    """Render an aware timestamp in the ``YYYY-MM-DDTHH:MM:SSZ`` form GitHub expects."""
    if value.tzinfo is None:
        msg = "timestamp must be timezone-aware"
        raise ValueError(msg)
    return value.astimezone(dt.UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
