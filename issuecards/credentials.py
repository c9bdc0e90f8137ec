"""Secret retrieval for the issue tracker access token.

OpenFaaS mounts secrets under ``/var/openfaas/secrets``; releases up to 0.8.2
used ``/run/secrets``. :class:`MountedSecretStore` reads the current location
first and falls back to the legacy one.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

GITHUB_TOKEN_SECRET = "github-accesstoken"

DEFAULT_SECRET_DIRS: tuple[Path, ...] = (
    Path("/var/openfaas/secrets"),
    Path("/run/secrets"),
)


class SecretNotFoundError(LookupError):
    """Raised when a named secret is not present in any location."""

    def __init__(self, name: str, searched: typ.Sequence[Path]) -> None:
        """Initialise with the secret name and the paths that were tried."""
        self.name = name
        self.searched = tuple(searched)
        locations = ", ".join(str(path) for path in self.searched)
        super().__init__(f"secret {name!r} not found (searched: {locations})")


class SecretStore(typ.Protocol):
    """Retrieve secret material by name."""

    def get_secret(self, name: str) -> bytes:
        """Return the raw secret bytes or raise :class:`SecretNotFoundError`."""
        ...


class MountedSecretStore:
    """Read secrets from files mounted into the container."""

    def __init__(self, directories: typ.Sequence[Path] = DEFAULT_SECRET_DIRS) -> None:
        """Search ``directories`` in order for secret files."""
        self._directories = tuple(directories)

    @property
    def directories(self) -> tuple[Path, ...]:
        """Directories searched, in order."""
        return self._directories

    def get_secret(self, name: str) -> bytes:
        """Return the first readable ``<dir>/<name>`` file's contents."""
        searched: list[Path] = []
        for directory in self._directories:
            path = directory / name
            searched.append(path)
            try:
                return path.read_bytes()
            except OSError:
                continue
        raise SecretNotFoundError(name, searched)


class StaticSecretStore:
    """In-memory secret store for local runs and tests."""

    def __init__(self, secrets: typ.Mapping[str, bytes]) -> None:
        """Serve secrets from ``secrets``."""
        self._secrets = dict(secrets)

    def get_secret(self, name: str) -> bytes:
        """Return the stored secret or raise :class:`SecretNotFoundError`."""
        try:
            return self._secrets[name]
        except KeyError:
            raise SecretNotFoundError(name, ()) from None


__all__ = [
    "DEFAULT_SECRET_DIRS",
    "GITHUB_TOKEN_SECRET",
    "MountedSecretStore",
    "SecretNotFoundError",
    "SecretStore",
    "StaticSecretStore",
]
