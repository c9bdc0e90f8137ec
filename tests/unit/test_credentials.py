"""Unit tests for mounted secret retrieval."""

from __future__ import annotations

import typing as typ

import pytest

from issuecards.credentials import (
    GITHUB_TOKEN_SECRET,
    MountedSecretStore,
    SecretNotFoundError,
    StaticSecretStore,
)

if typ.TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def secret_dirs(tmp_path: Path) -> tuple[Path, Path]:
    """Create primary and fallback secret directories."""
    primary = tmp_path / "openfaas"
    fallback = tmp_path / "run"
    primary.mkdir()
    fallback.mkdir()
    return primary, fallback


class TestMountedSecretStore:
    """Tests for the primary/fallback lookup."""

    def test_reads_primary_location(self, secret_dirs: tuple[Path, Path]) -> None:
        """The primary directory wins when both hold the secret."""
        primary, fallback = secret_dirs
        (primary / GITHUB_TOKEN_SECRET).write_bytes(b"primary-token")
        (fallback / GITHUB_TOKEN_SECRET).write_bytes(b"fallback-token")

        store = MountedSecretStore((primary, fallback))

        assert store.get_secret(GITHUB_TOKEN_SECRET) == b"primary-token"

    def test_falls_back_to_legacy_location(
        self, secret_dirs: tuple[Path, Path]
    ) -> None:
        """The legacy directory is used when the primary lacks the secret."""
        primary, fallback = secret_dirs
        (fallback / GITHUB_TOKEN_SECRET).write_bytes(b"fallback-token\n")

        store = MountedSecretStore((primary, fallback))

        assert store.get_secret(GITHUB_TOKEN_SECRET) == b"fallback-token\n"

    def test_missing_everywhere_raises(self, secret_dirs: tuple[Path, Path]) -> None:
        """A missing secret names every searched path."""
        primary, fallback = secret_dirs
        store = MountedSecretStore((primary, fallback))

        with pytest.raises(SecretNotFoundError) as exc_info:
            store.get_secret(GITHUB_TOKEN_SECRET)

        error = exc_info.value
        assert error.name == GITHUB_TOKEN_SECRET
        assert error.searched == (
            primary / GITHUB_TOKEN_SECRET,
            fallback / GITHUB_TOKEN_SECRET,
        )
        assert str(primary) in str(error)
        assert str(fallback) in str(error)


class TestStaticSecretStore:
    """Tests for the in-memory store."""

    def test_returns_stored_secret(self) -> None:
        """Stored secrets are returned verbatim."""
        store = StaticSecretStore({GITHUB_TOKEN_SECRET: b"token"})
        assert store.get_secret(GITHUB_TOKEN_SECRET) == b"token"

    def test_missing_secret_raises(self) -> None:
        """Unknown names raise SecretNotFoundError."""
        with pytest.raises(SecretNotFoundError):
            StaticSecretStore({}).get_secret(GITHUB_TOKEN_SECRET)
