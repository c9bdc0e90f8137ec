"""GitHub client errors."""

from __future__ import annotations


class GitHubAPIError(RuntimeError):
    """Raised when GitHub cannot be reached or returns an error response."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Initialise with a message and optional HTTP status code."""
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def http_error(cls, status_code: int, detail: str = "") -> GitHubAPIError:
        """Return an error for non-2xx HTTP responses."""
        message = f"GitHub REST HTTP {status_code}"
        if detail:
            message = f"{message}: {detail}"
        return cls(message, status_code=status_code)

    @classmethod
    def timeout(cls) -> GitHubAPIError:
        """Return an error for a request that timed out."""
        return cls("GitHub REST request timed out")

    @classmethod
    def network_error(cls, detail: str) -> GitHubAPIError:
        """Return an error for DNS, connection, or TLS failures."""
        return cls(f"GitHub REST network error: {detail}")


class GitHubResponseShapeError(RuntimeError):
    """Raised when a GitHub response cannot be decoded into issues."""

    @classmethod
    def undecodable(cls, detail: str) -> GitHubResponseShapeError:
        """Return an error for a payload that does not match the issue schema."""
        return cls(f"GitHub issues response could not be decoded: {detail}")


class GitHubConfigError(RuntimeError):
    """Raised when GitHub client configuration is invalid."""

    @classmethod
    def empty_token(cls) -> GitHubConfigError:
        """Return an error when the provided token is empty."""
        return cls("GitHub token must be non-empty")

    @classmethod
    def undecodable_token(cls) -> GitHubConfigError:
        """Return an error when the token secret is not valid UTF-8."""
        return cls("GitHub token must be UTF-8 text")
