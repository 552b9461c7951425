"""Custom exceptions for archsentinel."""


class ResolverError(Exception):
    """Base exception for all resolution errors."""


class FetchTimeoutError(ResolverError):
    """Raised when a request does not complete within the configured timeout."""

    def __init__(self, url: str, timeout: float):
        self.url = url
        self.timeout = timeout
        super().__init__(f"request to {url} timed out after {timeout}s")


class NetworkError(ResolverError):
    """Raised on transport failures and non-success responses."""

    def __init__(self, url: str, reason: str, status_code: int | None = None):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"request to {url} failed: {reason}")


class ParseError(ResolverError):
    """Raised when a response body is not JSON or lacks the expected shape."""


class ManifestError(Exception):
    """Raised when a project's package.json cannot be read or parsed."""
