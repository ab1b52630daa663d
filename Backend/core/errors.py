"""
Application error hierarchy.

Every error carries a user-facing message and an HTTP status code. The
handlers registered in main.py turn them into a flat {"error": message} body.
"""
from typing import Optional


class AppError(Exception):
    """Base application error. status_code defaults to 500."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, status_code={self.status_code})"


class GitHubApiError(AppError):
    """Failure talking to the GitHub REST API (rate limit, missing user, ...)."""


class UpstreamAuthError(GitHubApiError):
    """No access token is available for the request."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, 401)


class UpstreamFetchError(GitHubApiError):
    """GitHub answered with a non-success status or could not be reached."""

    def __init__(self, message: str, upstream_status: Optional[int] = None):
        super().__init__(message, 500)
        self.upstream_status = upstream_status


class ValidationError(AppError):
    """Required fields are missing from the request body."""

    def __init__(self, message: str):
        super().__init__(message, 400)


class GenerationError(AppError):
    """The hosted LLM call failed or returned something unusable."""


class ConfigurationError(AppError):
    """A required deployment secret is not set."""
