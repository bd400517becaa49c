"""Exceptions raised by the GitHub token authentication module."""

from typing import Optional


class GitHubTokenError(Exception):
    """Base class for all authentication module errors."""


class MissingCredentialError(GitHubTokenError):
    """The access token was not found in body, query or headers."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"You should provide {field}")


class TransportError(GitHubTokenError):
    """
    Raised by a transport when the upstream call fails.

    Attributes:
        status_code: HTTP status of the upstream response, None for network errors
        data: Raw upstream response body, if any
    """

    def __init__(self, message: str, status_code: Optional[int] = None, data: Optional[str] = None):
        self.status_code = status_code
        self.data = data
        super().__init__(message)


class UpstreamTransportError(GitHubTokenError):
    """Fetching the user profile from GitHub failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ProfileParseError(GitHubTokenError):
    """The primary profile response is not a JSON object."""
