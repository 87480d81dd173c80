"""Custom exceptions for the GitLab client."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from glapi.client.models import Response


class GitLabError(Exception):
    """Base exception for GitLab client errors."""

    def __init__(self, message: str, response: Response | None = None) -> None:
        super().__init__(message)
        self.response = response


class InvalidIDError(GitLabError):
    """Identifier is neither an int nor a string."""


class TransportError(GitLabError):
    """The request never produced a response (connection, timeout, protocol)."""


class APIError(GitLabError):
    """Server answered with a non-2xx status."""

    def __init__(self, message: str, response: Response, server_message: str) -> None:
        super().__init__(message, response)
        self.response: Response = response
        self.server_message = server_message

    @property
    def status_code(self) -> int:
        """HTTP status returned by the server."""
        return self.response.status_code


class DecodeError(GitLabError):
    """Response body could not be decoded into the expected shape."""
