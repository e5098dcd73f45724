"""Errors raised while talking to the GitHub API."""

from typing import Optional


class RemoteStoreError(Exception):
    """A request to the remote store failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ConflictError(RemoteStoreError):
    """A write carried a stale (or missing) revision token."""


class TransportError(RemoteStoreError):
    """The request never produced an HTTP response."""


class MalformedResponseError(RemoteStoreError):
    """The remote store answered with an unexpected payload."""


class AuthenticationError(RemoteStoreError):
    """The OAuth code exchange or identity lookup failed."""
