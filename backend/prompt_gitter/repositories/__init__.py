"""Repositories package."""

from .errors import (
    AuthenticationError,
    ConflictError,
    MalformedResponseError,
    RemoteStoreError,
    TransportError,
)
from .github_client import GitHubClient
from .github_contents import GitHubContentsRepository
from .github_repos import RepositoryProvisioning
from .types import FileSnapshot, IndexSnapshot, RepoStatus, Session

__all__ = [
    "GitHubClient",
    "GitHubContentsRepository",
    "RepositoryProvisioning",
    "Session",
    "FileSnapshot",
    "IndexSnapshot",
    "RepoStatus",
    "RemoteStoreError",
    "ConflictError",
    "TransportError",
    "MalformedResponseError",
    "AuthenticationError",
]
