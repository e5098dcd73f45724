"""GitHub contents API repository: files with optimistic-concurrency tokens."""

from typing import Optional

from ..config import settings
from ..utils.helpers import decode_content, encode_content
from .errors import MalformedResponseError
from .github_client import GitHubClient, raise_for_response
from .types import FileSnapshot


class GitHubContentsRepository:
    """Repository for files stored in the user's prompts repository.

    Every write or delete of an existing file must carry the sha returned by
    the latest read; GitHub rejects stale shas with a conflict.
    """

    def __init__(self, client: GitHubClient, repo_name: Optional[str] = None):
        """Initialize with a session-bound GitHub client.

        Args:
            client: GitHub client for the signed-in user
            repo_name: Repository name, defaults to the configured prompts repository
        """
        self._client = client
        self.repo_name = repo_name or settings.prompts_repo_name

    def _url(self, path: str) -> str:
        return f"/repos/{self._client.username}/{self.repo_name}/contents/{path}"

    async def read_with_token(self, path: str) -> Optional[FileSnapshot]:
        """Read a file together with its current sha.

        Args:
            path: File path inside the repository

        Returns:
            FileSnapshot, or None if the file does not exist
        """
        response = await self._client.request("GET", self._url(path))
        if response.status_code == 404:
            return None
        raise_for_response(response, f"Failed to read {path}")
        try:
            payload = response.json()
            return FileSnapshot(
                path=path,
                content=decode_content(payload["content"]),
                sha=payload["sha"],
            )
        except (ValueError, KeyError, TypeError) as e:
            raise MalformedResponseError(
                f"Unexpected response reading {path}: {e}", response.status_code
            ) from e

    async def write_if_token(
        self, path: str, content: str, message: str, sha: Optional[str] = None
    ) -> str:
        """Create or update a file.

        Args:
            path: File path inside the repository
            content: New text content
            message: Commit message
            sha: Current sha of the file; required when the file already exists

        Returns:
            The sha of the written file content

        Raises:
            ConflictError: If the sha is stale or missing for an existing file
        """
        body = {"message": message, "content": encode_content(content)}
        if sha:
            body["sha"] = sha
        response = await self._client.request("PUT", self._url(path), json=body)
        raise_for_response(response, f"Failed to write {path}")
        try:
            return response.json()["content"]["sha"]
        except (ValueError, KeyError, TypeError) as e:
            raise MalformedResponseError(
                f"Unexpected response writing {path}: {e}", response.status_code
            ) from e

    async def delete_if_token(self, path: str, message: str, sha: str) -> None:
        """Delete a file.

        Args:
            path: File path inside the repository
            message: Commit message
            sha: Current sha of the file

        Raises:
            ConflictError: If the sha is stale
            RemoteStoreError: If the file is gone or the request fails
        """
        response = await self._client.request(
            "DELETE", self._url(path), json={"message": message, "sha": sha}
        )
        raise_for_response(response, f"Failed to delete {path}")
