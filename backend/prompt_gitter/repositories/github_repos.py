"""Provisioning of the per-user prompts repository."""

import logging
from typing import Optional

from ..config import settings
from ..models.enums import RepoState
from .errors import TransportError
from .github_client import GitHubClient, error_message
from .types import RepoStatus

logger = logging.getLogger(__name__)

CHECK_FAILED = "Failed to check repository status"
CREATE_FAILED = "Failed to create repository"


class RepositoryProvisioning:
    """Checks for and creates the user's prompts repository.

    Absence is a normal outcome, not an error. Failures are reported in the
    returned RepoStatus rather than raised, with GitHub's message when it
    sends one.
    """

    def __init__(self, client: GitHubClient, repo_name: Optional[str] = None):
        self._client = client
        self.repo_name = repo_name or settings.prompts_repo_name

    def _status(self, state: RepoState, message: Optional[str] = None) -> RepoStatus:
        return RepoStatus(
            state=state,
            html_url=settings.repository_html_url(self._client.username),
            message=message,
        )

    async def check_exists(self) -> RepoStatus:
        """Probe the repository once.

        Returns:
            RepoStatus with state PRESENT, MISSING or ERROR
        """
        url = f"/repos/{self._client.username}/{self.repo_name}"
        try:
            response = await self._client.request("GET", url)
        except TransportError:
            return self._status(RepoState.ERROR, CHECK_FAILED)

        if response.status_code == 404:
            return self._status(RepoState.MISSING)
        if response.is_success:
            return self._status(RepoState.PRESENT)
        return self._status(RepoState.ERROR, error_message(response, CHECK_FAILED))

    async def create(self) -> RepoStatus:
        """Create the repository as public and auto-initialized.

        Returns:
            RepoStatus with state CREATED or ERROR
        """
        body = {
            "name": self.repo_name,
            "description": settings.prompts_repo_description,
            "private": False,
            "auto_init": True,
        }
        try:
            response = await self._client.request("POST", "/user/repos", json=body)
        except TransportError:
            return self._status(RepoState.ERROR, CREATE_FAILED)

        if response.is_success:
            logger.info(f"Created repository {self._client.username}/{self.repo_name}")
            return self._status(RepoState.CREATED)
        return self._status(RepoState.ERROR, error_message(response, CREATE_FAILED))
