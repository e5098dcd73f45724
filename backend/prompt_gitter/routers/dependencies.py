"""Request-scoped dependencies: session, GitHub client and services."""

from typing import AsyncIterator, Optional

from fastapi import Depends, Header, HTTPException, status

from ..repositories import (
    GitHubClient,
    GitHubContentsRepository,
    RepositoryProvisioning,
    Session,
)
from ..services import PromptSyncService


def get_session(
    authorization: Optional[str] = Header(None),
    x_github_username: Optional[str] = Header(None),
) -> Session:
    """Build the caller's session from the bearer token and username headers."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip() or not x_github_username:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Sign in with GitHub first",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return Session(username=x_github_username, access_token=token.strip())


async def get_github_client(
    session: Session = Depends(get_session),
) -> AsyncIterator[GitHubClient]:
    async with GitHubClient(session) as client:
        yield client


def get_sync_service(client: GitHubClient = Depends(get_github_client)) -> PromptSyncService:
    return PromptSyncService(GitHubContentsRepository(client))


def get_provisioning(
    client: GitHubClient = Depends(get_github_client),
) -> RepositoryProvisioning:
    return RepositoryProvisioning(client)
