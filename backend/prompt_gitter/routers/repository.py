"""Prompt repository provisioning endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ..models import RepoState, RepoStatusResponse
from ..repositories import RepositoryProvisioning
from .dependencies import get_provisioning

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/repository", tags=["repository"])


@router.get("", response_model=RepoStatusResponse)
async def get_repository_status(
    provisioning: RepositoryProvisioning = Depends(get_provisioning),
):
    """Report whether the prompts repository exists."""
    result = await provisioning.check_exists()
    if result.state == RepoState.ERROR:
        logger.warning(f"Repository check failed: {result.message}")
    return RepoStatusResponse(state=result.state, message=result.message, html_url=result.html_url)


@router.post("", response_model=RepoStatusResponse, status_code=status.HTTP_201_CREATED)
async def create_repository(
    provisioning: RepositoryProvisioning = Depends(get_provisioning),
):
    """Create the prompts repository."""
    result = await provisioning.create()
    if result.state == RepoState.ERROR:
        logger.warning(f"Repository creation failed: {result.message}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"error": "Failed to create repository", "message": result.message},
        )
    return RepoStatusResponse(state=result.state, message=result.message, html_url=result.html_url)
