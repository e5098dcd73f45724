"""Prompt management endpoints."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ..models import (
    PROVIDERS,
    Prompt,
    PromptCreate,
    PromptList,
    PromptUpdate,
    Provider,
    ProviderInfo,
    ProviderList,
    SortField,
    SortOrder,
)
from ..repositories import ConflictError, RemoteStoreError
from ..services import CollectionQuery, PromptSyncService, available_tags, filter_prompts
from .dependencies import get_sync_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/prompts", tags=["prompts"])
providers_router = APIRouter(prefix="/api/providers", tags=["providers"])

FETCH_FAILED = "Failed to fetch prompts. Please try again later."
CREATE_FAILED = "Failed to create prompt. Please try again."
UPDATE_FAILED = "Failed to update prompt. Please try again."
DELETE_FAILED = "Failed to delete prompt. Please try again."


def _remote_error(error: RemoteStoreError, generic: str) -> HTTPException:
    """Map a remote store failure to an HTTP error carrying GitHub's message."""
    code = (
        status.HTTP_409_CONFLICT
        if isinstance(error, ConflictError)
        else status.HTTP_502_BAD_GATEWAY
    )
    return HTTPException(status_code=code, detail={"error": generic, "message": error.message})


@router.get("", response_model=PromptList)
async def list_prompts(
    search: str = "",
    tags: List[str] = Query([]),
    providers: List[Provider] = Query([]),
    sort: SortField = SortField.UPDATED_AT,
    order: SortOrder = SortOrder.DESC,
    sync: PromptSyncService = Depends(get_sync_service),
):
    """Fetch every prompt, then filter and sort the collection."""
    try:
        prompts = await sync.fetch_all()
    except RemoteStoreError as e:
        logger.error(f"Error fetching prompts: {e}")
        raise _remote_error(e, FETCH_FAILED)

    query = CollectionQuery(
        search=search,
        tags=set(tags),
        providers=set(providers),
        sort_field=sort,
        sort_order=order,
    )
    selected = filter_prompts(prompts, query)
    return PromptList(prompts=selected, total=len(selected), available_tags=available_tags(prompts))


@router.post("", response_model=Prompt, status_code=status.HTTP_201_CREATED)
async def create_prompt(
    prompt: PromptCreate, sync: PromptSyncService = Depends(get_sync_service)
):
    """Create a new prompt."""
    try:
        result = await sync.create(prompt)
        logger.info(f"Created prompt: {prompt.title}")
        return result
    except RemoteStoreError as e:
        logger.warning(f"Error creating prompt {prompt.title}: {e}")
        raise _remote_error(e, CREATE_FAILED)


@router.put("/{prompt_id}", response_model=Prompt)
async def update_prompt(
    prompt_id: str,
    prompt: PromptUpdate,
    sync: PromptSyncService = Depends(get_sync_service),
):
    """Update a prompt, moving its content file when the title changes."""
    try:
        result: Optional[Prompt] = await sync.update(prompt_id, prompt)
    except RemoteStoreError as e:
        logger.warning(f"Error updating prompt {prompt_id}: {e}")
        raise _remote_error(e, UPDATE_FAILED)
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Nothing to update")
    return result


@router.delete("/{prompt_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_prompt(prompt_id: str, sync: PromptSyncService = Depends(get_sync_service)):
    """Delete a prompt and its content file. Unknown ids are a no-op."""
    try:
        await sync.delete(prompt_id)
    except RemoteStoreError as e:
        logger.warning(f"Error deleting prompt {prompt_id}: {e}")
        raise _remote_error(e, DELETE_FAILED)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@providers_router.get("", response_model=ProviderList)
async def list_providers():
    """List providers and their known models."""
    return ProviderList(
        providers=[
            ProviderInfo(id=provider, name=config.name, models=list(config.models))
            for provider, config in PROVIDERS.items()
        ]
    )
