"""Keeps metadata.json and the per-prompt content files in step."""

import asyncio
import json
import logging
from datetime import datetime
from typing import Callable, List, Optional

from pydantic import ValidationError

from ..config import settings
from ..models import Prompt, PromptCreate, PromptIndex, PromptRecord, PromptUpdate
from ..repositories import (
    GitHubContentsRepository,
    IndexSnapshot,
    MalformedResponseError,
    RemoteStoreError,
)
from ..utils.helpers import derive_filename, epoch_ms, next_prompt_id, to_iso, utc_now

logger = logging.getLogger(__name__)


class PromptSyncService:
    """Create, update, rename and delete prompts against the remote repository.

    The index and each content file carry independent shas, so there is no
    multi-file transaction. Every mutation re-reads the index first and writes
    it back with the sha from that read; a concurrent writer makes the index
    write fail with ConflictError. The index is always written before the
    content file, and nothing is rolled back when a later step fails.
    """

    def __init__(
        self,
        contents: GitHubContentsRepository,
        metadata_path: Optional[str] = None,
        prompts_dir: Optional[str] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize the service.

        Args:
            contents: Contents repository bound to the user's session
            metadata_path: Path of the index file
            prompts_dir: Directory holding the content files
            clock: Source of the current time
        """
        self._contents = contents
        self.metadata_path = metadata_path or settings.metadata_path
        self.prompts_dir = prompts_dir or settings.prompts_dir
        self._clock = clock

    def content_path(self, filename: str) -> str:
        return f"{self.prompts_dir}/{filename}"

    async def read_index(self) -> IndexSnapshot:
        """Read the index with its sha. A missing index is an empty one."""
        snapshot = await self._contents.read_with_token(self.metadata_path)
        if snapshot is None:
            return IndexSnapshot(index=PromptIndex(), sha=None)
        try:
            index = PromptIndex.model_validate_json(snapshot.content)
        except ValidationError as e:
            raise MalformedResponseError(f"{self.metadata_path} is not a valid index: {e}") from e
        return IndexSnapshot(index=index, sha=snapshot.sha)

    async def _write_index(self, snapshot: IndexSnapshot, message: str) -> None:
        payload = json.dumps(
            snapshot.index.model_dump(mode="json", by_alias=True),
            indent=2,
            ensure_ascii=False,
        )
        await self._contents.write_if_token(
            self.metadata_path, payload, message, sha=snapshot.sha
        )

    async def _attach_content(self, record: PromptRecord) -> Prompt:
        path = self.content_path(record.filename)
        try:
            snapshot = await self._contents.read_with_token(path)
        except RemoteStoreError as e:
            logger.warning(f"Could not read content for prompt {record.title!r}: {e}")
            snapshot = None
        if snapshot is None:
            logger.warning(f"Prompt {record.id} has no readable content at {path}")
            return Prompt(**record.model_dump())
        return Prompt(**record.model_dump(), content=snapshot.content)

    async def fetch_all(self) -> List[Prompt]:
        """Read the index and attach every prompt body.

        A record whose content cannot be read is returned with content None.

        Returns:
            Prompts in index order
        """
        snapshot = await self.read_index()
        return list(
            await asyncio.gather(
                *(self._attach_content(record) for record in snapshot.index.prompts)
            )
        )

    async def create(self, draft: PromptCreate) -> Prompt:
        """Append a new prompt to the index, then write its content file.

        Args:
            draft: Validated prompt fields and body

        Returns:
            The created prompt

        Raises:
            ConflictError: If the index changed since it was read
            RemoteStoreError: On any other remote failure
        """
        snapshot = await self.read_index()
        records = snapshot.index.prompts

        now = self._clock()
        stamp = next_prompt_id(records, epoch_ms(now))
        record = PromptRecord(
            id=str(stamp),
            title=draft.title,
            description=draft.description,
            tags=list(draft.tags),
            provider=draft.provider,
            model=draft.model,
            filename=derive_filename(draft.title, records, stamp),
            created_at=to_iso(now),
            updated_at=to_iso(now),
        )
        records.append(record)

        message = f"Add prompt: {draft.title}"
        await self._write_index(snapshot, message)
        await self._contents.write_if_token(
            self.content_path(record.filename), draft.content, message
        )
        logger.info(f"Created prompt {record.id} as {record.filename}")
        return Prompt(**record.model_dump(), content=draft.content)

    async def update(self, prompt_id: str, draft: PromptUpdate) -> Optional[Prompt]:
        """Replace a prompt's mutable fields and body.

        A title change moves the body to a freshly derived filename: the old
        file is deleted before the index is written, and the new file is
        written after it.

        Args:
            prompt_id: Id of the prompt to update
            draft: New field values and body

        Returns:
            The updated prompt, or None if no prompt has that id

        Raises:
            ConflictError: If the index or content file changed since it was read
            RemoteStoreError: On any other remote failure
        """
        snapshot = await self.read_index()
        records = snapshot.index.prompts
        position = snapshot.index.find(prompt_id)
        if position is None:
            logger.info(f"Nothing to update for prompt {prompt_id}")
            return None

        existing = records[position]
        now = self._clock()
        filename = existing.filename
        renamed = draft.title != existing.title

        if renamed:
            filename = derive_filename(
                draft.title, records, epoch_ms(now), exclude_id=existing.id
            )
            old_path = self.content_path(existing.filename)
            old_file = await self._contents.read_with_token(old_path)
            if old_file is not None:
                await self._contents.delete_if_token(
                    old_path, f"Delete old prompt file: {existing.title}", old_file.sha
                )
            logger.info(f"Renaming prompt {prompt_id}: {existing.filename} -> {filename}")

        records[position] = existing.model_copy(
            update={
                "title": draft.title,
                "description": draft.description,
                "tags": list(draft.tags),
                "provider": draft.provider,
                "model": draft.model,
                "filename": filename,
                "updated_at": to_iso(now),
            }
        )

        message = f"Update prompt: {draft.title}"
        await self._write_index(snapshot, message)

        path = self.content_path(filename)
        sha = None
        if not renamed:
            current = await self._contents.read_with_token(path)
            sha = current.sha if current is not None else None
        await self._contents.write_if_token(path, draft.content, message, sha=sha)

        logger.info(f"Updated prompt {prompt_id}")
        return Prompt(**records[position].model_dump(), content=draft.content)

    async def delete(self, prompt_id: str) -> bool:
        """Remove a prompt from the index, then delete its content file.

        Args:
            prompt_id: Id of the prompt to delete

        Returns:
            True if a prompt was removed, False if no prompt had that id

        Raises:
            ConflictError: If the index or content file changed since it was read
            RemoteStoreError: On any other remote failure
        """
        snapshot = await self.read_index()
        position = snapshot.index.find(prompt_id)
        if position is None:
            logger.info(f"Prompt {prompt_id} already absent, nothing to delete")
            return False

        record = snapshot.index.prompts.pop(position)
        message = f"Delete prompt: {record.title}"
        await self._write_index(snapshot, message)

        path = self.content_path(record.filename)
        current = await self._contents.read_with_token(path)
        if current is not None:
            await self._contents.delete_if_token(path, message, current.sha)

        logger.info(f"Deleted prompt {prompt_id}")
        return True
