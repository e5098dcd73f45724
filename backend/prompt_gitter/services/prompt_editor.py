"""Form state for creating and editing a prompt."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..models import (
    EditorMode,
    Prompt,
    PromptCreate,
    PromptUpdate,
    Provider,
    default_model,
    is_known_model,
)
from ..models.providers import DEFAULT_PROVIDER
from ..repositories import RemoteStoreError
from ..utils.helpers import normalize_tags
from .sync_service import PromptSyncService

logger = logging.getLogger(__name__)

SAVE_FAILED = {
    EditorMode.CREATE: "Failed to create prompt. Please try again.",
    EditorMode.EDIT: "Failed to update prompt. Please try again.",
}
DELETE_FAILED = "Failed to delete prompt. Please try again."


class EditorStateError(Exception):
    """The requested editor action is not allowed in the current state."""


@dataclass
class PromptDraft:
    title: str = ""
    description: str = ""
    content: str = ""
    tags_text: str = ""
    provider: Provider = DEFAULT_PROVIDER
    model: str = field(default_factory=lambda: default_model(DEFAULT_PROVIDER))

    @classmethod
    def from_prompt(cls, prompt: Prompt) -> "PromptDraft":
        return cls(
            title=prompt.title,
            description=prompt.description,
            content=prompt.content or "",
            tags_text=", ".join(prompt.tags),
            provider=prompt.provider,
            model=prompt.model,
        )

    @property
    def tags(self) -> List[str]:
        return normalize_tags(self.tags_text)


class PromptEditor:
    """Draft state for one prompt, persisted through the sync service.

    Without a prompt the editor is in create mode; with one it edits that
    prompt. Submitting is refused while a save is in flight, and deleting
    takes two steps: request, then confirm.
    """

    def __init__(self, sync: PromptSyncService, prompt: Optional[Prompt] = None):
        self._sync = sync
        self.prompt = prompt
        self.draft = self._seed()
        self.is_saving = False
        self.is_deleting = False
        self.delete_requested = False
        self.error = ""

    @property
    def mode(self) -> EditorMode:
        return EditorMode.CREATE if self.prompt is None else EditorMode.EDIT

    @property
    def can_submit(self) -> bool:
        return not self.is_saving and not self.is_deleting

    def _seed(self) -> PromptDraft:
        if self.prompt is None:
            return PromptDraft()
        return PromptDraft.from_prompt(self.prompt)

    def set_provider(self, provider: Provider) -> None:
        """Switch provider, resetting the model when it has to change.

        Create mode always resets to the provider's first model; edit mode
        keeps the current model if the new provider lists it.
        """
        provider = Provider(provider)
        keep_model = self.mode == EditorMode.EDIT and is_known_model(
            provider, self.draft.model
        )
        self.draft.provider = provider
        if not keep_model:
            self.draft.model = default_model(provider)

    def cancel(self) -> None:
        """Discard unsaved edits."""
        self.draft = self._seed()
        self.delete_requested = False
        self.error = ""

    def _payload(self) -> PromptCreate:
        model_cls = PromptCreate if self.mode == EditorMode.CREATE else PromptUpdate
        return model_cls(
            title=self.draft.title,
            description=self.draft.description,
            content=self.draft.content,
            tags=self.draft.tags,
            provider=self.draft.provider,
            model=self.draft.model,
        )

    async def submit(self) -> Optional[Prompt]:
        """Persist the draft.

        Returns:
            The saved prompt, or None if the edited prompt no longer exists

        Raises:
            EditorStateError: If a save or delete is already in flight
            ValueError: If a required field is missing
            RemoteStoreError: If persisting fails
        """
        if not self.can_submit:
            raise EditorStateError("A save is already in progress")

        payload = self._payload()
        self.is_saving = True
        self.error = ""
        try:
            if self.mode == EditorMode.CREATE:
                saved = await self._sync.create(payload)
                self.draft = PromptDraft()
            else:
                saved = await self._sync.update(self.prompt.id, payload)
                if saved is not None:
                    self.prompt = saved
                    self.draft = self._seed()
            return saved
        except RemoteStoreError as e:
            logger.error(f"Saving prompt failed: {e}")
            self.error = SAVE_FAILED[self.mode]
            raise
        finally:
            self.is_saving = False

    def request_delete(self) -> None:
        """First phase of deletion: ask for confirmation."""
        if self.mode == EditorMode.CREATE:
            raise EditorStateError("Nothing to delete for an unsaved prompt")
        self.delete_requested = True

    def cancel_delete(self) -> None:
        self.delete_requested = False

    async def confirm_delete(self) -> bool:
        """Second phase of deletion: delete the prompt and its content file.

        Returns:
            True if the prompt was removed, False if it was already gone

        Raises:
            EditorStateError: If deletion was not requested first, or is in flight
            RemoteStoreError: If deleting fails
        """
        if not self.delete_requested:
            raise EditorStateError("Deletion must be requested before it is confirmed")
        if not self.can_submit:
            raise EditorStateError("Another operation is in progress")

        self.is_deleting = True
        self.error = ""
        try:
            removed = await self._sync.delete(self.prompt.id)
            self.delete_requested = False
            return removed
        except RemoteStoreError as e:
            logger.error(f"Deleting prompt {self.prompt.id} failed: {e}")
            self.error = DELETE_FAILED
            raise
        finally:
            self.is_deleting = False
