"""Services package."""

from .auth_service import GitHubOAuthService, oauth_service
from .collection_view import CollectionQuery, available_tags, filter_prompts
from .prompt_editor import EditorStateError, PromptDraft, PromptEditor
from .sync_service import PromptSyncService

__all__ = [
    "oauth_service",
    "GitHubOAuthService",
    "PromptSyncService",
    "CollectionQuery",
    "filter_prompts",
    "available_tags",
    "PromptEditor",
    "PromptDraft",
    "EditorStateError",
]
