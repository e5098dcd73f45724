"""Models package."""

from .enums import EditorMode, Provider, RepoState, SortField, SortOrder
from .providers import PROVIDERS, ProviderConfig, default_model, is_known_model
from .schemas import (
    HealthResponse,
    Prompt,
    PromptCreate,
    PromptIndex,
    PromptList,
    PromptRecord,
    PromptUpdate,
    ProviderInfo,
    ProviderList,
    RepoStatusResponse,
    SessionResponse,
)

__all__ = [
    # Enums
    "EditorMode",
    "Provider",
    "RepoState",
    "SortField",
    "SortOrder",
    # Provider catalogue
    "PROVIDERS",
    "ProviderConfig",
    "default_model",
    "is_known_model",
    # Index Models
    "PromptRecord",
    "Prompt",
    "PromptIndex",
    # Prompt Models
    "PromptCreate",
    "PromptUpdate",
    "PromptList",
    "ProviderInfo",
    "ProviderList",
    # Repository Models
    "RepoStatusResponse",
    # Auth Models
    "SessionResponse",
    # Health
    "HealthResponse",
]
