"""Pydantic models for the prompt index and for API requests and responses."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..utils.helpers import normalize_tags, parse_iso
from .enums import Provider, RepoState
from .providers import DEFAULT_PROVIDER, default_model


# Index Models
class PromptRecord(BaseModel):
    """One entry of metadata.json."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: str
    title: str
    description: str = ""
    tags: List[str] = Field(default_factory=list)
    provider: Provider = DEFAULT_PROVIDER
    model: str = ""
    filename: str
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")

    @field_validator("provider", mode="before")
    @classmethod
    def _default_provider(cls, value: Any) -> Any:
        return value or DEFAULT_PROVIDER

    @field_validator("description", "model", mode="before")
    @classmethod
    def _default_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("tags", mode="before")
    @classmethod
    def _default_tags(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("created_at", "updated_at")
    @classmethod
    def _iso_timestamp(cls, value: str) -> str:
        parse_iso(value)
        return value


class Prompt(PromptRecord):
    """A prompt record with its body attached.

    ``content`` is None when the body could not be read during a fetch.
    """

    content: Optional[str] = None


class PromptIndex(BaseModel):
    """The metadata.json document."""

    prompts: List[PromptRecord] = Field(default_factory=list)

    def find(self, prompt_id: str) -> Optional[int]:
        """Return the position of a record by id, or None."""
        for position, record in enumerate(self.prompts):
            if record.id == prompt_id:
                return position
        return None


# Prompt Request Models
class PromptCreate(BaseModel):
    """Request model for creating a prompt.

    Title, description, content and at least one tag are required.
    """

    title: str
    description: str
    content: str
    tags: List[str]
    provider: Provider = DEFAULT_PROVIDER
    model: str = ""

    @field_validator("title", "description", "content")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("tags")
    @classmethod
    def _clean_tags(cls, value: List[str]) -> List[str]:
        tags = normalize_tags(value)
        if not tags:
            raise ValueError("at least one tag is required")
        return tags

    @model_validator(mode="after")
    def _default_model(self) -> "PromptCreate":
        if not self.model:
            self.model = default_model(self.provider)
        return self


class PromptUpdate(PromptCreate):
    """Request model for updating a prompt. Every mutable field is replaced."""


# Prompt Response Models
class PromptList(BaseModel):
    """Response model for the filtered prompt collection."""

    prompts: List[Prompt]
    total: int
    available_tags: List[str] = Field(default_factory=list)


class ProviderInfo(BaseModel):
    """Response model for one provider of the catalogue."""

    id: Provider
    name: str
    models: List[str]


class ProviderList(BaseModel):
    """Response model for the provider catalogue."""

    providers: List[ProviderInfo]


# Repository Models
class RepoStatusResponse(BaseModel):
    """Response model for repository provisioning."""

    state: RepoState
    message: Optional[str] = None
    html_url: Optional[str] = None


# Auth Models
class SessionResponse(BaseModel):
    """Response model for a completed GitHub sign-in."""

    username: str
    access_token: str


# Health Check
class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    version: str = "1.0.0"
