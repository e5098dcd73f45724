"""Enumerations for the API."""

from enum import Enum


class Provider(str, Enum):
    """Model providers a prompt can target."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    XAI = "xai"
    META = "meta"
    MISTRAL = "mistral"


class RepoState(str, Enum):
    """Outcome of a repository probe or creation."""

    MISSING = "missing"
    PRESENT = "present"
    CREATED = "created"
    ERROR = "error"


class SortField(str, Enum):
    """Fields the prompt list can be sorted by."""

    TITLE = "title"
    UPDATED_AT = "updated_at"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class EditorMode(str, Enum):
    """Whether the editor is drafting a new prompt or editing an existing one."""

    CREATE = "create"
    EDIT = "edit"
