from dataclasses import dataclass
from typing import Optional

from ..models.enums import RepoState
from ..models.schemas import PromptIndex


@dataclass(frozen=True)
class Session:
    username: str
    access_token: str


@dataclass
class FileSnapshot:
    path: str
    content: str
    sha: str


@dataclass
class IndexSnapshot:
    index: PromptIndex
    sha: Optional[str]


@dataclass
class RepoStatus:
    state: RepoState
    html_url: str
    message: Optional[str] = None
