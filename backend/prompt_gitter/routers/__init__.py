"""Routers package."""

from .auth import router as auth_router
from .prompts import providers_router
from .prompts import router as prompts_router
from .repository import router as repository_router

__all__ = [
    "auth_router",
    "prompts_router",
    "providers_router",
    "repository_router",
]
