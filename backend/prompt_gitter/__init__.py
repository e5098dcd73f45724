"""Prompt Gitter: AI prompts stored in the user's own GitHub repository."""

__version__ = "1.0.0"
