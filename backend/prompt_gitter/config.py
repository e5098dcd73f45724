"""Application configuration using Pydantic Settings."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # GitHub OAuth app credentials
    github_id: str = ""
    github_secret: str = ""
    oauth_scope: str = "read:user user:email public_repo"
    oauth_redirect_url: Optional[str] = None

    # GitHub endpoints
    github_api_url: str = "https://api.github.com"
    github_oauth_url: str = "https://github.com/login/oauth"
    github_html_url: str = "https://github.com"

    # Prompt repository layout
    prompts_repo_name: str = "ai_prompts"
    prompts_repo_description: str = "Repository for storing and managing AI prompts"
    metadata_path: str = "metadata.json"
    prompts_dir: str = "prompts"

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    @property
    def authorize_url(self) -> str:
        """Get the GitHub OAuth authorize endpoint."""
        return f"{self.github_oauth_url.rstrip('/')}/authorize"

    @property
    def access_token_url(self) -> str:
        """Get the GitHub OAuth token exchange endpoint."""
        return f"{self.github_oauth_url.rstrip('/')}/access_token"

    def repository_html_url(self, username: str) -> str:
        """Get the browser URL of a user's prompts repository."""
        return f"{self.github_html_url.rstrip('/')}/{username}/{self.prompts_repo_name}"


# Global settings instance
settings = Settings()
