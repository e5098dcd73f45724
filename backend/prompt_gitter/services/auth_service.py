"""GitHub OAuth sign-in delegation."""

import logging
import secrets
from typing import Optional

import httpx

from ..config import settings
from ..repositories import AuthenticationError, Session

logger = logging.getLogger(__name__)

SIGN_IN_FAILED = "GitHub sign-in failed"


class GitHubOAuthService:
    """Builds the authorize redirect and exchanges the callback code for a session."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initialize the OAuth service.

        Args:
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self._transport = transport

    @staticmethod
    def new_state() -> str:
        return secrets.token_urlsafe(16)

    def authorization_url(self, state: str) -> str:
        """Build the GitHub authorize URL for the configured OAuth app."""
        params = {
            "client_id": settings.github_id,
            "scope": settings.oauth_scope,
            "state": state,
        }
        if settings.oauth_redirect_url:
            params["redirect_uri"] = settings.oauth_redirect_url
        return str(httpx.URL(settings.authorize_url, params=params))

    async def exchange_code(self, code: str) -> Session:
        """
        Exchange an OAuth callback code for an access token and the user's login.

        Args:
            code: The code GitHub passed to the callback

        Returns:
            Session bound to the signed-in user

        Raises:
            AuthenticationError: If GitHub rejects the code or the identity lookup fails
        """
        async with httpx.AsyncClient(transport=self._transport) as client:
            try:
                token_response = await client.post(
                    settings.access_token_url,
                    headers={"Accept": "application/json"},
                    data={
                        "client_id": settings.github_id,
                        "client_secret": settings.github_secret,
                        "code": code,
                    },
                )
                token_payload = token_response.json()
            except (httpx.HTTPError, ValueError) as e:
                raise AuthenticationError(f"{SIGN_IN_FAILED}: {e}") from e

            access_token = token_payload.get("access_token") if isinstance(token_payload, dict) else None
            if not token_response.is_success or not access_token:
                description = None
                if isinstance(token_payload, dict):
                    description = token_payload.get("error_description") or token_payload.get("error")
                raise AuthenticationError(description or SIGN_IN_FAILED, token_response.status_code)

            try:
                user_response = await client.get(
                    f"{settings.github_api_url.rstrip('/')}/user",
                    headers={
                        "Authorization": f"Bearer {access_token}",
                        "Accept": "application/vnd.github.v3+json",
                    },
                )
                login = user_response.json().get("login") if user_response.is_success else None
            except (httpx.HTTPError, ValueError, AttributeError) as e:
                raise AuthenticationError(f"{SIGN_IN_FAILED}: {e}") from e

            if not login:
                raise AuthenticationError("Could not read the GitHub username", user_response.status_code)

        logger.info(f"GitHub sign-in completed for {login}")
        return Session(username=login, access_token=access_token)


# Global OAuth service instance
oauth_service = GitHubOAuthService()
