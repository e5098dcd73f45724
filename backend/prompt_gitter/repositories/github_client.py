"""Authenticated HTTP client for the GitHub REST API."""

import logging
from typing import Optional

import httpx

from ..config import settings
from .errors import ConflictError, RemoteStoreError, TransportError
from .types import Session

logger = logging.getLogger(__name__)


def error_message(response: httpx.Response, fallback: str) -> str:
    """Extract GitHub's ``message`` field from an error response, or use the fallback."""
    try:
        payload = response.json()
    except ValueError:
        return fallback
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return fallback


def raise_for_response(response: httpx.Response, fallback: str) -> None:
    """
    Translate a non-success response into the matching RemoteStoreError.

    Args:
        response: The GitHub response
        fallback: Message used when GitHub does not supply one

    Raises:
        ConflictError: On 409, or a 422 complaining about the sha
        RemoteStoreError: On any other non-success status
    """
    if response.is_success:
        return
    message = error_message(response, fallback)
    status_code = response.status_code
    if status_code == 409 or (status_code == 422 and "sha" in message.lower()):
        raise ConflictError(message, status_code)
    raise RemoteStoreError(message, status_code)


class GitHubClient:
    """Thin async wrapper binding an httpx client to one user's session."""

    def __init__(
        self,
        session: Session,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            session: Username and access token of the signed-in user
            base_url: GitHub API root, defaults to the configured one
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.session = session
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.github_api_url,
            headers={
                "Authorization": f"Bearer {session.access_token}",
                "Accept": "application/vnd.github.v3+json",
                "Content-Type": "application/json",
            },
            transport=transport,
        )

    @property
    def username(self) -> str:
        return self.session.username

    async def request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Send a request, wrapping network failures in TransportError."""
        try:
            return await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"GitHub {method} {url} failed: {e}")
            raise TransportError(f"Network error talking to GitHub: {e}") from e

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
