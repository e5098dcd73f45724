"""GitHub sign-in endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import RedirectResponse

from ..config import settings
from ..models import SessionResponse
from ..repositories import AuthenticationError
from ..services import oauth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/login")
async def login():
    """Redirect to GitHub's OAuth authorize page."""
    if not settings.github_id:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="GitHub OAuth is not configured (set GITHUB_ID and GITHUB_SECRET)",
        )
    state = oauth_service.new_state()
    return RedirectResponse(oauth_service.authorization_url(state))


@router.get("/callback", response_model=SessionResponse)
async def callback(code: str, state: Optional[str] = None):
    """Exchange the OAuth code for the caller's username and access token."""
    try:
        session = await oauth_service.exchange_code(code)
    except AuthenticationError as e:
        logger.warning(f"GitHub sign-in failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "GitHub sign-in failed", "message": e.message},
        )
    return SessionResponse(username=session.username, access_token=session.access_token)
