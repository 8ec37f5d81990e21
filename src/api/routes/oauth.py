"""Google OAuth routes.

Endpoints:
- GET /api/google: Start Google OAuth 2.0 login
- GET /api/google/callback: Exchange the Google profile for an API JWT
- GET /api/google/fail: Failure landing for the callback
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from api.dependencies import get_oauth_provider, get_token_service, get_user_repo
from api.models import IdentityResponse, OAuthLoginResponse
from domain.model.errors import IdentityError
from port.oauth_provider import OAuthProvider
from port.user_repository import UserRepository
from services import oauth_service
from services.token_service import TokenService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/google", tags=["oauth"])

FAILURE_PATH = "/api/google/fail"


def _require_enabled(provider: OAuthProvider) -> None:
    if not provider.enabled:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Google OAuth not configured",
        )


@router.get("")
async def google_login(request: Request, provider: OAuthProvider = Depends(get_oauth_provider)):
    """Redirect the user to Google for authentication."""
    _require_enabled(provider)
    redirect_uri = provider.callback_url or str(request.url_for("google_callback"))
    return await provider.authorize_redirect(request, redirect_uri)


@router.get("/callback", name="google_callback", response_model=OAuthLoginResponse)
async def google_callback(
    request: Request,
    provider: OAuthProvider = Depends(get_oauth_provider),
    repo: UserRepository = Depends(get_user_repo),
    tokens: TokenService = Depends(get_token_service),
):
    """Exchange the Google profile for an API JWT.

    Any failure of the handshake or of the profile redirects to the fail route.
    """
    _require_enabled(provider)
    try:
        profile = await provider.fetch_profile(request)
        user, token = oauth_service.login_with_profile(repo, tokens, profile)
    except IdentityError as e:
        logger.warning("OAuth login rejected", extra={"provider": provider.name, "reason": str(e)})
        return RedirectResponse(url=FAILURE_PATH, status_code=status.HTTP_302_FOUND)

    logger.info("OAuth login", extra={"userId": user.id, "provider": provider.name})
    return OAuthLoginResponse(
        status=200,
        message="OAuth login successful",
        token=token,
        user=IdentityResponse(id=user.id, email=user.email),
    )


@router.get("/fail", status_code=status.HTTP_401_UNAUTHORIZED)
async def google_fail():
    """Google OAuth failed."""
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Google OAuth failed")
