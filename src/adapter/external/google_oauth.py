"""Google OAuth 2.0 / OpenID Connect adapter built on authlib's Starlette client.

The redirect handshake (state cookie, code exchange, id_token validation) is
delegated to authlib; this adapter only turns the result into an OAuthProfile.
Requires Starlette's SessionMiddleware to be installed on the app.
"""

import logging
import os

from authlib.integrations.starlette_client import OAuth, OAuthError
from starlette.requests import Request

from domain.model.errors import IdentityError
from domain.model.identity import OAuthProfile

logger = logging.getLogger(__name__)

GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID")
GOOGLE_CLIENT_SECRET = os.getenv("GOOGLE_CLIENT_SECRET")
GOOGLE_CALLBACK_URL = os.getenv("GOOGLE_CALLBACK_URL")
GOOGLE_METADATA_URL = "https://accounts.google.com/.well-known/openid-configuration"


class GoogleOAuthAdapter:
    name = "google"

    def __init__(
        self,
        client_id: str | None = GOOGLE_CLIENT_ID,
        client_secret: str | None = GOOGLE_CLIENT_SECRET,
        callback_url: str | None = GOOGLE_CALLBACK_URL,
    ):
        self.callback_url = callback_url
        self._enabled = bool(client_id and client_secret)
        self._oauth = OAuth()
        if self._enabled:
            self._oauth.register(
                name=self.name,
                client_id=client_id,
                client_secret=client_secret,
                server_metadata_url=GOOGLE_METADATA_URL,
                client_kwargs={"scope": "openid email profile"},
            )

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def _client(self):
        return self._oauth.create_client(self.name)

    async def authorize_redirect(self, request: Request, redirect_uri: str):
        return await self._client.authorize_redirect(request, redirect_uri)

    async def fetch_profile(self, request: Request) -> OAuthProfile:
        """Exchange the callback code for tokens and read the OpenID userinfo.

        Raises:
            IdentityError: the exchange failed or returned no userinfo
        """
        try:
            token = await self._client.authorize_access_token(request)
        except OAuthError as e:
            logger.warning("Google OAuth exchange failed", extra={"error": e.error})
            raise IdentityError("Google OAuth failed") from e

        userinfo = token.get("userinfo")
        if not userinfo:
            raise IdentityError("Failed to get user info from Google")

        return OAuthProfile(
            provider=self.name,
            provider_id=str(userinfo.get("sub") or ""),
            email=userinfo.get("email"),
            display_name=userinfo.get("name"),
        )
