"""Scripted OAuthProvider for testing the callback flow without a real provider."""

from fastapi.responses import RedirectResponse

from domain.model.errors import IdentityError
from domain.model.identity import OAuthProfile


class FakeOAuthProvider:
    def __init__(self, name: str = 'google', profile: OAuthProfile | None = None, enabled: bool = True,
                 callback_url: str | None = None):
        self.name = name
        self.callback_url = callback_url
        self.profile = profile
        self._enabled = enabled
        self.redirect_uris: list[str] = []

    @property
    def enabled(self) -> bool:
        return self._enabled

    async def authorize_redirect(self, request, redirect_uri: str):
        self.redirect_uris.append(redirect_uri)
        return RedirectResponse(url=f"https://provider.test/authorize?redirect_uri={redirect_uri}")

    async def fetch_profile(self, request) -> OAuthProfile:
        if self.profile is None:
            raise IdentityError("OAuth exchange rejected")
        return self.profile
