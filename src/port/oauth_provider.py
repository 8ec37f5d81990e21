"""Port definition for an external OAuth identity provider."""

from typing import Any, Protocol

from domain.model.identity import OAuthProfile


class OAuthProvider(Protocol):
    name: str
    callback_url: str | None

    @property
    def enabled(self) -> bool:
        """True when client credentials are configured."""
        ...

    async def authorize_redirect(self, request: Any, redirect_uri: str) -> Any:
        """Return a response redirecting the user agent to the provider."""
        ...

    async def fetch_profile(self, request: Any) -> OAuthProfile:
        """Complete the handshake on the callback request.

        Raises IdentityError if the provider rejects the exchange.
        """
        ...
