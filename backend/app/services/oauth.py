"""Google OAuth consent URL and authorization-code exchange."""

import logging
from dataclasses import dataclass
from urllib.parse import urlencode

import httpx

from app.config import Settings
from app.errors import ConfigurationError, UpstreamError
from app.services.token_manager import GOOGLE_TOKEN_URL

logger = logging.getLogger(__name__)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets.readonly",
    "https://www.googleapis.com/auth/documents.readonly",
]


@dataclass
class OAuthTokens:
    access_token: str
    refresh_token: str | None = None
    expires_in: int | None = None


class GoogleOAuth:
    """Builds the consent URL and exchanges authorization codes."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings
        self._transport = transport

    @property
    def redirect_uri(self) -> str:
        return f"{self.settings.public_app_url.rstrip('/')}/auth/callback"

    def _credentials(self) -> tuple[str, str]:
        client_id = (self.settings.google_client_id or "").strip()
        client_secret = (self.settings.google_client_secret or "").strip()
        if not client_id or not client_secret:
            raise ConfigurationError("Google OAuth credentials not configured")
        return client_id, client_secret

    def build_auth_url(self, state: str = "app") -> str:
        client_id, _ = self._credentials()
        params = {
            "client_id": client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": " ".join(SCOPES),
            "access_type": "offline",
            "state": state,
        }
        if self.settings.default_login_email:
            params["login_hint"] = self.settings.default_login_email
        return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> OAuthTokens:
        """Exchange an authorization code for tokens."""
        client_id, client_secret = self._credentials()

        try:
            async with httpx.AsyncClient(
                timeout=self.settings.google_api_timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    GOOGLE_TOKEN_URL,
                    data={
                        "code": code,
                        "client_id": client_id,
                        "client_secret": client_secret,
                        "redirect_uri": self.redirect_uri,
                        "grant_type": "authorization_code",
                    },
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"OAuth code exchange failed: {e.response.status_code} - {e.response.text}")
            raise UpstreamError(
                f"OAuth code exchange failed: {e.response.text}",
                public="Failed to complete authentication",
            ) from e
        except httpx.RequestError as e:
            logger.error(f"OAuth code exchange request failed: {e}")
            raise UpstreamError(str(e), public="Failed to complete authentication") from e

        if not payload.get("access_token"):
            raise UpstreamError("No access token in OAuth response", public="Failed to complete authentication")

        return OAuthTokens(
            access_token=payload["access_token"],
            refresh_token=payload.get("refresh_token"),
            expires_in=payload.get("expires_in"),
        )
