"""Best-effort OAuth access token refresh.

Refresh never raises: callers get a ``RefreshResult`` and decide whether a
failed refresh matters. On failure the original token is handed back.
"""

import logging
import time
from dataclasses import dataclass

import httpx
from pydantic import BaseModel, ConfigDict, Field

from app.config import Settings

logger = logging.getLogger(__name__)

GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"

# Tokens expiring within this window are treated as expired
EXPIRY_MARGIN_MS = 5 * 60 * 1000
# Assumed lifetime when only the issue timestamp is known
ASSUMED_LIFETIME_MS = 60 * 60 * 1000


class TokenData(BaseModel):
    """Token bundle kept by the browser. Times are epoch milliseconds."""

    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(alias="accessToken")
    refresh_token: str | None = Field(default=None, alias="refreshToken")
    expiry_date: int | None = Field(default=None, alias="expiryDate")
    timestamp: int | None = None


@dataclass
class RefreshResult:
    """Outcome of a refresh attempt."""
    access_token: str
    success: bool
    error: str | None = None


def _now_ms() -> int:
    return int(time.time() * 1000)


def is_token_expired(token_data: TokenData, now_ms: int | None = None) -> bool:
    """Check if a token is expired or will expire within five minutes."""
    now = now_ms if now_ms is not None else _now_ms()
    if not token_data.expiry_date:
        return (token_data.timestamp or 0) < now - ASSUMED_LIFETIME_MS
    return token_data.expiry_date < now + EXPIRY_MARGIN_MS


class TokenManager:
    """Checks token freshness and exchanges refresh tokens."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client_id = (settings.google_client_id or "").strip()
        self.client_secret = (settings.google_client_secret or "").strip()
        self.timeout = settings.google_api_timeout
        self._transport = transport

    async def refresh_access_token(self, refresh_token: str) -> RefreshResult:
        """Exchange a refresh token for a new access token."""
        if not self.client_id or not self.client_secret:
            return RefreshResult(
                access_token="",
                success=False,
                error="Google OAuth credentials not configured",
            )

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    GOOGLE_TOKEN_URL,
                    data={
                        "client_id": self.client_id,
                        "client_secret": self.client_secret,
                        "refresh_token": refresh_token,
                        "grant_type": "refresh_token",
                    },
                )
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Token refresh error: {e}")
            return RefreshResult(access_token="", success=False, error=str(e))

        new_access_token = payload.get("access_token")
        if not new_access_token:
            return RefreshResult(
                access_token="",
                success=False,
                error="No access token returned from refresh",
            )

        logger.info("Token refreshed successfully")
        return RefreshResult(access_token=new_access_token, success=True)

    async def get_valid_access_token(
        self,
        access_token: str,
        token_data: TokenData | None = None,
    ) -> RefreshResult:
        """Return a usable access token, refreshing once if it looks stale.

        ``success`` is True only when a refresh actually happened or the token
        was known to be fresh. In every other case the original token is
        returned together with the reason.
        """
        if token_data is None:
            logger.debug("No token data available for expiry check, using provided token")
            return RefreshResult(
                access_token=access_token,
                success=False,
                error="No token data for expiry check",
            )

        if not is_token_expired(token_data):
            return RefreshResult(access_token=access_token, success=True)

        logger.info("Token appears to be expired, attempting refresh...")

        if not token_data.refresh_token:
            logger.info("No refresh token available, cannot refresh")
            return RefreshResult(
                access_token=access_token,
                success=False,
                error="No refresh token available",
            )

        result = await self.refresh_access_token(token_data.refresh_token)
        if result.success:
            return result

        logger.warning(f"Token refresh failed: {result.error}. Using original token.")
        return RefreshResult(access_token=access_token, success=False, error=result.error)
