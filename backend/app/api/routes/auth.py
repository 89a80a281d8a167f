"""Google OAuth bootstrap routes."""

import html
import json
import logging
from typing import Any

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from app.api.deps import AppSettings, OAuth
from app.errors import AppError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth")

SUCCESS_PAGE = """<html>
  <head>
    <title>Authentication Success</title>
    <style>
      body {{ font-family: system-ui, sans-serif; text-align: center; padding: 50px 20px; background: #f0f9ff; }}
      .success {{ color: #059669; font-size: 24px; margin-bottom: 20px; }}
      .message {{ color: #374151; font-size: 16px; margin-bottom: 30px; }}
    </style>
  </head>
  <body>
    <h1 class="success">Authentication Successful!</h1>
    <p class="message">You can now close this window and continue using the application.</p>
    <script>
      const accessToken = {token_json};
      sessionStorage.setItem('google_access_token', accessToken);
      if (window.opener) {{
        window.opener.postMessage({{ type: 'GOOGLE_AUTH_SUCCESS', accessToken: accessToken }}, '*');
        window.close();
      }} else {{
        setTimeout(() => {{ window.location.href = '/'; }}, 2000);
      }}
    </script>
  </body>
</html>"""

ERROR_PAGE = """<html>
  <body>
    <h1>{title}</h1>
    <p>{message}</p>
    <p><a href="/">Go back</a></p>
  </body>
</html>"""


def _error_page(title: str, message: str) -> HTMLResponse:
    return HTMLResponse(ERROR_PAGE.format(title=html.escape(title), message=html.escape(message)))


@router.get("/google")
async def start_google_auth(oauth: OAuth) -> dict[str, str]:
    """Return the Google consent URL."""
    return {"authUrl": oauth.build_auth_url()}


@router.get("/callback", response_class=HTMLResponse)
async def google_auth_callback(
    oauth: OAuth,
    code: str | None = None,
    error: str | None = None,
) -> HTMLResponse:
    """Exchange the authorization code and hand the token to the browser."""
    if error:
        return _error_page("Authentication Error", f"Error: {error}")
    if not code:
        return _error_page("Authentication Error", "No authorization code received")

    try:
        tokens = await oauth.exchange_code(code)
    except AppError as e:
        logger.error(f"OAuth callback error: {e}")
        return _error_page("Authentication Error", f"Failed to complete authentication: {e.public_message}")

    # json.dumps yields a JS string literal; "</" is escaped to keep the script block intact
    token_json = json.dumps(tokens.access_token).replace("</", "<\\/")
    return HTMLResponse(SUCCESS_PAGE.format(token_json=token_json))


@router.get("/tokens")
async def get_preauthenticated_tokens(settings: AppSettings) -> dict[str, Any]:
    """Tokens configured in the environment, for development."""
    if settings.google_access_token:
        logger.info("Using pre-authenticated tokens from environment variables")
        return {
            "access_token": settings.google_access_token,
            "refresh_token": settings.google_refresh_token,
            "method": "pre-authenticated",
            "message": "Using tokens from environment variables (development mode)",
        }

    return {
        "method": "oauth-required",
        "message": "No pre-authenticated tokens found. OAuth flow required.",
        "authUrl": "/auth/google",
    }
