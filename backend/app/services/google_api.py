"""Client for the Google Docs and Sheets REST APIs.

Calls are authorized with the user's OAuth bearer token; the application
never holds its own Google credentials for data access.
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from app.config import Settings
from app.errors import AuthError, NotFoundError, UpstreamError

logger = logging.getLogger(__name__)

DOCS_API_URL = "https://docs.googleapis.com/v1/documents"
SHEETS_API_URL = "https://sheets.googleapis.com/v4/spreadsheets"


class GoogleApiClient:
    """Thin async wrapper around the Docs v1 and Sheets v4 endpoints."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = settings.google_api_timeout
        self._transport = transport

    def _get_headers(self, access_token: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/json",
        }

    async def _get(
        self,
        url: str,
        access_token: str,
        params: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Issue an authorized GET and map failures onto the error taxonomy."""
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(
                    url,
                    headers=self._get_headers(access_token),
                    params=params,
                )
                response.raise_for_status()
                return response.json()

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error(f"Google API error: {status_code} - {e.response.text}")
            if status_code == 401:
                raise AuthError("Authentication expired. Please re-authenticate.") from e
            if status_code == 403:
                raise UpstreamError(
                    f"Google API forbidden: {e.response.text}",
                    public="Permission denied. Ensure the document is shared with your account.",
                ) from e
            if status_code == 404:
                raise NotFoundError(
                    "Document not accessible via API. A published document "
                    "requires the actual document ID for API access."
                ) from e
            raise UpstreamError(f"Google API error: HTTP {status_code}") from e
        except httpx.RequestError as e:
            logger.error(f"Google API request failed: {e}")
            raise UpstreamError(f"Google API request failed: {e}") from e

    async def get_document(self, document_id: str, access_token: str) -> dict[str, Any]:
        """Fetch a structured document (Docs API ``documents.get``)."""
        logger.info(f"Fetching document {document_id} via Docs API")
        return await self._get(f"{DOCS_API_URL}/{quote(document_id, safe='')}", access_token)

    async def get_values(
        self,
        spreadsheet_id: str,
        cell_range: str,
        access_token: str,
    ) -> list[list[str]]:
        """Fetch a range of cell values. Empty ranges yield an empty list."""
        logger.info(f"Fetching range {cell_range} from sheet {spreadsheet_id}")
        url = (
            f"{SHEETS_API_URL}/{quote(spreadsheet_id, safe='')}"
            f"/values/{quote(cell_range, safe='')}"
        )
        data = await self._get(url, access_token)
        rows = data.get("values") or []
        logger.info(f"Retrieved {len(rows)} rows from {cell_range}")
        return [[str(cell) for cell in row] for row in rows]
