"""Competitor URL lookup in the keyword spreadsheet."""

import logging
import re
from dataclasses import dataclass, field

from app.config import Settings
from app.errors import AuthError, ConfigurationError
from app.services.google_api import GoogleApiClient

logger = logging.getLogger(__name__)

URL_SEPARATORS = re.compile(r"[\n\r,;]+")


@dataclass
class CompetitorResult:
    """Competitor URLs for a keyword row."""
    competitor_urls: list[str] = field(default_factory=list)
    found: bool = False
    matched_keyword: str | None = None
    row_number: int | None = None
    total_rows: int = 0
    error: str | None = None


def split_competitor_urls(cell: str) -> list[str]:
    """Split a URL cell on newlines, commas and semicolons.

    Entries that neither start with ``http`` nor contain a dot are dropped.
    Order is preserved and duplicates are kept.
    """
    return [
        url
        for url in (part.strip() for part in URL_SEPARATORS.split(cell))
        if url and (url.lower().startswith("http") or "." in url)
    ]


def find_competitor_row(
    rows: list[list[str]],
    keyword: str,
    keyword_column: int = 0,
    urls_column: int = 4,
) -> CompetitorResult:
    """Find the first row whose keyword cell equals ``keyword``.

    Comparison is exact after trimming, case-insensitive. Row numbers are
    1-based positions within ``rows``.
    """
    keyword_lower = keyword.lower().strip()

    for index, row in enumerate(rows):
        cell = row[keyword_column] if len(row) > keyword_column else ""
        if cell.lower().strip() != keyword_lower:
            continue

        row_number = index + 1
        urls_cell = row[urls_column] if len(row) > urls_column else ""
        urls = split_competitor_urls(urls_cell)
        logger.info(f"Keyword '{keyword}' matched row {row_number} with {len(urls)} competitor URLs")

        return CompetitorResult(
            competitor_urls=urls,
            found=True,
            matched_keyword=cell.strip(),
            row_number=row_number,
            total_rows=len(rows),
            error=None if urls else "No competitor URLs found for this keyword",
        )

    return CompetitorResult(
        found=False,
        total_rows=len(rows),
        error=f'Keyword "{keyword}" not found in keyword column',
    )


class CompetitorLookup:
    """Looks up competitor URLs for a keyword."""

    def __init__(self, settings: Settings, google: GoogleApiClient):
        self.settings = settings
        self.google = google

    async def lookup(self, keyword: str, access_token: str | None) -> CompetitorResult:
        """Fetch the keyword sheet and return the matching row's URLs.

        A missing row is reported through ``found=False``, not raised.

        Raises:
            ConfigurationError: OAuth client or sheet id not configured
            AuthError: no access token supplied
        """
        if not self.settings.google_client_id or not self.settings.google_client_secret:
            raise ConfigurationError(
                "Google OAuth credentials not configured. "
                "Need GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET."
            )
        if not self.settings.google_sheet_id:
            raise ConfigurationError("GOOGLE_SHEET_ID not configured")
        if not access_token:
            raise AuthError("No access token provided. User needs to authenticate with Google.")

        rows = await self.google.get_values(
            self.settings.google_sheet_id,
            self.settings.competitors_range,
            access_token,
        )
        if not rows:
            return CompetitorResult(error="No data found in the spreadsheet")

        return find_competitor_row(
            rows,
            keyword,
            keyword_column=self.settings.competitor_keyword_column,
            urls_column=self.settings.competitor_urls_column,
        )
