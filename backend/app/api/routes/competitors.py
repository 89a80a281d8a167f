"""Competitor URL lookup route."""

import logging

from fastapi import APIRouter

from app.api.deps import Competitors, Tokens, valid_access_token
from app.api.schemas import ApiModel, KeywordRequest
from app.services.competitor_lookup import CompetitorResult

logger = logging.getLogger(__name__)
router = APIRouter()


class CompetitorResponse(ApiModel):
    """Competitor URLs found for a keyword."""

    found: bool
    competitor_urls: list[str]
    matched_keyword: str | None = None
    row_number: int | None = None
    error: str | None = None


def to_competitor_response(result: CompetitorResult) -> CompetitorResponse:
    return CompetitorResponse(
        found=result.found,
        competitor_urls=result.competitor_urls,
        matched_keyword=result.matched_keyword,
        row_number=result.row_number,
        error=result.error,
    )


@router.post("/competitors", response_model=CompetitorResponse)
async def find_competitors(
    request: KeywordRequest,
    competitors: Competitors,
    tokens: Tokens,
) -> CompetitorResponse:
    """Look up competitor URLs for a keyword."""
    access_token = await valid_access_token(request.access_token, request.token_data, tokens)
    result = await competitors.lookup(request.keyword, access_token)
    if not result.found:
        logger.info(f"No competitor row for '{request.keyword}': {result.error}")
    return to_competitor_response(result)
