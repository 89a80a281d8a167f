"""Diagnostics route."""

import logging
from typing import Any

from fastapi import APIRouter

from app.api.deps import AppSettings, Classifier, Competitors, Tokens, valid_access_token
from app.api.schemas import KeywordRequest
from app.errors import AppError
from app.services.startup_validation import key_status, validate_settings

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/debug")
async def debug_keyword(
    request: KeywordRequest,
    settings: AppSettings,
    classifier: Classifier,
    competitors: Competitors,
    tokens: Tokens,
) -> dict[str, Any]:
    """Report configuration status and what each lookup yields for a keyword."""
    logger.info(f"Debug request for keyword: {request.keyword}")
    access_token = await valid_access_token(request.access_token, request.token_data, tokens)

    report = validate_settings(settings)

    try:
        classification = await classifier.classify(request.keyword, access_token)
        google_doc = {
            "classification": classification.category,
            "reason": classification.reason,
            "matchedLine": classification.matched_line,
            "lineNumber": classification.line_number,
            "subtopics": classification.subtopics,
        }
    except AppError as e:
        google_doc = {"classification": "error", "reason": e.public_message, "error": e.public_message}

    try:
        competitor = await competitors.lookup(request.keyword, access_token)
        google_sheet = {
            "rowFound": competitor.row_number,
            "matchedKeyword": competitor.matched_keyword,
            "competitorUrls": competitor.competitor_urls,
            "totalRows": competitor.total_rows,
            "error": competitor.error,
        }
    except AppError as e:
        google_sheet = {"rowFound": None, "competitorUrls": [], "error": e.public_message}

    return {
        "apiKeys": {
            "status": key_status(settings),
            "validation": {
                "isValid": report.is_valid,
                "errors": report.errors,
                "warnings": report.warnings,
            },
        },
        "googleDoc": {
            "accessMethod": "Google Docs API v1 OAuth" if access_token else "Google Docs API v1 (no access token)",
            **google_doc,
        },
        "googleSheet": google_sheet,
    }
