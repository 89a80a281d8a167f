"""Keyword classification routes."""

import asyncio
import logging

from fastapi import APIRouter

from app.api.deps import Classifier, Competitors, Tokens, valid_access_token
from app.api.routes.competitors import CompetitorResponse, to_competitor_response
from app.api.schemas import ApiModel, KeywordRequest
from app.errors import AppError
from app.services.document_classifier import ClassificationResult

logger = logging.getLogger(__name__)
router = APIRouter()


class ClassificationResponse(ApiModel):
    """Flow classification of a keyword."""

    category: str | None
    reason: str
    matched_line: str | None = None
    line_number: int | None = None
    subtopics: list[str] | None = None


class LookupErrorResponse(ApiModel):
    error: str
    status: int


class LookupResponse(ApiModel):
    """Classification and competitor lookup, each reported independently."""

    classification: ClassificationResponse | LookupErrorResponse
    competitors: CompetitorResponse | LookupErrorResponse


def to_classification_response(result: ClassificationResult) -> ClassificationResponse:
    return ClassificationResponse(
        category=result.category,
        reason=result.reason,
        matched_line=result.matched_line,
        line_number=result.line_number,
        subtopics=result.subtopics,
    )


@router.post(
    "/classify",
    response_model=ClassificationResponse,
    response_model_exclude_none=True,
)
async def classify_keyword(
    request: KeywordRequest,
    classifier: Classifier,
    tokens: Tokens,
) -> ClassificationResponse:
    """Decide whether a keyword is generated with or without subtopics."""
    access_token = await valid_access_token(request.access_token, request.token_data, tokens)
    result = await classifier.classify(request.keyword, access_token)
    return to_classification_response(result)


@router.post("/lookup", response_model=LookupResponse, response_model_exclude_none=True)
async def lookup_keyword(
    request: KeywordRequest,
    classifier: Classifier,
    competitors: Competitors,
    tokens: Tokens,
) -> LookupResponse:
    """Run classification and competitor lookup concurrently."""
    access_token = await valid_access_token(request.access_token, request.token_data, tokens)

    classification, competitor = await asyncio.gather(
        classifier.classify(request.keyword, access_token),
        competitors.lookup(request.keyword, access_token),
        return_exceptions=True,
    )

    def report(outcome, convert):
        if isinstance(outcome, AppError):
            return LookupErrorResponse(error=outcome.public_message, status=outcome.status_code)
        if isinstance(outcome, BaseException):
            raise outcome
        return convert(outcome)

    return LookupResponse(
        classification=report(classification, to_classification_response),
        competitors=report(competitor, to_competitor_response),
    )
