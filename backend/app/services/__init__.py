"""Business logic services."""

from app.services.competitor_lookup import CompetitorLookup
from app.services.content_generator import ContentGenerator
from app.services.document_classifier import DocumentClassifier
from app.services.generation_service import GenerationService
from app.services.google_api import GoogleApiClient
from app.services.llm_client import LLMClient
from app.services.picture_batch import PictureBatchGenerator
from app.services.prompt_resolver import PromptResolver
from app.services.token_manager import TokenManager

__all__ = [
    "CompetitorLookup",
    "ContentGenerator",
    "DocumentClassifier",
    "GenerationService",
    "GoogleApiClient",
    "LLMClient",
    "PictureBatchGenerator",
    "PromptResolver",
    "TokenManager",
]
