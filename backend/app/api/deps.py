"""Dependency injection for FastAPI routes."""

from typing import Annotated

from fastapi import Depends

from app.config import Settings, get_settings
from app.services import (
    CompetitorLookup,
    ContentGenerator,
    DocumentClassifier,
    GenerationService,
    GoogleApiClient,
    LLMClient,
    PictureBatchGenerator,
    PromptResolver,
    TokenManager,
)
from app.services.oauth import GoogleOAuth
from app.services.token_manager import TokenData

AppSettings = Annotated[Settings, Depends(get_settings)]


def get_google_client(settings: AppSettings) -> GoogleApiClient:
    return GoogleApiClient(settings)


# Singleton instance
_llm_client: LLMClient | None = None


def get_llm_client(settings: AppSettings) -> LLMClient:
    """Get or create the shared LLM client (provider SDK clients are reused)."""
    global _llm_client
    if _llm_client is None:
        _llm_client = LLMClient(settings)
    return _llm_client


def get_token_manager(settings: AppSettings) -> TokenManager:
    return TokenManager(settings)


def get_oauth(settings: AppSettings) -> GoogleOAuth:
    return GoogleOAuth(settings)


Google = Annotated[GoogleApiClient, Depends(get_google_client)]
LLM = Annotated[LLMClient, Depends(get_llm_client)]


def get_classifier(settings: AppSettings, google: Google) -> DocumentClassifier:
    return DocumentClassifier(settings, google)


def get_competitor_lookup(settings: AppSettings, google: Google) -> CompetitorLookup:
    return CompetitorLookup(settings, google)


def get_prompt_resolver(settings: AppSettings, google: Google) -> PromptResolver:
    return PromptResolver(settings, google)


def get_generation_service(
    resolver: Annotated[PromptResolver, Depends(get_prompt_resolver)],
    llm: LLM,
) -> GenerationService:
    return GenerationService(
        resolver,
        ContentGenerator(llm),
        PictureBatchGenerator(llm),
    )


# Type aliases for dependency injection
Classifier = Annotated[DocumentClassifier, Depends(get_classifier)]
Competitors = Annotated[CompetitorLookup, Depends(get_competitor_lookup)]
Prompts = Annotated[PromptResolver, Depends(get_prompt_resolver)]
Generation = Annotated[GenerationService, Depends(get_generation_service)]
Tokens = Annotated[TokenManager, Depends(get_token_manager)]
OAuth = Annotated[GoogleOAuth, Depends(get_oauth)]


async def valid_access_token(
    access_token: str | None,
    token_data: TokenData | None,
    tokens: TokenManager,
) -> str | None:
    """Pass the bearer token through the best-effort expiry check."""
    if not access_token:
        return None
    result = await tokens.get_valid_access_token(access_token, token_data)
    return result.access_token
