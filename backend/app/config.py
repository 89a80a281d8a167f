"""Application configuration via environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Content Generator"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"
    public_app_url: str = "http://localhost:8000"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Google OAuth
    google_client_id: str | None = None
    google_client_secret: str | None = None
    google_access_token: str | None = None  # Pre-authenticated token (development)
    google_refresh_token: str | None = None
    default_login_email: str | None = None
    google_api_timeout: float = 30.0

    # Google Docs (keyword classification source)
    google_doc_id: str | None = None
    google_doc_url: str | None = None

    # Google Sheets (prompts + competitor URLs)
    google_sheet_id: str | None = None
    prompts_range: str = "Prompts!B:D"  # B = field, C = prompt, D = example
    competitors_range: str = "D:H"
    competitor_keyword_column: int = 0  # Column D within D:H
    competitor_urls_column: int = 4  # Column H within D:H

    # LLM API Keys
    openai_api_key: str | None = None
    anthropic_api_key: str | None = None
    llm_provider: Literal["openai", "anthropic"] = "openai"
    llm_model: str = "gpt-4o"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
