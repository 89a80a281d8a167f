"""Request and response models shared by the routes.

JSON bodies use camelCase keys; Python code uses snake_case attributes.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.services.field_registry import FLOWS, Flow
from app.services.token_manager import TokenData


class ApiModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class KeywordRequest(ApiModel):
    """Body carrying a keyword and the caller's Google token."""

    keyword: str = Field(default=None, validate_default=True)
    access_token: str | None = None
    token_data: TokenData | None = None

    @field_validator("keyword", mode="before")
    @classmethod
    def keyword_not_blank(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Keyword is required and must be a non-empty string")
        return value.strip()


class FlowRequest(KeywordRequest):
    """Keyword body that also names the content flow."""

    flow: Flow = Field(default=None, validate_default=True)

    @field_validator("flow", mode="before")
    @classmethod
    def flow_is_known(cls, value: Any) -> str:
        if value not in FLOWS:
            raise ValueError('Invalid flow. Must be "with subtopics" or "no subtopics"')
        return value
