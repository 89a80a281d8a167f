"""LLM prompts for content generation."""

from app.prompts.content_writer import (
    COMPETITOR_CONTEXT,
    CONTENT_WRITER_SYSTEM_PROMPT,
    PICTURE_UNIQUENESS_RULES,
    SUBTOPICS_CONTEXT,
    UNIQUENESS_CLOSING,
    UNIQUENESS_HEADER,
    UNIQUENESS_PREVIOUS,
    UNIQUENESS_THEMES,
    UNIQUENESS_USED_PHRASES,
)
from app.prompts.picture_batch import PICTURE_BATCH_SYSTEM_PROMPT

__all__ = [
    "COMPETITOR_CONTEXT",
    "CONTENT_WRITER_SYSTEM_PROMPT",
    "PICTURE_BATCH_SYSTEM_PROMPT",
    "PICTURE_UNIQUENESS_RULES",
    "SUBTOPICS_CONTEXT",
    "UNIQUENESS_CLOSING",
    "UNIQUENESS_HEADER",
    "UNIQUENESS_PREVIOUS",
    "UNIQUENESS_THEMES",
    "UNIQUENESS_USED_PHRASES",
]
