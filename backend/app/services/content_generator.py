"""Single-field content generation from spreadsheet prompt templates."""

import logging
from dataclasses import dataclass

from app.prompts import (
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
from app.services.field_registry import field_label, is_picture_field
from app.services.llm_client import LLMClient
from app.services.text_processing import (
    format_bullet_list,
    strip_markdown,
    substitute_keyword,
    substitute_subtopics,
    title_case,
)

logger = logging.getLogger(__name__)

FIELD_TEMPERATURE = 0.7
FIELD_MAX_TOKENS = 1000

# Words whose presence in a sibling picture marks a theme to avoid
THEME_VOCABULARY = [
    "stress", "free", "eco", "friendly", "safe", "damage", "fast", "efficient",
    "professional", "affordable", "reliable", "convenient", "simplified",
    "streamlined", "worry", "seamless", "easy", "quick", "disposal", "recycling",
]


@dataclass
class SiblingContext:
    """What other picture fields already say."""
    used_phrases: list[str]
    themes: list[str]
    descriptions: str


def extract_sibling_context(
    field_id: str,
    previous_pictures: dict[str, str] | None,
) -> SiblingContext | None:
    """Collect used first lines and vocabulary themes from sibling pictures.

    The field itself and empty values are ignored. Returns None when there is
    nothing to avoid.
    """
    siblings = [
        (key, value)
        for key, value in (previous_pictures or {}).items()
        if key != field_id and value
    ]
    if not siblings:
        return None

    used_phrases: list[str] = []
    themes: list[str] = []
    for _, value in siblings:
        first_line = value.split("\n")[0]
        if first_line:
            used_phrases.append(first_line.lower())

        for word in value.lower().split():
            for theme in THEME_VOCABULARY:
                if theme in word and theme not in themes:
                    themes.append(theme)

    return SiblingContext(
        used_phrases=used_phrases,
        themes=themes,
        descriptions="\n".join(f"[{key}]: {value}" for key, value in siblings),
    )


def build_uniqueness_block(context: SiblingContext) -> str:
    block = UNIQUENESS_HEADER
    if context.used_phrases:
        block += UNIQUENESS_USED_PHRASES.format(phrases="\n".join(context.used_phrases))
    if context.themes:
        block += UNIQUENESS_THEMES.format(themes=", ".join(context.themes))
    block += UNIQUENESS_PREVIOUS.format(descriptions=context.descriptions)
    block += UNIQUENESS_CLOSING
    return block


def build_prompt(
    field_id: str,
    keyword: str,
    prompt: str,
    example: str | None = None,
    competitor_urls: list[str] | None = None,
    previous_pictures: dict[str, str] | None = None,
    subtopics: list[str] | None = None,
) -> str:
    """Assemble the user prompt for one field.

    Competitor URLs are only used for the FAQ field; sibling pictures only
    for picture fields.
    """
    if not prompt:
        raise ValueError("Prompt template is required")

    text = substitute_keyword(prompt, keyword)

    subtopics_list = None
    if field_id == "subtopics" and subtopics:
        subtopics_list = format_bullet_list(subtopics)
        text = substitute_subtopics(text, subtopics_list)
        if subtopics_list not in text:
            text += SUBTOPICS_CONTEXT.format(keyword=keyword, subtopics_list=subtopics_list)

    if example:
        example = substitute_keyword(example, keyword)
        if subtopics_list:
            example = substitute_subtopics(example, subtopics_list)
        text += f"\n\nExample format:\n{example}"

    if field_id == "faq" and competitor_urls:
        text += COMPETITOR_CONTEXT.format(urls=", ".join(competitor_urls))

    if is_picture_field(field_id):
        context = extract_sibling_context(field_id, previous_pictures)
        if context:
            text += build_uniqueness_block(context)

    return text


def build_system_prompt(field_id: str, keyword: str) -> str:
    system = CONTENT_WRITER_SYSTEM_PROMPT.format(keyword=keyword)
    if is_picture_field(field_id):
        system += PICTURE_UNIQUENESS_RULES
    return system


def post_process(field_id: str, content: str, keyword: str) -> str:
    """Strip markdown, fill leftover placeholders and title-case titles."""
    content = strip_markdown(content)
    content = substitute_keyword(content, keyword)
    if field_id == "title":
        content = title_case(content)
    return content


class ContentGenerator:
    """Generates the content of one field with the configured LLM."""

    def __init__(self, llm: LLMClient):
        self.llm = llm

    async def generate(
        self,
        field_id: str,
        keyword: str,
        flow: str,
        prompt: str,
        example: str | None = None,
        competitor_urls: list[str] | None = None,
        previous_pictures: dict[str, str] | None = None,
        subtopics: list[str] | None = None,
    ) -> str:
        """Generate one field from its prompt template.

        Args:
            field_id: Field to generate (title, intro, pic1..pic4, ...)
            keyword: Runtime keyword substituted into the template
            flow: Content flow the keyword was classified into
            prompt: Template from the Prompts tab; never synthesized
            example: Optional example text appended as a format hint
            competitor_urls: Inspiration URLs, used by the FAQ field only
            previous_pictures: Sibling picture outputs to stay distinct from
            subtopics: Subtopics from the outline document

        Returns:
            Cleaned generated text
        """
        user_prompt = build_prompt(
            field_id,
            keyword,
            prompt,
            example=example,
            competitor_urls=competitor_urls,
            previous_pictures=previous_pictures,
            subtopics=subtopics,
        )
        system_prompt = build_system_prompt(field_id, keyword)

        logger.info(f"Generating {field_label(field_id)} for '{keyword}' ({flow})")

        content = await self.llm.complete(
            system_prompt,
            user_prompt,
            temperature=FIELD_TEMPERATURE,
            max_tokens=FIELD_MAX_TOKENS,
        )
        return post_process(field_id, content, keyword)
