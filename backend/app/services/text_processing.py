"""String helpers for prompt templating and model output cleanup."""

import re

KEYWORD_PLACEHOLDERS = [
    re.compile(r"\{\{keyword\}\}", re.IGNORECASE),  # {{keyword}}, {{KEYWORD}}, ...
    re.compile(r"\bKEYWORD\b"),
]
SUBTOPICS_PLACEHOLDER = re.compile(r"\{\{subtopics\}\}", re.IGNORECASE)
BULLET_PREFIX = re.compile(r"^[•\-*\s]+")

SMALL_WORDS = {
    "a", "an", "the", "and", "or", "but", "in", "on",
    "at", "to", "for", "of", "with", "by",
}


def substitute_keyword(text: str, keyword: str) -> str:
    """Replace every keyword placeholder spelling with ``keyword``."""
    for pattern in KEYWORD_PLACEHOLDERS:
        text = pattern.sub(lambda _: keyword, text)
    return text


def format_bullet_list(items: list[str]) -> str:
    """Render items as "• item" lines, dropping any existing bullet marker."""
    return "\n".join(f"• {BULLET_PREFIX.sub('', item).strip()}" for item in items)


def substitute_subtopics(text: str, subtopics_list: str) -> str:
    return SUBTOPICS_PLACEHOLDER.sub(lambda _: subtopics_list, text)


def strip_markdown(text: str) -> str:
    """Remove header markers, bold markers and ``*`` bullets."""
    text = re.sub(r"^#{1,6}\s+", "", text, flags=re.MULTILINE)
    text = text.replace("**", "")
    text = re.sub(r"^\*\s+", "", text, flags=re.MULTILINE)
    return text.strip()


def title_case(text: str) -> str:
    """Title-case words, keeping small words lowercase after the first word.

    The first character of the result is always uppercase.
    """
    words = []
    for index, word in enumerate(text.split(" ")):
        if index > 0 and word.lower() in SMALL_WORDS:
            words.append(word.lower())
        else:
            words.append(word[:1].upper() + word[1:].lower())

    result = " ".join(words)
    return result[:1].upper() + result[1:]
