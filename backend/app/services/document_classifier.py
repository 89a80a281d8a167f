"""Keyword classification against the outline document.

The outline document lists service keywords either as headings (followed by
their subtopics) or as plain lines under a heading. Where the keyword sits
decides which content flow is used for it.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any

from app.config import Settings
from app.errors import AuthError, ConfigurationError, NotFoundError
from app.services.field_registry import NO_SUBTOPICS, WITH_SUBTOPICS
from app.services.google_api import GoogleApiClient

logger = logging.getLogger(__name__)

# Published (/d/e/{id}/pub) is checked first so "e" is never taken as the id
DOCUMENT_ID_PATTERNS = [
    re.compile(r"/document/d/e/([a-zA-Z0-9-_]+)"),
    re.compile(r"/document/d/([a-zA-Z0-9-_]+)"),
]


@dataclass
class DocumentTextElement:
    """One non-empty paragraph of the flattened document."""
    text: str
    is_heading: bool
    level: int = 0


@dataclass
class ClassificationResult:
    """Outcome of classifying a keyword against the document."""
    category: str | None
    reason: str
    matched_line: str | None = None
    line_number: int | None = None
    subtopics: list[str] | None = None


def extract_document_id(doc_url: str) -> str | None:
    """Extract a document ID from a Google Docs URL."""
    for pattern in DOCUMENT_ID_PATTERNS:
        match = pattern.search(doc_url)
        if match:
            return match.group(1)
    return None


def _heading_level(paragraph: dict[str, Any]) -> tuple[bool, int]:
    style_type = (paragraph.get("paragraphStyle") or {}).get("namedStyleType") or ""
    if "HEADING" not in style_type:
        return False, 0
    try:
        level = int(style_type.replace("HEADING_", ""))
    except ValueError:
        level = 0
    return True, level or 1


def flatten_document(document: dict[str, Any]) -> list[DocumentTextElement]:
    """Flatten a Docs API document into text elements in document order.

    Table cells are visited row by row. Paragraphs whose text is empty after
    trimming are dropped.
    """
    elements: list[DocumentTextElement] = []

    def visit(element: dict[str, Any]) -> None:
        paragraph = element.get("paragraph")
        if paragraph:
            is_heading, level = _heading_level(paragraph)
            text = "".join(
                (elem.get("textRun") or {}).get("content", "")
                for elem in paragraph.get("elements") or []
            ).strip()
            if text:
                elements.append(DocumentTextElement(text=text, is_heading=is_heading, level=level))

        table = element.get("table")
        if table:
            for row in table.get("tableRows") or []:
                for cell in row.get("tableCells") or []:
                    for cell_element in cell.get("content") or []:
                        visit(cell_element)

    for element in (document.get("body") or {}).get("content") or []:
        visit(element)

    return elements


def classify_elements(
    elements: list[DocumentTextElement],
    keyword: str,
) -> ClassificationResult:
    """Classify a keyword against flattened document elements.

    The first element containing the keyword (case-insensitive substring)
    decides the flow. A heading match yields "with subtopics" and collects the
    lines up to the next heading; any other match yields "no subtopics".
    """
    keyword_lower = keyword.lower().strip()

    match_index = next(
        (i for i, el in enumerate(elements) if keyword_lower in el.text.lower()),
        None,
    )
    if match_index is None:
        return ClassificationResult(
            category=None,
            reason=f'Keyword "{keyword}" not found in document',
        )

    matched = elements[match_index]
    subtopics: list[str] = []

    if matched.is_heading:
        category = WITH_SUBTOPICS
        reason = f'"{keyword}" found as heading level {matched.level} (with subtopics)'

        for element in elements[match_index + 1:]:
            if element.is_heading:
                break
            text = element.text.strip()
            # Only an exact repeat of the keyword is skipped
            if text.lower() != keyword_lower:
                subtopics.append(text)

        logger.debug(f"Found {len(subtopics)} subtopics under '{matched.text}'")
    else:
        category = NO_SUBTOPICS
        parent_heading = next(
            (el.text for el in reversed(elements[:match_index]) if el.is_heading),
            None,
        )
        if parent_heading:
            reason = f'"{keyword}" found under heading "{parent_heading}" (no subtopics)'
        else:
            reason = f'"{keyword}" found as regular content (no subtopics)'

    return ClassificationResult(
        category=category,
        reason=reason,
        matched_line=matched.text,
        line_number=match_index + 1,
        subtopics=subtopics or None,
    )


class DocumentClassifier:
    """Classifies keywords using the configured outline document."""

    def __init__(self, settings: Settings, google: GoogleApiClient):
        self.settings = settings
        self.google = google

    def _resolve_document_id(self) -> str:
        document_id = (self.settings.google_doc_id or "").strip()
        if not document_id and self.settings.google_doc_url:
            document_id = extract_document_id(self.settings.google_doc_url) or ""
        document_id = document_id.replace('"', "").replace("'", "").strip()
        if not document_id:
            raise ConfigurationError(
                "Could not extract document ID from URL and GOOGLE_DOC_ID not set"
            )
        return document_id

    async def classify(self, keyword: str, access_token: str | None) -> ClassificationResult:
        """Fetch the outline document and classify ``keyword`` against it.

        Raises:
            ConfigurationError: document or OAuth client not configured
            AuthError: no access token supplied
            NotFoundError: document empty or keyword absent
        """
        document_id = self._resolve_document_id()

        if not self.settings.google_client_id or not self.settings.google_client_secret:
            raise ConfigurationError("Google OAuth credentials not configured")

        if not access_token:
            raise AuthError("No access token provided. User needs to authenticate with Google.")

        document = await self.google.get_document(document_id, access_token)
        if not document or not document.get("body"):
            raise NotFoundError("Document not found or has no content")

        elements = flatten_document(document)
        logger.info(f"Extracted {len(elements)} text elements, looking for '{keyword}'")

        result = classify_elements(elements, keyword)
        if result.category is None:
            raise NotFoundError(result.reason)

        logger.info(f"Classification: {result.category} - {result.reason}")
        return result
