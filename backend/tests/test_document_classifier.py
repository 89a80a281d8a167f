"""Tests for document flattening and keyword classification."""

import pytest

from app.errors import AuthError, ConfigurationError, NotFoundError
from app.services.document_classifier import (
    DocumentClassifier,
    DocumentTextElement,
    classify_elements,
    extract_document_id,
    flatten_document,
)
from tests.conftest import DOC_ID, OUTLINE_DOCUMENT, document, paragraph, table


def test_flatten_drops_blank_paragraphs_and_parses_heading_levels():
    doc = document(
        paragraph("Heading", "HEADING_3"),
        paragraph("   "),
        paragraph(""),
        paragraph("Body text"),
    )

    elements = flatten_document(doc)

    assert elements == [
        DocumentTextElement(text="Heading", is_heading=True, level=3),
        DocumentTextElement(text="Body text", is_heading=False, level=0),
    ]
    assert all(el.text.strip() for el in elements)


def test_flatten_visits_table_cells_in_document_order():
    doc = document(
        paragraph("Before"),
        table(
            [[paragraph("r1c1")], [paragraph("r1c2")]],
            [[paragraph("r2c1"), paragraph("r2c1 second")], [paragraph("")]],
        ),
        paragraph("After"),
    )

    texts = [el.text for el in flatten_document(doc)]

    assert texts == ["Before", "r1c1", "r1c2", "r2c1", "r2c1 second", "After"]


def test_flatten_joins_text_runs():
    doc = document({
        "paragraph": {
            "elements": [
                {"textRun": {"content": "Mattress "}},
                {"inlineObjectElement": {}},
                {"textRun": {"content": "Removal\n"}},
            ]
        }
    })

    assert flatten_document(doc)[0].text == "Mattress Removal"


def test_heading_match_collects_subtopics_until_next_heading():
    elements = flatten_document(OUTLINE_DOCUMENT)

    result = classify_elements(elements, "mattress removal")

    assert result.category == "with subtopics"
    assert result.subtopics == ["Box spring removal", "Futon removal", "Crib mattress removal"]
    assert result.matched_line == "Mattress Removal"
    assert result.line_number == 2
    assert "heading level 2" in result.reason


def test_subtopics_skip_exact_keyword_repeats_only():
    elements = [
        DocumentTextElement("Junk Removal", True, 2),
        DocumentTextElement("junk removal", False),
        DocumentTextElement("Junk removal near me", False),
        DocumentTextElement("Next", True, 2),
    ]

    result = classify_elements(elements, "Junk Removal")

    assert result.subtopics == ["Junk removal near me"]


def test_heading_without_followers_has_no_subtopics():
    elements = [
        DocumentTextElement("Hot Tub Removal", True, 2),
        DocumentTextElement("Other", True, 2),
    ]

    result = classify_elements(elements, "hot tub removal")

    assert result.category == "with subtopics"
    assert result.subtopics is None


def test_body_match_cites_nearest_preceding_heading():
    result = classify_elements(flatten_document(OUTLINE_DOCUMENT), "hot tub")

    assert result.category == "no subtopics"
    assert result.reason == '"hot tub" found under heading "Other" (no subtopics)'
    assert result.subtopics is None
    assert result.line_number == 7


def test_body_match_without_heading():
    elements = [DocumentTextElement("Appliance removal", False)]

    result = classify_elements(elements, "appliance")

    assert result.reason == '"appliance" found as regular content (no subtopics)'


def test_first_match_wins_with_substring_semantics():
    elements = [
        DocumentTextElement("Furniture removal", False),
        DocumentTextElement("Removal", True, 1),
    ]

    result = classify_elements(elements, "removal")

    assert result.category == "no subtopics"
    assert result.matched_line == "Furniture removal"


def test_missing_keyword_has_no_category():
    result = classify_elements(flatten_document(OUTLINE_DOCUMENT), "piano moving")

    assert result.category is None
    assert "not found" in result.reason


def test_classification_is_deterministic():
    elements = flatten_document(OUTLINE_DOCUMENT)

    first = classify_elements(elements, "Mattress Removal")
    second = classify_elements(elements, "Mattress Removal")

    assert (first.category, first.reason, first.matched_line) == (
        second.category,
        second.reason,
        second.matched_line,
    )


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://docs.google.com/document/d/abc_DEF-123/edit", "abc_DEF-123"),
        ("https://docs.google.com/document/d/e/2PACX-1vQ/pub", "2PACX-1vQ"),
        ("https://example.com/nothing", None),
    ],
)
def test_extract_document_id(url, expected):
    assert extract_document_id(url) == expected


async def test_classifier_fetches_configured_document(settings, google):
    classifier = DocumentClassifier(settings, google)

    result = await classifier.classify("Mattress Removal", "token-1")

    assert result.category == "with subtopics"
    assert google.calls == [("document", DOC_ID, "token-1")]


async def test_classifier_resolves_document_id_from_url(settings, google):
    settings.google_doc_id = None
    settings.google_doc_url = f"https://docs.google.com/document/d/{DOC_ID}/edit"

    result = await DocumentClassifier(settings, google).classify("hot tub", "token")

    assert result.category == "no subtopics"


async def test_classifier_requires_document(settings, google):
    settings.google_doc_id = None
    settings.google_doc_url = None

    with pytest.raises(ConfigurationError):
        await DocumentClassifier(settings, google).classify("hot tub", "token")


async def test_classifier_requires_oauth_client(settings, google):
    settings.google_client_secret = None

    with pytest.raises(ConfigurationError):
        await DocumentClassifier(settings, google).classify("hot tub", "token")


async def test_classifier_requires_token(settings, google):
    with pytest.raises(AuthError):
        await DocumentClassifier(settings, google).classify("hot tub", None)
    assert google.calls == []


async def test_classifier_raises_when_keyword_missing(settings, google):
    with pytest.raises(NotFoundError, match="piano"):
        await DocumentClassifier(settings, google).classify("piano", "token")


async def test_classifier_raises_on_empty_document(settings, google):
    google.documents[DOC_ID] = {"documentId": DOC_ID}

    with pytest.raises(NotFoundError, match="no content"):
        await DocumentClassifier(settings, google).classify("piano", "token")
