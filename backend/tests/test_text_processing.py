"""Tests for placeholder substitution and output cleanup helpers."""

from app.services.text_processing import (
    format_bullet_list,
    strip_markdown,
    substitute_keyword,
    substitute_subtopics,
    title_case,
)


def test_substitute_keyword_replaces_every_spelling():
    text = "About {{keyword}}, {{KEYWORD}}, {{Keyword}} and KEYWORD."

    assert substitute_keyword(text, "junk removal") == (
        "About junk removal, junk removal, junk removal and junk removal."
    )


def test_substitute_keyword_leaves_longer_words_alone():
    assert substitute_keyword("KEYWORDS are not KEYWORD", "x") == "KEYWORDS are not x"


def test_substitute_keyword_is_idempotent():
    once = substitute_keyword("Best {{keyword}} near you", "sofa pickup")

    assert substitute_keyword(once, "sofa pickup") == once


def test_substitute_keyword_treats_replacement_literally():
    assert substitute_keyword("KEYWORD", r"c:\new \1") == r"c:\new \1"


def test_format_bullet_list_normalizes_markers():
    assert format_bullet_list(["- Sofa", "• Futon", "  * Crib", "Bed frame"]) == (
        "• Sofa\n• Futon\n• Crib\n• Bed frame"
    )


def test_substitute_subtopics_is_case_insensitive():
    assert substitute_subtopics("Cover:\n{{SUBTOPICS}}", "• A") == "Cover:\n• A"


def test_strip_markdown():
    text = "## Heading\n**Bold** words\n* first\n* second\n"

    assert strip_markdown(text) == "Heading\nBold words\nfirst\nsecond"


def test_title_case_keeps_small_words_lowercase():
    assert title_case("the best junk removal in town") == "The Best Junk Removal in Town"
    assert title_case("a GUIDE to the city") == "A Guide to the City"


def test_title_case_empty():
    assert title_case("") == ""
