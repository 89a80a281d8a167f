"""Static registry of content fields, their labels and spreadsheet names."""

from typing import Literal

Flow = Literal["with subtopics", "no subtopics"]

WITH_SUBTOPICS: Flow = "with subtopics"
NO_SUBTOPICS: Flow = "no subtopics"
FLOWS: tuple[str, ...] = (WITH_SUBTOPICS, NO_SUBTOPICS)

PICTURE_FIELDS = ["pic1", "pic2", "pic3", "pic4"]

# Combined picture prompt shared by all four picture fields (row 13)
PICTURES_SENTINEL = "pictures"

FIELD_LABELS: dict[str, str] = {
    "title": "Title",
    "intro": "Introduction",
    "pic1": "Picture 1 Description",
    "pic2": "Picture 2 Description",
    "pic3": "Picture 3 Description",
    "pic4": "Picture 4 Description",
    "subtopics": "Subtopics",
    "cost": "Cost Information",
    "why": "Why Choose Us",
    "faq": "FAQs",
}

# Field id -> name in column B of the Prompts tab (same for both flows)
SHEET_FIELD_NAMES: dict[str, str] = {
    "title": "Title",
    "intro": "Intro",
    "pic1": "Pic1",
    "pic2": "Pic2",
    "pic3": "Pic3",
    "pic4": "Pic4",
    PICTURES_SENTINEL: "Pictures",
    "subtopics": "Subtopics",
    "cost": "Cost",
    "why": "Why",
    "faq": "FAQ",
}

# Column B titles (lowercased) -> field id, including "w"-prefixed
# variants used by the "with subtopics" flow
TITLE_TO_FIELD_ID: dict[str, str] = {
    "title": "title",
    "wtitle": "title",
    "introduction": "intro",
    "intro": "intro",
    "entro": "intro",
    "wentro": "intro",
    "picture 1": "pic1",
    "picture 2": "pic2",
    "picture 3": "pic3",
    "picture 4": "pic4",
    "pic1": "pic1",
    "pic2": "pic2",
    "pic3": "pic3",
    "pic4": "pic4",
    "wpic1": "pic1",
    "wpic2": "pic2",
    "wpic3": "pic3",
    "wpic4": "pic4",
    "cost": "cost",
    "cost information": "cost",
    "wcost": "cost",
    "why": "why",
    "why choose us": "why",
    "wwhy": "why",
    "faq": "faq",
    "faqs": "faq",
    "wfaq": "faq",
    "subtopics": "subtopics",
    "sub": "subtopics",
}


def is_valid_field(field_id: str) -> bool:
    return field_id in FIELD_LABELS


def is_picture_field(field_id: str) -> bool:
    return field_id in PICTURE_FIELDS


def field_label(field_id: str) -> str:
    return FIELD_LABELS.get(field_id, field_id)


def sheet_field_name(field_id: str) -> str:
    """Map a field id to its Prompts-tab name, passing unknown ids through."""
    return SHEET_FIELD_NAMES.get(field_id, field_id)


def fields_for_flow(flow: str) -> list[str]:
    """Ordered field list for a flow. Subtopics exist only with subtopics."""
    fields = ["title", "intro", *PICTURE_FIELDS]
    if flow == WITH_SUBTOPICS:
        fields.append("subtopics")
    fields.extend(["cost", "why", "faq"])
    return fields


def text_fields_for_flow(flow: str) -> list[str]:
    """Fields generated one by one (pictures are generated as a batch)."""
    return [f for f in fields_for_flow(flow) if not is_picture_field(f)]
