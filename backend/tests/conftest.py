"""Shared fixtures: configured settings, in-memory Google and LLM fakes."""

from typing import Any

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_google_client, get_llm_client
from app.config import Settings, get_settings
from app.main import app

DOC_ID = "doc-123"
SHEET_ID = "sheet-456"

PROMPT_ROWS = [
    ["Field", "Prompt", "Example"],
    ["Title", "Write a title about {{keyword}}.", "KEYWORD Done Right"],
    ["Intro", "Write an intro for KEYWORD.", ""],
    ["Cost", "Explain what KEYWORD costs.", ""],
    ["Why", "Why choose us for {{KEYWORD}}?", ""],
    ["FAQ", "Write FAQs about KEYWORD.", "Q: question\nA: answer"],
    ["Pic1", "Describe picture one for KEYWORD.", ""],
    [],
    ["Mystery column", "Unmapped prompt", ""],
    ["Notes", "", ""],
    [],
    [],
    ["Pictures", "Write 13 picture titles and summaries for KEYWORD.", "Title\nSummary"],
    [],
    [],
    [],
    ["Subtopics", "Describe each subtopic of KEYWORD:\n{{subtopics}}", ""],
]

COMPETITOR_ROWS = [
    ["Keyword", "Volume", "Difficulty", "Intent", "Competitors"],
    ["Junk Removal", "", "", "", "https://junk.example.com"],
    ["Mattress Removal", "", "", "", "a.com, b.com"],
]

PICTURE_BATCH_RESPONSE = "\n\n".join(
    f"{i}. Picture Title {i}\nSummary number {i} for the service."
    for i in range(1, 14)
)


def paragraph(text: str, style: str = "NORMAL_TEXT") -> dict[str, Any]:
    """A Docs API structural element holding one paragraph."""
    return {
        "paragraph": {
            "paragraphStyle": {"namedStyleType": style},
            "elements": [{"textRun": {"content": f"{text}\n"}}],
        }
    }


def table(*rows: list[list[dict[str, Any]]]) -> dict[str, Any]:
    """A Docs API table; each cell is a list of structural elements."""
    return {
        "table": {
            "tableRows": [
                {"tableCells": [{"content": cell} for cell in row]}
                for row in rows
            ]
        }
    }


def document(*content: dict[str, Any]) -> dict[str, Any]:
    return {"documentId": DOC_ID, "body": {"content": list(content)}}


OUTLINE_DOCUMENT = document(
    paragraph("Services", "HEADING_1"),
    paragraph("Mattress Removal", "HEADING_2"),
    paragraph("Box spring removal"),
    paragraph("Futon removal"),
    paragraph("Crib mattress removal"),
    paragraph("Other", "HEADING_2"),
    paragraph("Hot tub removal"),
)


class FakeGoogleApiClient:
    """In-memory stand-in for GoogleApiClient."""

    def __init__(
        self,
        documents: dict[str, dict] | None = None,
        values: dict[str, list[list[str]]] | None = None,
    ):
        self.documents = documents if documents is not None else {DOC_ID: OUTLINE_DOCUMENT}
        self.values = values if values is not None else {
            "Prompts!B:D": PROMPT_ROWS,
            "D:H": COMPETITOR_ROWS,
        }
        self.calls: list[tuple] = []

    async def get_document(self, document_id: str, access_token: str) -> dict:
        self.calls.append(("document", document_id, access_token))
        return self.documents[document_id]

    async def get_values(self, spreadsheet_id: str, cell_range: str, access_token: str) -> list[list[str]]:
        self.calls.append(("values", spreadsheet_id, cell_range, access_token))
        return self.values.get(cell_range, [])


class FakeLLMClient:
    """Records prompts and answers from a callable."""

    def __init__(self, respond=None):
        self.respond = respond or default_response
        self.calls: list[dict[str, Any]] = []

    def ensure_configured(self) -> None:
        pass

    async def complete(self, system: str, prompt: str, *, temperature: float, max_tokens: int) -> str:
        self.calls.append({
            "system": system,
            "prompt": prompt,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        return self.respond(system, prompt)


def default_response(system: str, prompt: str) -> str:
    if "title and summary combinations" in system:
        return PICTURE_BATCH_RESPONSE
    return f"**Generated** for: {prompt.splitlines()[0]}"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        google_client_id="client-id",
        google_client_secret="client-secret",
        google_doc_id=DOC_ID,
        google_sheet_id=SHEET_ID,
        openai_api_key="sk-test",
        public_app_url="http://testserver",
    )


@pytest.fixture
def google() -> FakeGoogleApiClient:
    return FakeGoogleApiClient()


@pytest.fixture
def llm() -> FakeLLMClient:
    return FakeLLMClient()


@pytest.fixture
def client(settings, google, llm):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_google_client] = lambda: google
    app.dependency_overrides[get_llm_client] = lambda: llm
    yield TestClient(app)
    app.dependency_overrides.clear()
