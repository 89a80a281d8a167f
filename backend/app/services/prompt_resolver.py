"""Prompt templates sourced from the Prompts tab of the spreadsheet.

Column B holds the field name, column C the prompt and column D an optional
example. Two rows carry special meaning:

- row 13 holds the combined picture prompt shared by pic1..pic4
- row 17 holds the subtopics prompt, used only by the "with subtopics" flow
"""

import logging
from dataclasses import dataclass, field

from app.config import Settings
from app.services.field_registry import (
    PICTURE_FIELDS,
    TITLE_TO_FIELD_ID,
    WITH_SUBTOPICS,
    sheet_field_name,
)
from app.services.google_api import GoogleApiClient

logger = logging.getLogger(__name__)

PICTURES_ROW = 13
SUBTOPICS_ONLY_ROW = 17


@dataclass
class PromptResult:
    """Lookup of a single field's prompt."""
    found: bool
    prompt: str | None = None
    example: str | None = None
    error: str | None = None


@dataclass
class PromptData:
    """A prompt row mapped onto a field id."""
    field_id: str
    field_title: str
    prompt: str
    example: str
    is_subtitles_only: bool = False


@dataclass
class PromptsResult:
    """All prompts of the tab, plus the titles that could not be mapped."""
    prompts: list[PromptData] = field(default_factory=list)
    dropped_titles: list[str] = field(default_factory=list)
    error: str | None = None


def _cell(row: list[str], index: int) -> str:
    return row[index] if len(row) > index and row[index] is not None else ""


def map_field_title_to_id(field_title: str, is_subtitles_only: bool) -> str | None:
    """Map a column-B title onto a field id.

    Exact matches win; otherwise the first table key contained in the title
    (or containing it) is used. Row 17 maps only onto ``subtopics``.
    Returns None when nothing applies.
    """
    title = field_title.lower().strip()

    field_id = TITLE_TO_FIELD_ID.get(title)
    if field_id is None:
        field_id = next(
            (
                candidate
                for key, candidate in TITLE_TO_FIELD_ID.items()
                if key in title or title in key
            ),
            None,
        )

    if field_id is None:
        return None
    if is_subtitles_only and field_id != "subtopics":
        return None
    return field_id


def parse_prompt_rows(rows: list[list[str]]) -> PromptsResult:
    """Turn Prompts-tab rows (B:D, starting at row 1) into PromptData.

    Rows without a title or prompt are skipped (this covers the header). The
    row-13 prompt is fanned out to every picture field, and individually
    mapped picture rows are skipped so each picture field appears once.
    Unmapped titles are dropped and reported in ``dropped_titles``. When
    several rows map onto the same field, the first one wins.
    """
    result = PromptsResult()
    emitted: set[str] = set()

    for index, row in enumerate(rows):
        row_number = index + 1
        field_title = _cell(row, 0)
        prompt = _cell(row, 1)
        example = _cell(row, 2)

        if not field_title.strip() or not prompt.strip():
            continue

        if row_number == PICTURES_ROW:
            for pic_field in PICTURE_FIELDS:
                result.prompts.append(PromptData(
                    field_id=pic_field,
                    field_title=pic_field,
                    prompt=prompt.strip(),
                    example=example.strip(),
                ))
            logger.info(f"Row {PICTURES_ROW} prompt fanned out to {', '.join(PICTURE_FIELDS)}")
            continue

        is_subtitles_only = row_number == SUBTOPICS_ONLY_ROW
        field_id = map_field_title_to_id(field_title, is_subtitles_only)

        if field_id is None:
            logger.info(f"Could not map field title '{field_title}' (row {row_number}) to a field ID")
            result.dropped_titles.append(field_title.strip())
            continue

        if field_id in PICTURE_FIELDS:
            logger.debug(f"Skipping {field_id} in row {row_number} - covered by row {PICTURES_ROW}")
            continue

        if field_id in emitted:
            logger.info(f"Skipping duplicate prompt for {field_id} in row {row_number} ('{field_title}')")
            continue
        emitted.add(field_id)

        result.prompts.append(PromptData(
            field_id=field_id,
            field_title=field_title.strip(),
            prompt=prompt.strip(),
            example=example.strip(),
            is_subtitles_only=is_subtitles_only,
        ))

    return result


def find_prompt_for_field(
    prompts: list[PromptData],
    field_id: str,
    flow: str,
) -> PromptData | None:
    """Pick the prompt for a field in a flow.

    Row-17 prompts are only eligible in the "with subtopics" flow.
    """
    for prompt in prompts:
        if prompt.field_id != field_id:
            continue
        if prompt.is_subtitles_only and flow != WITH_SUBTOPICS:
            continue
        return prompt
    return None


def find_prompt_row(rows: list[list[str]], field_id: str) -> PromptResult:
    """Exact, case-insensitive lookup of a field's row, skipping the header."""
    mapped_name = sheet_field_name(field_id)

    for index, row in enumerate(rows[1:], start=2):
        if len(row) < 2:
            continue
        if _cell(row, 0).lower().strip() != mapped_name.lower():
            continue

        prompt = _cell(row, 1)
        example = _cell(row, 2)
        logger.info(f"Found prompt for '{field_id}' in row {index} ({len(prompt)} chars)")

        if not prompt:
            return PromptResult(found=False, error=f'Field "{field_id}" found but prompt is empty')
        return PromptResult(found=True, prompt=prompt, example=example or None)

    available = [r[0] for r in rows[1:10] if r and r[0]]
    logger.info(f"Field '{mapped_name}' not found. Available fields: {available}")
    return PromptResult(
        found=False,
        error=f'Field "{field_id}" (mapped to "{mapped_name}") not found in Prompts tab',
    )


class PromptResolver:
    """Fetches prompt templates from the spreadsheet."""

    def __init__(self, settings: Settings, google: GoogleApiClient):
        self.settings = settings
        self.google = google

    def _configuration_error(self) -> str | None:
        if not self.settings.google_client_id or not self.settings.google_client_secret:
            return "Google OAuth credentials not configured"
        if not self.settings.google_sheet_id:
            return "GOOGLE_SHEET_ID not configured"
        return None

    async def resolve(self, field_id: str, access_token: str | None) -> PromptResult:
        """Look up one field's prompt by its mapped sheet name.

        Missing configuration, a missing token, an empty tab or a missing or
        empty row give ``found=False`` with a descriptive error. Transport
        failures propagate.
        """
        error = self._configuration_error()
        if error:
            return PromptResult(found=False, error=error)
        if not access_token:
            return PromptResult(found=False, error="No access token provided")

        rows = await self.google.get_values(
            self.settings.google_sheet_id,
            self.settings.prompts_range,
            access_token,
        )
        if not rows:
            return PromptResult(found=False, error="No data found in Prompts tab")

        return find_prompt_row(rows, field_id)

    async def load_prompts(self, access_token: str | None) -> PromptsResult:
        """Load every prompt in the tab."""
        error = self._configuration_error()
        if error:
            return PromptsResult(error=error)
        if not access_token:
            return PromptsResult(error="No access token provided. User needs to authenticate with Google.")

        rows = await self.google.get_values(
            self.settings.google_sheet_id,
            self.settings.prompts_range,
            access_token,
        )
        if not rows:
            return PromptsResult(error="No data found in the Prompts sheet")

        result = parse_prompt_rows(rows)
        logger.info(
            f"Processed {len(result.prompts)} prompts "
            f"({len(result.dropped_titles)} unmapped titles dropped)"
        )
        return result

    async def prompt_for_field(
        self,
        field_id: str,
        flow: str,
        access_token: str | None,
    ) -> PromptResult:
        """Flow-aware lookup over the full prompt set."""
        loaded = await self.load_prompts(access_token)
        if loaded.error:
            return PromptResult(found=False, error=loaded.error)

        prompt = find_prompt_for_field(loaded.prompts, field_id, flow)
        if prompt is None:
            return PromptResult(
                found=False,
                error=f'No prompt found for field "{field_id}" in flow "{flow}"',
            )
        return PromptResult(found=True, prompt=prompt.prompt, example=prompt.example or None)
