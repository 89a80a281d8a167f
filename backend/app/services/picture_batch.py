"""Combined generation of the four picture captions.

One model call returns a loosely numbered list of title/summary
combinations. The parser recovers as many as it can, then four distinct
combinations are picked at random for pic1..pic4.
"""

import logging
import random
import re
from dataclasses import dataclass

from app.errors import CombinationParseError
from app.prompts import PICTURE_BATCH_SYSTEM_PROMPT
from app.services.field_registry import PICTURE_FIELDS
from app.services.llm_client import LLMClient
from app.services.text_processing import substitute_keyword, title_case

logger = logging.getLogger(__name__)

TARGET_COMBINATIONS = 13
MIN_COMBINATIONS = len(PICTURE_FIELDS)
BATCH_TEMPERATURE = 0.8
BATCH_MAX_TOKENS = 2000

SECTION_SPLIT = re.compile(r"\n\n+")
LEADING_NUMBER = re.compile(r"^\d+[.)]\s*")
LEADING_MARKUP = re.compile(r"^[#*]+\s*")
LEADING_BULLET = re.compile(r"^[-•]\s*")
LABELLED_PARAGRAPH = re.compile(
    r"(?:^|\n)([^:\n]+):\s*([^\n]+(?:\n(?![^:\n]+:)[^\n]+)*)",
    re.MULTILINE,
)


@dataclass
class Combination:
    """A picture title with its summary."""
    title: str
    summary: str

    def as_text(self) -> str:
        return f"{self.title}\n{self.summary}"


@dataclass
class PictureBatchResult:
    outputs: dict[str, str]
    total_combinations: int
    selected_indices: list[int]


def _parse_sections(content: str) -> list[Combination]:
    """Blank-line separated sections: first line title, rest summary."""
    combinations = []
    for section in SECTION_SPLIT.split(content):
        clean = LEADING_NUMBER.sub("", section).strip()
        if not clean:
            continue

        lines = clean.split("\n")
        if len(lines) >= 2:
            title = LEADING_MARKUP.sub("", lines[0]).replace("*", "").strip()
            summary = LEADING_BULLET.sub("", " ".join(lines[1:])).strip()
        elif ":" in lines[0]:
            title, summary = (part.strip() for part in lines[0].split(":", 1))
        else:
            continue

        if title and summary:
            combinations.append(Combination(title=title, summary=summary))
    return combinations


def _parse_labelled(content: str, combinations: list[Combination]) -> None:
    """Fallback: "Label: paragraph" patterns, appended until the target."""
    seen_titles = {c.title for c in combinations}
    for match in LABELLED_PARAGRAPH.finditer(content):
        if len(combinations) >= TARGET_COMBINATIONS:
            break
        title = LEADING_NUMBER.sub("", match.group(1))
        title = re.sub(r"[#*]+", "", title).strip()
        summary = match.group(2).strip()
        if title and summary and title not in seen_titles:
            combinations.append(Combination(title=title, summary=summary))
            seen_titles.add(title)


def parse_combinations(content: str) -> list[Combination]:
    """Recover title/summary combinations from a free-text response.

    Sections are tried first; the labelled-paragraph scan only runs when
    fewer than the target number were found.
    """
    combinations = _parse_sections(content)
    if len(combinations) < TARGET_COMBINATIONS:
        logger.debug(f"Section parsing found {len(combinations)} combinations, trying labelled fallback")
        _parse_labelled(content, combinations)
    return combinations


def select_combinations(
    combinations: list[Combination],
    rng: random.Random | None = None,
) -> PictureBatchResult:
    """Pick four distinct combinations for the picture fields.

    Only the first ``TARGET_COMBINATIONS`` candidates are eligible. Titles are
    title-cased.

    Raises:
        CombinationParseError: fewer than four combinations available
    """
    if len(combinations) < MIN_COMBINATIONS:
        raise CombinationParseError(
            f"Only found {len(combinations)} combinations. Need at least {MIN_COMBINATIONS}. "
            "Response may not be in expected format."
        )

    rng = rng or random.Random()
    pool_size = min(len(combinations), TARGET_COMBINATIONS)
    indices = rng.sample(range(pool_size), len(PICTURE_FIELDS))

    outputs = {}
    for field_id, index in zip(PICTURE_FIELDS, indices):
        lines = combinations[index].as_text().split("\n")
        lines[0] = title_case(lines[0])
        outputs[field_id] = "\n".join(lines)

    return PictureBatchResult(
        outputs=outputs,
        total_combinations=len(combinations),
        selected_indices=indices,
    )


class PictureBatchGenerator:
    """Generates all four picture captions from the shared picture prompt."""

    def __init__(self, llm: LLMClient, rng: random.Random | None = None):
        self.llm = llm
        self.rng = rng

    async def generate_all(
        self,
        keyword: str,
        flow: str,
        prompt: str,
        example: str | None = None,
    ) -> PictureBatchResult:
        text = substitute_keyword(prompt, keyword)
        if example:
            text += f"\n\nExample format:\n{substitute_keyword(example, keyword)}"

        system = PICTURE_BATCH_SYSTEM_PROMPT.format(keyword=keyword, count=TARGET_COMBINATIONS)

        logger.info(f"Generating picture batch for '{keyword}' ({flow})")
        content = await self.llm.complete(
            system,
            text,
            temperature=BATCH_TEMPERATURE,
            max_tokens=BATCH_MAX_TOKENS,
        )

        combinations = parse_combinations(content)
        logger.info(f"Parsed {len(combinations)} combinations from response")

        return select_combinations(combinations, self.rng)
