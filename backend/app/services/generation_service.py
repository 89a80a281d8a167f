"""Prompt resolution + generation for single fields, picture batches and bulk runs."""

import logging
from dataclasses import dataclass, field

from app.errors import AppError, NotFoundError
from app.services.content_generator import ContentGenerator
from app.services.field_registry import (
    PICTURE_FIELDS,
    PICTURES_SENTINEL,
    fields_for_flow,
    text_fields_for_flow,
)
from app.services.picture_batch import PictureBatchGenerator, PictureBatchResult
from app.services.prompt_resolver import PromptResolver

logger = logging.getLogger(__name__)


@dataclass
class BulkGenerationResult:
    """Per-field outcome of a bulk run, in generation order."""
    flow: str
    field_count: int
    results: dict[str, str] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def success_count(self) -> int:
        return len(self.results)


class GenerationService:
    """Resolves prompts from the sheet and hands them to the generators."""

    def __init__(
        self,
        resolver: PromptResolver,
        content_generator: ContentGenerator,
        picture_generator: PictureBatchGenerator,
    ):
        self.resolver = resolver
        self.content_generator = content_generator
        self.picture_generator = picture_generator

    async def generate_field(
        self,
        field_id: str,
        keyword: str,
        flow: str,
        access_token: str,
        competitor_urls: list[str] | None = None,
        previous_pictures: dict[str, str] | None = None,
        subtopics: list[str] | None = None,
    ) -> str:
        """Generate one field.

        Raises:
            NotFoundError: no usable prompt for the field
        """
        prompt = await self.resolver.resolve(field_id, access_token)
        if not prompt.found or not prompt.prompt:
            raise NotFoundError(
                prompt.error
                or f'No prompt found for field "{field_id}". '
                "Please ensure this field has a prompt in the Prompts tab."
            )

        return await self.content_generator.generate(
            field_id,
            keyword,
            flow,
            prompt.prompt,
            example=prompt.example,
            competitor_urls=competitor_urls,
            previous_pictures=previous_pictures,
            subtopics=subtopics,
        )

    async def generate_pictures(
        self,
        keyword: str,
        flow: str,
        access_token: str,
    ) -> PictureBatchResult:
        """Generate pic1..pic4 from the shared picture prompt in one call."""
        prompt = await self.resolver.resolve(PICTURES_SENTINEL, access_token)
        if not prompt.found or not prompt.prompt:
            raise NotFoundError(
                prompt.error
                or "No prompt found for pictures. "
                "Please ensure this field has a prompt in the Prompts tab."
            )

        return await self.picture_generator.generate_all(
            keyword,
            flow,
            prompt.prompt,
            example=prompt.example,
        )

    async def generate_all(
        self,
        keyword: str,
        flow: str,
        access_token: str,
        competitor_urls: list[str] | None = None,
        subtopics: list[str] | None = None,
    ) -> BulkGenerationResult:
        """Generate every field of a flow.

        Text fields run one after another in flow order, then the pictures
        run as a single batch task. A failing task is recorded and the run
        continues.
        """
        result = BulkGenerationResult(flow=flow, field_count=len(fields_for_flow(flow)))

        for field_id in text_fields_for_flow(flow):
            try:
                result.results[field_id] = await self.generate_field(
                    field_id,
                    keyword,
                    flow,
                    access_token,
                    competitor_urls=competitor_urls,
                    subtopics=subtopics,
                )
            except AppError as e:
                logger.warning(f"Bulk generation of {field_id} failed: {e}")
                result.errors[field_id] = e.public_message
            except Exception as e:
                logger.exception(f"Bulk generation of {field_id} failed unexpectedly")
                result.errors[field_id] = str(e) or "Generation failed"

        try:
            pictures = await self.generate_pictures(keyword, flow, access_token)
            result.results.update(pictures.outputs)
        except AppError as e:
            logger.warning(f"Bulk picture generation failed: {e}")
            for field_id in PICTURE_FIELDS:
                result.errors[field_id] = e.public_message
        except Exception as e:
            logger.exception("Bulk picture generation failed unexpectedly")
            for field_id in PICTURE_FIELDS:
                result.errors[field_id] = str(e) or "Generation failed"

        order = fields_for_flow(flow)
        result.results = {f: result.results[f] for f in order if f in result.results}
        result.errors = {f: result.errors[f] for f in order if f in result.errors}

        logger.info(
            f"Bulk generation for '{keyword}' ({flow}): "
            f"{result.success_count}/{result.field_count} fields"
        )
        return result
