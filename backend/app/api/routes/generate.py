"""Content generation routes."""

import logging

from fastapi import APIRouter

from app.api.deps import LLM, Generation, Tokens, valid_access_token
from app.api.schemas import ApiModel, FlowRequest
from app.errors import AuthError, ValidationError
from app.services.field_registry import WITH_SUBTOPICS, is_valid_field

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/generate")

AUTH_REQUIRED = "Authentication required. Please authenticate with Google to access prompts."


class GenerateFieldRequest(FlowRequest):
    competitor_urls: list[str] | None = None
    previous_pictures: dict[str, str] | None = None
    subtopics: list[str] | None = None


class GenerateAllRequest(FlowRequest):
    competitor_urls: list[str] | None = None
    subtopics: list[str] | None = None


class GenerateFieldResponse(ApiModel):
    ok: bool = True
    output: str
    field_id: str
    flow: str


class GeneratePicturesResponse(ApiModel):
    ok: bool = True
    outputs: dict[str, str]
    total_combinations: int
    selected_indices: list[int]


class GenerateAllResponse(ApiModel):
    ok: bool = True
    results: dict[str, str]
    errors: dict[str, str] | None = None
    flow: str
    field_count: int
    success_count: int


# Registered before /{field_id} so the literal paths win
@router.post("/pictures", response_model=GeneratePicturesResponse)
async def generate_pictures(
    request: FlowRequest,
    generation: Generation,
    llm: LLM,
    tokens: Tokens,
) -> GeneratePicturesResponse:
    """Generate all four picture captions in one model call."""
    llm.ensure_configured()
    access_token = await valid_access_token(request.access_token, request.token_data, tokens)
    if not access_token:
        raise AuthError(AUTH_REQUIRED)

    result = await generation.generate_pictures(request.keyword, request.flow, access_token)
    return GeneratePicturesResponse(
        outputs=result.outputs,
        total_combinations=result.total_combinations,
        selected_indices=result.selected_indices,
    )


@router.post("/all", response_model=GenerateAllResponse)
async def generate_all(
    request: GenerateAllRequest,
    generation: Generation,
    llm: LLM,
    tokens: Tokens,
) -> GenerateAllResponse:
    """Generate every field of the flow, capturing per-field failures."""
    llm.ensure_configured()
    access_token = await valid_access_token(request.access_token, request.token_data, tokens)
    if not access_token:
        raise AuthError(AUTH_REQUIRED)

    result = await generation.generate_all(
        request.keyword,
        request.flow,
        access_token,
        competitor_urls=request.competitor_urls,
        subtopics=request.subtopics,
    )
    return GenerateAllResponse(
        results=result.results,
        errors=result.errors or None,
        flow=result.flow,
        field_count=result.field_count,
        success_count=result.success_count,
    )


@router.post("/{field_id}", response_model=GenerateFieldResponse)
async def generate_field(
    field_id: str,
    request: GenerateFieldRequest,
    generation: Generation,
    llm: LLM,
    tokens: Tokens,
) -> GenerateFieldResponse:
    """Generate the content of a single field."""
    if not is_valid_field(field_id):
        raise ValidationError(f'Invalid field "{field_id}"')

    if field_id == "subtopics" and request.flow != WITH_SUBTOPICS:
        raise ValidationError(
            'Subtopics field is only available for "with subtopics" classification'
        )

    llm.ensure_configured()
    access_token = await valid_access_token(request.access_token, request.token_data, tokens)
    if not access_token:
        raise AuthError(AUTH_REQUIRED)

    output = await generation.generate_field(
        field_id,
        request.keyword,
        request.flow,
        access_token,
        competitor_urls=request.competitor_urls,
        previous_pictures=request.previous_pictures,
        subtopics=request.subtopics,
    )
    return GenerateFieldResponse(output=output, field_id=field_id, flow=request.flow)
