"""Prompt inspection and field listing routes."""

from fastapi import APIRouter, Query

from app.api.deps import Prompts, Tokens, valid_access_token
from app.api.schemas import ApiModel
from app.errors import AuthError, NotFoundError, ValidationError
from app.services.field_registry import FLOWS, field_label, fields_for_flow
from app.services.token_manager import TokenData

router = APIRouter()


class PromptsRequest(ApiModel):
    access_token: str | None = None
    token_data: TokenData | None = None


class FieldPromptRequest(PromptsRequest):
    flow: str


class PromptDataResponse(ApiModel):
    field_id: str
    field_title: str
    prompt: str
    example: str
    is_subtitles_only: bool


class PromptsResponse(ApiModel):
    prompts: list[PromptDataResponse]
    dropped_titles: list[str]


class FieldPromptResponse(ApiModel):
    field_id: str
    flow: str
    prompt: str
    example: str | None = None


class FieldInfo(ApiModel):
    id: str
    label: str


class FieldsResponse(ApiModel):
    flow: str
    fields: list[FieldInfo]


async def _require_token(request: PromptsRequest, tokens: Tokens) -> str:
    access_token = await valid_access_token(request.access_token, request.token_data, tokens)
    if not access_token:
        raise AuthError("Access token is required")
    return access_token


@router.post("/prompts", response_model=PromptsResponse)
async def list_prompts(
    request: PromptsRequest,
    resolver: Prompts,
    tokens: Tokens,
) -> PromptsResponse:
    """Load every prompt of the Prompts tab."""
    access_token = await _require_token(request, tokens)
    result = await resolver.load_prompts(access_token)
    if result.error:
        raise NotFoundError(result.error)

    return PromptsResponse(
        prompts=[
            PromptDataResponse(
                field_id=p.field_id,
                field_title=p.field_title,
                prompt=p.prompt,
                example=p.example,
                is_subtitles_only=p.is_subtitles_only,
            )
            for p in result.prompts
        ],
        dropped_titles=result.dropped_titles,
    )


@router.post("/prompts/{field_id}", response_model=FieldPromptResponse)
async def get_field_prompt(
    field_id: str,
    request: FieldPromptRequest,
    resolver: Prompts,
    tokens: Tokens,
) -> FieldPromptResponse:
    """Prompt used for a field in a given flow."""
    if request.flow not in FLOWS:
        raise ValidationError('Invalid flow. Must be "with subtopics" or "no subtopics"')

    access_token = await _require_token(request, tokens)
    result = await resolver.prompt_for_field(field_id, request.flow, access_token)
    if not result.found:
        raise NotFoundError(result.error or f'No prompt found for field "{field_id}"')

    return FieldPromptResponse(
        field_id=field_id,
        flow=request.flow,
        prompt=result.prompt,
        example=result.example,
    )


@router.get("/fields", response_model=FieldsResponse)
async def list_fields(flow: str = Query(...)) -> FieldsResponse:
    """Ordered fields of a flow with their display labels."""
    if flow not in FLOWS:
        raise ValidationError('Invalid flow. Must be "with subtopics" or "no subtopics"')
    return FieldsResponse(
        flow=flow,
        fields=[FieldInfo(id=f, label=field_label(f)) for f in fields_for_flow(flow)],
    )
