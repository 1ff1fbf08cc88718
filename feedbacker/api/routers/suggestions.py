from __future__ import annotations

from fastapi import APIRouter, Request

from ...settings import get_settings
from ..metrics import inc
from ..models import (
    AggregateRequest,
    AggregateResponse,
    ErrorCode,
    ErrorResponse,
    GroupRequest,
    GroupResponse,
    SuggestionGroupOut,
    SuggestionList,
    TextIn,
    error_response,
)
from ...domain.suggestions import (
    SuggestionGroup,
    build_groups_from_responses,
    extract_suggestions,
    group_suggestions,
)

router = APIRouter()


def _out(groups: list[SuggestionGroup]) -> list[SuggestionGroupOut]:
    return [
        SuggestionGroupOut(label=g.label, count=g.count, normalized=g.normalized)
        for g in groups
    ]


@router.post("/suggestions/extract", response_model=SuggestionList)
async def extract(body: TextIn) -> SuggestionList:
    found = extract_suggestions(body.text)
    inc("suggestions_extracted", len(found))
    return SuggestionList(suggestions=found)


@router.post("/suggestions/group", response_model=GroupResponse)
async def group(body: GroupRequest) -> GroupResponse:
    groups = group_suggestions(body.items)
    inc("suggestion_groups_built", len(groups))
    return GroupResponse(groups=_out(groups))


@router.post(
    "/suggestions/aggregate",
    response_model=AggregateResponse,
    summary="Group suggestions across participant responses",
    responses={413: {"model": ErrorResponse}},
)
async def aggregate(request: Request, body: AggregateRequest):
    limit = get_settings().MAX_RESPONSES_PER_REQUEST
    if len(body.responses) > limit:
        return error_response(
            ErrorCode.too_many_items,
            "Too many responses",
            413,
            details={"limit": limit, "received": len(body.responses)},
            request_id=getattr(request.state, "request_id", None),
        )
    summary = build_groups_from_responses(body.responses)
    inc("suggestions_extracted", len(summary.raw_suggestions))
    inc("suggestion_groups_built", len(summary.groups))
    return AggregateResponse(groups=_out(summary.groups), raw_suggestions=summary.raw_suggestions)
