from __future__ import annotations

from fastapi import APIRouter

from ..models import (
    FeedbackParts,
    InterestRequest,
    InterestResponse,
    StoredFeedback,
    TopicInterestOut,
)
from ...domain.interest import tally_interest
from ...domain.mixed_content import parse_feedback, serialize_feedback

router = APIRouter()


@router.post("/feedback/serialize", response_model=StoredFeedback)
async def serialize(body: FeedbackParts) -> StoredFeedback:
    return StoredFeedback(
        stored=serialize_feedback(body.suggested_topics_raw, body.freeform_text)
    )


@router.post("/feedback/parse", response_model=FeedbackParts)
async def parse(body: StoredFeedback) -> FeedbackParts:
    parsed = parse_feedback(body.stored)
    return FeedbackParts(
        suggested_topics_raw=parsed.suggested_topics_raw,
        freeform_text=parsed.freeform_text,
    )


@router.post("/interest/tally", response_model=InterestResponse)
async def interest(body: InterestRequest) -> InterestResponse:
    rows = tally_interest(body.topics, [(s.topic, s.selection) for s in body.selections])
    return InterestResponse(
        topics=[
            TopicInterestOut(topic=r.topic, title=r.title, more=r.more, less=r.less, net=r.net)
            for r in rows
        ]
    )
