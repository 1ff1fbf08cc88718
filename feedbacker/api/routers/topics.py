from __future__ import annotations

from fastapi import APIRouter

from ..metrics import inc
from ..models import (
    BlockList,
    EncodedBlock,
    OutlineRequest,
    OutlineResponse,
    TopicBlockIn,
    TopicBlockOut,
)
from ...domain.outline import parse_outline, strip_code_fences
from ...domain.topic_blocks import (
    decode_topic_block,
    encode_topic_block,
    normalize_topic_blocks,
)

router = APIRouter()


@router.post("/topics/encode", response_model=EncodedBlock, summary="Encode a topic block")
async def encode(body: TopicBlockIn) -> EncodedBlock:
    return EncodedBlock(block=encode_topic_block(body.title, body.subtopics))


@router.post("/topics/decode", response_model=TopicBlockOut, summary="Decode a topic block")
async def decode(body: EncodedBlock) -> TopicBlockOut:
    decoded = decode_topic_block(body.block)
    return TopicBlockOut(title=decoded.title, subtopics=decoded.subtopics)


@router.post("/topics/normalize", response_model=BlockList, summary="Dedupe and re-encode blocks")
async def normalize(body: BlockList) -> BlockList:
    return BlockList(blocks=normalize_topic_blocks(body.blocks))


@router.post(
    "/outline/parse",
    response_model=OutlineResponse,
    summary="Parse an outline into topic blocks",
    description="Splits outline text into at most 12 topics with up to 6 sub-points each.",
)
async def outline_parse(body: OutlineRequest) -> OutlineResponse:
    text = strip_code_fences(body.outline) if body.strip_fences else body.outline
    topics = parse_outline(text)
    inc("outlines_parsed")
    inc("topics_emitted", len(topics))
    blocks = []
    for t in topics:
        decoded = decode_topic_block(t)
        blocks.append(TopicBlockOut(title=decoded.title, subtopics=decoded.subtopics))
    return OutlineResponse(topics=topics, blocks=blocks)
