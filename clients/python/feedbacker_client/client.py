from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import httpx
from pydantic import BaseModel


class TopicBlock(BaseModel):
    title: str
    subtopics: List[str] = []


class OutlineResult(BaseModel):
    topics: List[str]
    blocks: List[TopicBlock]


class SuggestionGroup(BaseModel):
    label: str
    count: int
    normalized: str


class AggregateResult(BaseModel):
    groups: List[SuggestionGroup]
    raw_suggestions: List[str]


class FeedbackParts(BaseModel):
    suggested_topics_raw: Optional[str] = None
    freeform_text: Optional[str] = None


class TopicInterest(BaseModel):
    topic: str
    title: str
    more: int
    less: int
    net: int


class FeedbackerClient:
    def __init__(
        self,
        base_url: str,
        bearer_token: str | None = None,
        timeout: int = 30,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.bearer_token = bearer_token
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "FeedbackerClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def _headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        if extra:
            headers.update(extra)
        if self.bearer_token:
            headers["Authorization"] = f"Bearer {self.bearer_token}"
        return headers

    async def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        resp = await self._client.post(path, json=payload, headers=self._headers())
        resp.raise_for_status()
        return resp.json()

    async def encode_topic(self, title: str, subtopics: Sequence[str] = ()) -> str:
        data = await self._post("/v1/topics/encode", {"title": title, "subtopics": list(subtopics)})
        return data["block"]

    async def decode_topic(self, block: str) -> TopicBlock:
        return TopicBlock(**await self._post("/v1/topics/decode", {"block": block}))

    async def normalize_topics(self, blocks: Sequence[str]) -> List[str]:
        data = await self._post("/v1/topics/normalize", {"blocks": list(blocks)})
        return data["blocks"]

    async def parse_outline(self, outline: str, strip_fences: bool = True) -> OutlineResult:
        data = await self._post(
            "/v1/outline/parse", {"outline": outline, "strip_fences": strip_fences}
        )
        return OutlineResult(**data)

    async def extract_suggestions(self, text: str | None) -> List[str]:
        data = await self._post("/v1/suggestions/extract", {"text": text})
        return data["suggestions"]

    async def group_suggestions(self, items: Sequence[str]) -> List[SuggestionGroup]:
        data = await self._post("/v1/suggestions/group", {"items": list(items)})
        return [SuggestionGroup(**g) for g in data["groups"]]

    async def aggregate(self, free_texts: Iterable[str | None]) -> AggregateResult:
        payload = {"responses": [{"free_form_text": t} for t in free_texts]}
        return AggregateResult(**await self._post("/v1/suggestions/aggregate", payload))

    async def serialize_feedback(
        self, suggested_topics_raw: str | None, freeform_text: str | None
    ) -> Optional[str]:
        data = await self._post(
            "/v1/feedback/serialize",
            {"suggested_topics_raw": suggested_topics_raw, "freeform_text": freeform_text},
        )
        return data["stored"]

    async def parse_feedback(self, stored: str | None) -> FeedbackParts:
        return FeedbackParts(**await self._post("/v1/feedback/parse", {"stored": stored}))

    async def tally_interest(
        self, topics: Sequence[str], selections: Iterable[Tuple[int | str, str]]
    ) -> List[TopicInterest]:
        payload = {
            "topics": list(topics),
            "selections": [{"topic": t, "selection": s} for t, s in selections],
        }
        data = await self._post("/v1/interest/tally", payload)
        return [TopicInterest(**row) for row in data["topics"]]
