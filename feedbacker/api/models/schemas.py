from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field, field_validator


class TopicBlockIn(BaseModel):
    title: str
    subtopics: List[str] = Field(default_factory=list)

    model_config = {
        "extra": "forbid",
        "json_schema_extra": {
            "examples": [{"title": "Market context", "subtopics": ["why now", "why later"]}]
        },
    }


class TopicBlockOut(BaseModel):
    title: str
    subtopics: List[str]


class EncodedBlock(BaseModel):
    block: str

    model_config = {
        "json_schema_extra": {"examples": [{"block": "Market context\n- why now\n- why later"}]}
    }


class BlockList(BaseModel):
    blocks: List[str]

    model_config = {"extra": "forbid"}


class OutlineRequest(BaseModel):
    outline: str
    strip_fences: bool = True

    model_config = {
        "extra": "forbid",
        "json_schema_extra": {
            "examples": [
                {"outline": "Market context\n  - why now\n  - why later\n\nAnalysis\n  - key drivers"}
            ]
        },
    }


class OutlineResponse(BaseModel):
    topics: List[str]
    blocks: List[TopicBlockOut]


class TextIn(BaseModel):
    text: str | None = None

    model_config = {"extra": "forbid"}


class SuggestionList(BaseModel):
    suggestions: List[str]


class GroupRequest(BaseModel):
    items: List[str]

    model_config = {"extra": "forbid"}


class SuggestionGroupOut(BaseModel):
    label: str
    count: int = Field(ge=1)
    normalized: str


class GroupResponse(BaseModel):
    groups: List[SuggestionGroupOut]


class ResponseIn(BaseModel):
    free_form_text: str | None = None

    model_config = {"extra": "ignore"}


class AggregateRequest(BaseModel):
    responses: List[ResponseIn]

    model_config = {
        "extra": "forbid",
        "json_schema_extra": {
            "examples": [
                {
                    "responses": [
                        {"free_form_text": "- Pricing strategy\n- Roadmap"},
                        {"free_form_text": "[SUGGESTED_TOPICS]\nPricing strategy\n[/SUGGESTED_TOPICS]"},
                    ]
                }
            ]
        },
    }


class AggregateResponse(BaseModel):
    groups: List[SuggestionGroupOut]
    raw_suggestions: List[str]


class FeedbackParts(BaseModel):
    suggested_topics_raw: str | None = None
    freeform_text: str | None = None


class StoredFeedback(BaseModel):
    stored: str | None = None


class SelectionIn(BaseModel):
    topic: int | str
    selection: str

    @field_validator("selection")
    @classmethod
    def _lower(cls, v: str) -> str:
        return v.strip().lower()


class InterestRequest(BaseModel):
    topics: List[str]
    selections: List[SelectionIn] = Field(default_factory=list)

    model_config = {"extra": "forbid"}


class TopicInterestOut(BaseModel):
    topic: str
    title: str
    more: int
    less: int
    net: int


class InterestResponse(BaseModel):
    topics: List[TopicInterestOut]


class VersionInfo(BaseModel):
    version: str
    service: str
    env: str
