"""API models for the feedbacker service."""

from .errors import APIError, ErrorCode, ErrorResponse, error_response
from .schemas import (
    AggregateRequest,
    AggregateResponse,
    BlockList,
    EncodedBlock,
    FeedbackParts,
    GroupRequest,
    GroupResponse,
    InterestRequest,
    InterestResponse,
    OutlineRequest,
    OutlineResponse,
    ResponseIn,
    SelectionIn,
    StoredFeedback,
    SuggestionGroupOut,
    SuggestionList,
    TextIn,
    TopicBlockIn,
    TopicBlockOut,
    TopicInterestOut,
    VersionInfo,
)

__all__ = [
    "TopicBlockIn",
    "TopicBlockOut",
    "EncodedBlock",
    "BlockList",
    "OutlineRequest",
    "OutlineResponse",
    "TextIn",
    "SuggestionList",
    "GroupRequest",
    "SuggestionGroupOut",
    "GroupResponse",
    "ResponseIn",
    "AggregateRequest",
    "AggregateResponse",
    "FeedbackParts",
    "StoredFeedback",
    "SelectionIn",
    "InterestRequest",
    "TopicInterestOut",
    "InterestResponse",
    "VersionInfo",
    "APIError",
    "ErrorCode",
    "ErrorResponse",
    "error_response",
]
