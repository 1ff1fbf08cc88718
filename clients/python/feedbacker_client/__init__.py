from .client import (
    AggregateResult,
    FeedbackerClient,
    FeedbackParts,
    OutlineResult,
    SuggestionGroup,
    TopicBlock,
    TopicInterest,
)

__all__ = [
    "FeedbackerClient",
    "TopicBlock",
    "OutlineResult",
    "SuggestionGroup",
    "AggregateResult",
    "FeedbackParts",
    "TopicInterest",
]
