from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

SUGGESTED_START = "[SUGGESTED_TOPICS]"
SUGGESTED_END = "[/SUGGESTED_TOPICS]"

_BLOCK_RE = re.compile(r"\[SUGGESTED_TOPICS\]([\s\S]*?)\[/SUGGESTED_TOPICS\]", re.IGNORECASE)


@dataclass(frozen=True)
class ParsedFeedback:
    suggested_topics_raw: Optional[str] = None
    freeform_text: Optional[str] = None


def _clean(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def serialize_feedback(suggested_raw: Any, freeform: Any) -> Optional[str]:
    """Pack structured suggestions and free text into one stored field.

    Returns ``None`` when there is nothing to store.
    """
    suggestions = _clean(suggested_raw)
    text = _clean(freeform)
    if not suggestions and not text:
        return None
    if not suggestions:
        return text
    block = f"{SUGGESTED_START}\n{suggestions}\n{SUGGESTED_END}"
    if not text:
        return block
    return f"{block}\n\n{text}"


def parse_feedback(stored: Any) -> ParsedFeedback:
    raw = _clean(stored)
    if not raw:
        return ParsedFeedback()
    match = _BLOCK_RE.search(raw)
    if match is None:
        return ParsedFeedback(freeform_text=raw)
    inner = match.group(1).strip() or None
    rest = _BLOCK_RE.sub("", raw, count=1).strip() or None
    return ParsedFeedback(suggested_topics_raw=inner, freeform_text=rest)
