from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable, List

# Sub-point lines are written with this prefix; readers accept any of BULLET_CHARS.
BULLET_PREFIX = "- "
BULLET_CHARS = "-•*—"

_BULLET_RE = re.compile(r"^[-•*—]\s*")


@dataclass(frozen=True)
class TopicBlock:
    title: str
    subtopics: List[str] = field(default_factory=list)


def encode_topic_block(title: str, subtopics: Iterable[str]) -> str:
    """Flatten a title and its sub-points into the persisted topic string.

    Line 1 is the title, every following line is ``"- " + subtopic``. An
    empty title yields ``""`` which callers treat as "no block".
    """
    trimmed = title.strip() if isinstance(title, str) else ""
    if not trimmed:
        return ""
    if isinstance(subtopics, Iterable) and not isinstance(subtopics, (str, bytes)):
        subs = list(subtopics)
    else:
        subs = []
    if not subs:
        return trimmed
    lines = [trimmed]
    for s in subs:
        s = s.strip() if isinstance(s, str) else ""
        if s:
            lines.append(BULLET_PREFIX + s)
    return "\n".join(lines)


def decode_topic_block(block: Any) -> TopicBlock:
    """Parse a persisted topic string; garbage input gives an empty block."""
    if not block or not isinstance(block, str):
        return TopicBlock("", [])
    lines = [ln.strip() for ln in block.split("\n")]
    lines = [ln for ln in lines if ln]
    if not lines:
        return TopicBlock("", [])
    subtopics: List[str] = []
    for line in lines[1:]:
        stripped = _BULLET_RE.sub("", line, count=1).strip()
        if stripped:
            subtopics.append(stripped)
    return TopicBlock(lines[0], subtopics)


def normalize_topic_blocks(blocks: Iterable[Any]) -> List[str]:
    """Drop untitled blocks, dedupe by title (case-insensitive) and re-encode."""
    seen: set[str] = set()
    out: List[str] = []
    for raw in blocks or []:
        decoded = decode_topic_block(raw)
        if not decoded.title:
            continue
        key = decoded.title.lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(encode_topic_block(decoded.title, decoded.subtopics))
    return out
