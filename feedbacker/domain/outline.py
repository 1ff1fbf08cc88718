from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from .topic_blocks import TopicBlock, decode_topic_block, encode_topic_block

logger = logging.getLogger(__name__)

MAX_TOPICS = 12
MAX_SUBTOPICS = 6
MAX_LINE_LENGTH = 120
SHORT_LINE_CHARS = 25
SHORT_LINE_WORDS = 4
HEADER_MIN_WORDS = 3

_BULLET_RE = re.compile(r"^[-*•—]\s*")
_ENUM_RE = re.compile(r"^\d+[.)]\s*")
_TOPIC_LABEL_RE = re.compile(r"^Topic:\s*", re.IGNORECASE)
_TRAILING_PUNCT_RE = re.compile(r"[.,;:]$")
_FENCE_RE = re.compile(r"^```[A-Za-z0-9_-]*[ \t]*\n?|\n?```[ \t]*$")

HEADER_VOCABULARY = frozenset(
    {
        "introduction",
        "conclusion",
        "overview",
        "summary",
        "background",
        "methodology",
        "methods",
        "results",
        "discussion",
        "references",
        "appendix",
        "agenda",
        "objectives",
        "goals",
        "takeaways",
        "questions",
        "q&a",
        "new",
        "fresh",
        "update",
        "demo",
        "example",
        "case study",
    }
)


class LineKind(str, Enum):
    """How a normalised outline line is placed."""

    TITLE = "title"
    SUBTOPIC_INDENTED = "subtopic_indented"
    SUBTOPIC_BULLET = "subtopic_bullet"
    SUBTOPIC_ADJACENT_SHORT = "subtopic_adjacent_short"

    @property
    def is_subtopic(self) -> bool:
        return self is not LineKind.TITLE


@dataclass(frozen=True)
class LineShape:
    """Surface features of one non-blank outline line."""

    text: str
    has_block: bool
    indented: bool = False
    bullet: bool = False
    after_blank: bool = True
    ends_with_colon: bool = False

    @property
    def word_count(self) -> int:
        return len(self.text.split())

    @property
    def short(self) -> bool:
        return len(self.text) <= SHORT_LINE_CHARS and self.word_count <= SHORT_LINE_WORDS


@dataclass
class _Draft:
    title: str
    subtopics: List[str] = field(default_factory=list)

    def add(self, text: str) -> bool:
        if len(self.subtopics) >= MAX_SUBTOPICS:
            return False
        lowered = text.lower()
        if any(s.lower() == lowered for s in self.subtopics):
            return False
        self.subtopics.append(text)
        return True


def normalize_outline_line(line: str) -> str:
    """Strip one leading marker (bullet, enumerator, ``Topic:``) and trailing punctuation."""
    text = line.strip()
    text = _BULLET_RE.sub("", text, count=1)
    text = _ENUM_RE.sub("", text, count=1)
    text = _TOPIC_LABEL_RE.sub("", text, count=1)
    text = text.strip()
    text = _TRAILING_PUNCT_RE.sub("", text)
    return text.strip()


def looks_like_header(text: str, *, ends_with_colon: bool = False) -> bool:
    stripped = text.strip()
    if stripped.lower() in HEADER_VOCABULARY:
        return True
    if len(stripped.split()) >= HEADER_MIN_WORDS:
        return True
    return ends_with_colon or stripped.endswith(":")


def classify_line(shape: LineShape) -> LineKind:
    """Decide whether a line opens a new topic or attaches to the current one.

    Indentation and bullets always attach. A short line directly under the
    previous one (no blank in between) attaches unless it reads like a
    standalone header.
    """
    if not shape.has_block:
        return LineKind.TITLE
    if shape.indented:
        return LineKind.SUBTOPIC_INDENTED
    if shape.bullet:
        return LineKind.SUBTOPIC_BULLET
    if (
        not shape.after_blank
        and shape.short
        and not looks_like_header(shape.text, ends_with_colon=shape.ends_with_colon)
    ):
        return LineKind.SUBTOPIC_ADJACENT_SHORT
    return LineKind.TITLE


def strip_code_fences(text: Any) -> str:
    """Remove a Markdown code fence wrapped around model output."""
    if not isinstance(text, str):
        return ""
    return _FENCE_RE.sub("", text.strip()).strip()


def _collect(outline: Any) -> List[_Draft]:
    if not outline or not isinstance(outline, str):
        return []
    text = outline.replace("\r\n", "\n").replace("\r", "\n")
    drafts: List[_Draft] = []
    current: Optional[_Draft] = None
    last_blank = True
    discarded = 0

    for raw in text.split("\n"):
        trimmed = raw.strip()
        if not trimmed:
            last_blank = True
            continue

        normalized = normalize_outline_line(trimmed)
        if not normalized or len(normalized) > MAX_LINE_LENGTH:
            discarded += 1
            last_blank = False
            continue

        shape = LineShape(
            text=normalized,
            has_block=current is not None,
            indented=raw.startswith("  ") or raw.startswith("\t"),
            bullet=_BULLET_RE.match(trimmed) is not None,
            after_blank=last_blank,
            ends_with_colon=trimmed.endswith(":"),
        )
        kind = classify_line(shape)
        if kind.is_subtopic and current is not None:
            current.add(normalized)
        else:
            current = _Draft(normalized)
            drafts.append(current)
        last_blank = False

    if discarded:
        logger.debug("outline: discarded %d empty or over-length lines", discarded)
    return drafts


def parse_outline(outline: Any) -> List[str]:
    """Turn free-form outline text into at most MAX_TOPICS persisted topic strings."""
    seen: set[str] = set()
    encoded: List[str] = []
    for draft in _collect(outline):
        key = draft.title.lower()
        if key in seen:
            continue
        seen.add(key)
        encoded.append(encode_topic_block(draft.title, draft.subtopics))
        if len(encoded) >= MAX_TOPICS:
            break
    logger.debug("outline: parsed %d topics", len(encoded))
    return encoded


def parse_outline_blocks(outline: Any) -> List[TopicBlock]:
    return [decode_topic_block(b) for b in parse_outline(outline)]
