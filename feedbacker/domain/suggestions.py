from __future__ import annotations

import logging
import re
import unicodedata
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping

from .mixed_content import parse_feedback

logger = logging.getLogger(__name__)

MAX_UNSTRUCTURED_LENGTH = 120

_BULLET_RE = re.compile(r"^[-•]\s+")
_LABEL_RE = re.compile(r"^(topic|suggestion|cover|idea)\s*[:-]\s*", re.IGNORECASE)
_EDGE_PUNCT_RE = re.compile(r"^[\s•.,;:!?()\"'-]+|[\s•.,;:!?()\"'-]+$")
_SPACE_RE = re.compile(r"\s+")


@dataclass
class SuggestionGroup:
    label: str
    count: int
    normalized: str


@dataclass
class SuggestionSummary:
    groups: List[SuggestionGroup] = field(default_factory=list)
    raw_suggestions: List[str] = field(default_factory=list)


def _lines(text: Any) -> List[str]:
    if not isinstance(text, str):
        return []
    return [ln.strip() for ln in text.strip().split("\n") if ln.strip()]


def normalize_suggestion(text: Any) -> str:
    """Grouping key: lowercase, edge punctuation removed, whitespace collapsed."""
    out = text.lower() if isinstance(text, str) else ""
    out = _EDGE_PUNCT_RE.sub("", out)
    out = _SPACE_RE.sub(" ", out)
    return out.strip()


def extract_suggestions(text: Any) -> List[str]:
    """Mine candidate suggestions from a participant's free text.

    Bulleted and labelled lines (``Topic: ...``, ``Idea - ...``) win; any
    other line is narrative and ignored. With nothing structured, a short
    answer counts as one suggestion and a long paragraph counts as none.
    """
    raw = text.strip() if isinstance(text, str) else ""
    if not raw:
        return []
    extracted: List[str] = []
    for line in _lines(raw):
        if _BULLET_RE.match(line):
            cleaned = _BULLET_RE.sub("", line, count=1).strip()
        elif _LABEL_RE.match(line):
            cleaned = _LABEL_RE.sub("", line, count=1).strip()
        else:
            continue
        if cleaned:
            extracted.append(cleaned)
    if extracted:
        return extracted
    if len(raw) <= MAX_UNSTRUCTURED_LENGTH:
        return [raw]
    return []


def extract_from_suggested_block(text: Any) -> List[str]:
    """Top-level lines of a structured suggestions block; bullet sub-points are skipped."""
    return [line for line in _lines(text) if not _BULLET_RE.match(line)]


def _collation_key(label: str) -> str:
    # accent-insensitive: "Éclair" sorts with "eclair", not after "z"
    decomposed = unicodedata.normalize("NFKD", label)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


def _sort_key(group: SuggestionGroup) -> tuple:
    return (-group.count, _collation_key(group.label), group.label)


def group_suggestions(items: Iterable[str]) -> List[SuggestionGroup]:
    groups: Dict[str, SuggestionGroup] = {}
    for item in items or []:
        if not isinstance(item, str):
            continue
        key = normalize_suggestion(item)
        if not key:
            continue
        existing = groups.get(key)
        if existing is not None:
            existing.count += 1
            continue
        groups[key] = SuggestionGroup(label=item.strip(), count=1, normalized=key)
    return sorted(groups.values(), key=_sort_key)


def _free_text(response: Any) -> Any:
    if isinstance(response, str) or response is None:
        return response
    if isinstance(response, Mapping):
        if "free_form_text" in response:
            return response.get("free_form_text")
        return response.get("freeFormText")
    return getattr(response, "free_form_text", None)


def build_groups_from_responses(responses: Iterable[Any]) -> SuggestionSummary:
    """Collect suggestions across every response and group them."""
    raw_suggestions: List[str] = []
    for response in responses or []:
        parsed = parse_feedback(_free_text(response))
        if parsed.suggested_topics_raw:
            raw_suggestions.extend(extract_from_suggested_block(parsed.suggested_topics_raw))
        else:
            raw_suggestions.extend(extract_suggestions(parsed.freeform_text))
    groups = group_suggestions(raw_suggestions)
    logger.debug(
        "suggestions: %d candidates in %d groups", len(raw_suggestions), len(groups)
    )
    return SuggestionSummary(groups=groups, raw_suggestions=raw_suggestions)
