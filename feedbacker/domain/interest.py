from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence, Tuple

from .topic_blocks import decode_topic_block

SELECTIONS = ("more", "less")


@dataclass
class TopicInterest:
    topic: str
    title: str
    more: int = 0
    less: int = 0

    @property
    def net(self) -> int:
        return self.more - self.less


def _resolve(ref: Any, topics: Sequence[str], by_text: dict[str, int]) -> int | None:
    if isinstance(ref, bool):
        return None
    if isinstance(ref, int):
        return ref if 0 <= ref < len(topics) else None
    if isinstance(ref, str):
        return by_text.get(ref.strip())
    return None


def tally_interest(
    topics: Sequence[str], selections: Iterable[Tuple[Any, str]]
) -> List[TopicInterest]:
    """Count "more"/"less" votes per topic and rank by net interest.

    ``selections`` holds ``(topic, selection)`` pairs where ``topic`` is an
    index into ``topics`` or the persisted topic string itself. Votes for
    unknown topics or with any other selection value are ignored. Every topic
    is reported, ordered by net then "more" votes (both descending), keeping
    the original order on ties.
    """
    topics = [t if isinstance(t, str) else "" for t in topics or []]
    rows = [TopicInterest(topic=t, title=decode_topic_block(t).title) for t in topics]
    by_text: dict[str, int] = {}
    for i, t in enumerate(topics):
        by_text.setdefault(t.strip(), i)
    for item in selections or []:
        if not isinstance(item, (tuple, list)) or len(item) != 2:
            continue
        ref, selection = item
        idx = _resolve(ref, topics, by_text)
        if idx is None:
            continue
        choice = selection.strip().lower() if isinstance(selection, str) else ""
        if choice == "more":
            rows[idx].more += 1
        elif choice == "less":
            rows[idx].less += 1
    order = sorted(range(len(rows)), key=lambda i: (-rows[i].net, -rows[i].more, i))
    return [rows[i] for i in order]
