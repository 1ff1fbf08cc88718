from __future__ import annotations

from typing import List

import pytest
from hypothesis import given
from hypothesis import settings as hsettings
from hypothesis import strategies as st

from feedbacker.domain.topic_blocks import (
    TopicBlock,
    decode_topic_block,
    encode_topic_block,
    normalize_topic_blocks,
)


def test_encode_title_only() -> None:
    assert encode_topic_block("  Pricing  ", []) == "Pricing"


def test_encode_with_subtopics() -> None:
    block = encode_topic_block("Pricing", [" tiers ", "", "discounts"])
    assert block == "Pricing\n- tiers\n- discounts"


def test_encode_empty_title_means_no_block() -> None:
    assert encode_topic_block("   ", ["orphan"]) == ""


def test_decode_strips_any_bullet() -> None:
    block = "Roadmap\n- q1\n• q2\n* q3\n— q4\n\n  plain  "
    assert decode_topic_block(block) == TopicBlock("Roadmap", ["q1", "q2", "q3", "q4", "plain"])


def test_decode_garbage_never_raises() -> None:
    for junk in (None, "", "   \n  ", 42, ["a"], {"title": "x"}):
        assert decode_topic_block(junk) == TopicBlock("", [])


def test_normalize_dedupes_and_reencodes() -> None:
    blocks = [
        "Market Context\n* why now",
        "",
        "market context\n- ignored",
        "   \n",
        "Analysis",
        None,
    ]
    assert normalize_topic_blocks(blocks) == ["Market Context\n- why now", "Analysis"]


_line = st.text(
    alphabet=st.characters(blacklist_categories=("Cs", "Cc", "Zl", "Zp")), min_size=1, max_size=30
).filter(lambda s: s.strip() and s == s.strip())


@hsettings(max_examples=200, deadline=None)
@given(_line, st.lists(_line, max_size=6, unique_by=lambda s: s.lower()))
def test_round_trip(title: str, subtopics: List[str]) -> None:
    decoded = decode_topic_block(encode_topic_block(title, subtopics))
    assert decoded.title == title
    assert decoded.subtopics == subtopics


@pytest.mark.parametrize(
    "title,subtopics,expected",
    [
        (None, ["a"], ""),
        (5, ["a"], ""),
        ("T", [None, "a"], "T\n- a"),
        ("T", None, "T"),
        ("T", 7, "T"),
        ("T", [3, " "], "T"),
    ],
)
def test_encode_tolerates_garbage(title, subtopics, expected) -> None:
    assert encode_topic_block(title, subtopics) == expected
