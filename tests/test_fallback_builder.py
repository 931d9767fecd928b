# SPDX-License-Identifier: Apache-2.0
"""Tests for the local fallback summary builder."""

from __future__ import annotations

import pytest

from year_review.core.classification import BUCKET_SPECS, Bucket
from year_review.core.models import YearSummary
from year_review.core.questions import QUESTIONS
from year_review.core.text_utils import SENTENCE_ENDINGS
from year_review.fallback.builder import (
    FallbackSummaryGenerator,
    build_analysis,
    build_card,
    build_fallback,
    collect_slots,
    slot_value,
)
from year_review.fallback.templates import (
    CLOSINGS,
    FALLBACK_ANIMAL,
    GENERIC_CARDS,
    GENERIC_KEYWORD,
    GENERIC_TAGS,
)


def assert_within_bounds(summary: YearSummary) -> None:
    for bucket, card in zip(Bucket, summary.cards):
        spec = BUCKET_SPECS[bucket]
        assert spec.min_len <= len(card.content) <= spec.max_len, (bucket, len(card.content))
        assert card.content[-1] in SENTENCE_ENDINGS


class TestBuildFallback:
    """Tests for build_fallback."""

    def test_four_cards_in_bucket_order(self, sample_answers: dict[int, str]) -> None:
        """Test card count, styles and keywords."""
        summary = build_fallback(sample_answers)

        assert len(summary.cards) == 4
        assert [c.style for c in summary.cards] == ["ticket", "paper", "note", "polaroid"]
        assert [c.keyword for c in summary.cards] == ["GROWTH", "EMOTIONS", "TASTES", "FUTURE"]

    def test_content_within_bounds(self, sample_answers: dict[int, str]) -> None:
        """Test every card respects its length bounds."""
        assert_within_bounds(build_fallback(sample_answers))

    def test_uses_answers(self, sample_answers: dict[int, str]) -> None:
        """Test concrete answers appear in the cards."""
        summary = build_fallback(sample_answers)

        assert "东京" in summary.cards[0].content
        assert "百年孤独" in summary.cards[2].content

    def test_empty_answers(self) -> None:
        """Test the all-generic summary."""
        summary = build_fallback({})

        assert [c.title for c in summary.cards] == [GENERIC_CARDS[b][0] for b in Bucket]
        assert summary.visual_tags == list(GENERIC_TAGS)
        assert summary.keyword == GENERIC_KEYWORD
        assert summary.animal == FALLBACK_ANIMAL
        assert "时光" in summary.poem
        assert_within_bounds(summary)

    def test_details_drive_tags_and_keyword(self) -> None:
        """Test tags and keyword come from answer details."""
        summary = build_fallback({5: "Tokyo", 17: "Yesterday", 25: "Dune"})

        assert summary.visual_tags == ["Tokyo", "Yesterday", "Dune"]
        assert summary.keyword == "TOKYO"
        assert summary.poem.startswith("Tokyo")

    def test_unpunctuated_answers_drive_tags(self) -> None:
        """Test long unpunctuated answers still replace the generic tags."""
        answers = {
            5: "和好朋友一起去了东京和京都旅行看樱花",
            8: "完成了第一个半程马拉松并且拿到了奖牌",
        }

        summary = build_fallback(answers)

        assert summary.visual_tags == ["和好朋友一起去了东京和京都旅行看", "完成了第一个半程马拉松并且拿到了"]
        assert summary.keyword == "和好朋友一起去了东京和京都旅行看"
        assert summary.keyword != GENERIC_KEYWORD

    def test_deterministic(self, sample_answers: dict[int, str]) -> None:
        """Test identical input gives identical output."""
        assert build_fallback(sample_answers) == build_fallback(dict(sample_answers))

    def test_long_answers(self) -> None:
        """Test very long answers still fit the bounds."""
        answers = {q.id: "这是一个非常非常长的回答" * 20 for q in QUESTIONS}
        assert_within_bounds(build_fallback(answers))

    def test_skipped_answers_ignored(self) -> None:
        """Test skip markers count as unanswered."""
        summary = build_fallback({q.id: "Skipped" for q in QUESTIONS})
        assert summary.visual_tags == list(GENERIC_TAGS)

    def test_analysis_mentions_titles(self, sample_answers: dict[int, str]) -> None:
        """Test the analysis covers every card title."""
        summary = build_fallback(sample_answers)
        assert all(f"「{card.title}」" in summary.analysis for card in summary.cards)

    def test_generator_class(self, sample_answers: dict[int, str]) -> None:
        """Test the class and the helper agree."""
        generator = FallbackSummaryGenerator()
        assert generator.build(sample_answers, QUESTIONS) == build_fallback(sample_answers)


class TestCardHelpers:
    """Tests for slot and card helpers."""

    def test_slot_value_strips_wrappers(self) -> None:
        """Test title brackets and trailing punctuation are removed."""
        assert slot_value("《百年孤独》。") == "百年孤独"

    def test_collect_slots_first_answer_wins(self) -> None:
        """Test slots fill once per name."""
        q5 = QUESTIONS[4]
        slots, unslotted = collect_slots([(q5, "东京"), (q5, "大阪")])

        assert slots == {"destination": "东京"}
        assert unslotted == []

    def test_build_card_generic(self) -> None:
        """Test a bucket without answers gets its generic card."""
        card = build_card(Bucket.FUTURE, [])

        assert card.title == GENERIC_CARDS[Bucket.FUTURE][0]
        assert card.style == "polaroid"

    @pytest.mark.parametrize("bucket", list(Bucket))
    def test_closings_fit_gap(self, bucket: Bucket) -> None:
        """Test each closing fits between the bounds of its bucket."""
        spec = BUCKET_SPECS[bucket]
        assert all(len(c) <= spec.max_len - spec.min_len for c in CLOSINGS[bucket])

    def test_build_analysis(self) -> None:
        """Test analysis uses the first sentence of each card."""
        cards = build_fallback({}).cards
        analysis = build_analysis(cards)

        assert cards[0].content.split("。")[0] in analysis
        assert cards[0].content not in analysis
