# SPDX-License-Identifier: Apache-2.0
"""Tests for core data models."""

from __future__ import annotations

import json

import pytest

from conftest import make_summary_payload
from year_review.core.models import CARD_STYLES, Question, SummaryCard, YearSummary


class TestQuestion:
    """Tests for Question dataclass."""

    def test_frozen(self) -> None:
        """Test questions cannot be modified."""
        question = Question(1, 1, "问题", "探索")
        with pytest.raises(AttributeError):
            question.text = "changed"  # type: ignore[misc]


class TestSummaryCard:
    """Tests for SummaryCard serialization."""

    def test_to_dict(self) -> None:
        """Test dictionary form uses plain field names."""
        card = SummaryCard(title="标题", content="内容", keyword="GROWTH", style="ticket")
        assert card.to_dict() == {
            "title": "标题",
            "content": "内容",
            "keyword": "GROWTH",
            "style": "ticket",
        }

    def test_from_dict_unknown_style(self) -> None:
        """Test unknown style is rejected."""
        with pytest.raises(ValueError, match="style"):
            SummaryCard.from_dict(
                {"title": "t", "content": "c", "keyword": "k", "style": "poster"}
            )

    def test_from_dict_missing_field(self) -> None:
        """Test missing field raises KeyError."""
        with pytest.raises(KeyError):
            SummaryCard.from_dict({"title": "t", "content": "c", "style": "note"})

    def test_styles(self) -> None:
        """Test the closed style set."""
        assert set(CARD_STYLES) == {"ticket", "paper", "polaroid", "note"}


class TestYearSummary:
    """Tests for YearSummary serialization."""

    def test_from_dict(self) -> None:
        """Test parsing the wire format."""
        summary = YearSummary.from_dict(make_summary_payload())

        assert len(summary.cards) == 4
        assert summary.cards[0].style == "ticket"
        assert summary.visual_tags == ["coffee", "camera", "cat"]
        assert summary.keyword == "REBIRTH"
        assert summary.animal == "Fox"

    def test_to_dict_uses_wire_names(self) -> None:
        """Test visual tags serialize as visualTags."""
        data = YearSummary.from_dict(make_summary_payload()).to_dict()

        assert "visualTags" in data
        assert "visual_tags" not in data
        assert data == make_summary_payload()

    def test_wrong_card_count(self) -> None:
        """Test card count other than four is rejected."""
        payload = make_summary_payload()
        payload["cards"] = payload["cards"][:3]
        with pytest.raises(ValueError, match="4 cards"):
            YearSummary.from_dict(payload)

    def test_missing_field(self) -> None:
        """Test missing top-level field raises KeyError."""
        payload = make_summary_payload()
        del payload["poem"]
        with pytest.raises(KeyError):
            YearSummary.from_dict(payload)

    def test_to_json_keeps_chinese(self) -> None:
        """Test JSON output is not ASCII-escaped."""
        text = YearSummary.from_dict(make_summary_payload()).to_json()

        assert "步履不停" in text
        assert json.loads(text)["animal"] == "Fox"

    def test_from_json_rejects_array(self) -> None:
        """Test non-object JSON is rejected."""
        with pytest.raises(ValueError):
            YearSummary.from_json("[]")
