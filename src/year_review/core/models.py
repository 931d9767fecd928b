# SPDX-License-Identifier: Apache-2.0
"""Data models for questions, answers and year summaries."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Literal

# Question id -> free-text answer. Empty string means skipped.
Answers = dict[int, str]

CardStyle = Literal["ticket", "paper", "polaroid", "note"]

CARD_STYLES: tuple[str, ...] = ("ticket", "paper", "polaroid", "note")

# Number of cards in every YearSummary
CARD_COUNT = 4


@dataclass(frozen=True)
class Question:
    """A single questionnaire entry.

    Attributes:
        id: Question id (1-40), unique within the catalogue.
        part: Questionnaire part (1-4).
        text: Prompt text shown to the user.
        category: Short category label (e.g. "足迹").
    """

    id: int
    part: int
    text: str
    category: str


@dataclass
class SummaryCard:
    """One themed memory card.

    Attributes:
        title: Short, evocative title.
        content: One paragraph of narrative text.
        keyword: Single English keyword (e.g. "GROWTH").
        style: Visual style of the card.
    """

    title: str
    content: str
    keyword: str
    style: CardStyle

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {
            "title": self.title,
            "content": self.content,
            "keyword": self.keyword,
            "style": self.style,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SummaryCard:
        """Create from dictionary.

        Args:
            data: Dictionary with card fields.

        Returns:
            SummaryCard instance.

        Raises:
            KeyError: If a required field is missing.
            ValueError: If style is not one of CARD_STYLES.
        """
        style = str(data["style"])
        if style not in CARD_STYLES:
            raise ValueError(f"Unknown card style: {style!r}")
        return cls(
            title=str(data["title"]),
            content=str(data["content"]),
            keyword=str(data["keyword"]),
            style=style,  # type: ignore[arg-type]
        )


@dataclass
class YearSummary:
    """Complete structured output of the summary pipeline.

    Produced atomically by either the remote generator or the fallback
    builder. The wire format uses camelCase ``visualTags`` to match the
    structured-output schema sent to the model.

    Attributes:
        cards: Exactly four themed cards.
        visual_tags: Short keyword strings used for stickers.
        poem: Short multi-line verse.
        analysis: Prose analysis of the year.
        keyword: Single theme word for the year.
        animal: Spirit animal name.
    """

    cards: list[SummaryCard]
    visual_tags: list[str] = field(default_factory=list)
    poem: str = ""
    analysis: str = ""
    keyword: str = ""
    animal: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        Returns:
            Dictionary using the wire field names.
        """
        return {
            "cards": [card.to_dict() for card in self.cards],
            "visualTags": list(self.visual_tags),
            "poem": self.poem,
            "analysis": self.analysis,
            "keyword": self.keyword,
            "animal": self.animal,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> YearSummary:
        """Create from dictionary using the wire field names.

        Args:
            data: Dictionary with summary fields.

        Returns:
            YearSummary instance.

        Raises:
            KeyError: If a required field is missing.
            ValueError: If the card count or a card style is invalid.
        """
        cards = [SummaryCard.from_dict(item) for item in data["cards"]]
        if len(cards) != CARD_COUNT:
            raise ValueError(f"Expected {CARD_COUNT} cards but got {len(cards)}")
        return cls(
            cards=cards,
            visual_tags=[str(tag) for tag in data["visualTags"]],
            poem=str(data["poem"]),
            analysis=str(data["analysis"]),
            keyword=str(data["keyword"]),
            animal=str(data["animal"]),
        )

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize to a JSON string (non-ASCII kept readable)."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    @classmethod
    def from_json(cls, text: str) -> YearSummary:
        """Deserialize from a JSON string.

        Args:
            text: JSON text in the wire format.

        Returns:
            YearSummary instance.
        """
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("YearSummary JSON must be an object")
        return cls.from_dict(data)
