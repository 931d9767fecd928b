# SPDX-License-Identifier: Apache-2.0
"""Markdown output writer for year summaries."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from year_review.core.models import Question, SummaryCard, YearSummary
from year_review.core.questions import QUESTIONS

# Style name to the label shown under each card heading
STYLE_LABELS: dict[str, str] = {
    "ticket": "车票",
    "paper": "信纸",
    "note": "便签",
    "polaroid": "拍立得",
}


@dataclass
class MarkdownConfig:
    """Markdown output configuration."""

    title: str = "我的年度回顾"
    include_metadata: bool = True
    include_transcript: bool = False
    heading_offset: int = 0  # 0-4
    source_filename: Optional[str] = None
    # "remote" or "fallback"; written to the frontmatter when set
    source: Optional[str] = None


class MarkdownWriter:
    """Markdown output writer."""

    def __init__(self, config: Optional[MarkdownConfig] = None) -> None:
        """Initialize MarkdownWriter.

        Args:
            config: Markdown output configuration.
        """
        self._config = config or MarkdownConfig()

    def write(
        self,
        summary: YearSummary,
        answers: Mapping[int, str] | None = None,
        questions: Sequence[Question] = QUESTIONS,
    ) -> str:
        """Generate Markdown string from a summary.

        Args:
            summary: Year summary to render.
            answers: Answer store, rendered when include_transcript is set.
            questions: Questions in catalogue order (for the transcript).

        Returns:
            Markdown string.
        """
        parts: list[str] = []

        if self._config.include_metadata:
            parts.append(self._generate_metadata(summary))

        parts.append(f"{self._heading(1)} {self._config.title}\n")
        parts.append(f"**{summary.keyword}** · {summary.animal}\n")

        for card in summary.cards:
            parts.append(self._card_to_markdown(card))

        if summary.visual_tags:
            tags = " ".join(f"`{tag}`" for tag in summary.visual_tags)
            parts.append(f"{self._heading(2)} 关键词\n\n{tags}\n")

        parts.append(f"{self._heading(2)} 诗\n\n{self._quote(summary.poem)}\n")
        parts.append(f"{self._heading(2)} 解读\n\n{summary.analysis}\n")

        if self._config.include_transcript and answers:
            parts.append(self._transcript_to_markdown(answers, questions))

        return "\n".join(parts)

    def write_to_file(
        self,
        summary: YearSummary,
        output_path: Path,
        answers: Mapping[int, str] | None = None,
        questions: Sequence[Question] = QUESTIONS,
    ) -> None:
        """Write Markdown to file.

        Args:
            summary: Year summary to render.
            output_path: Output file path.
            answers: Answer store, rendered when include_transcript is set.
            questions: Questions in catalogue order.
        """
        markdown = self.write(summary, answers, questions)
        output_path.write_text(markdown, encoding="utf-8")

    def _generate_metadata(self, summary: YearSummary) -> str:
        """Generate YAML frontmatter metadata.

        Returns:
            YAML frontmatter string.
        """
        lines: list[str] = ["---"]

        if self._config.source_filename:
            lines.append(f"title: {self._config.source_filename}")
        lines.append(f"keyword: {summary.keyword}")
        lines.append(f"animal: {summary.animal}")
        if self._config.source:
            lines.append(f"source: {self._config.source}")

        lines.append(f"generated_at: {datetime.now().isoformat()}")
        lines.append("---")

        return "\n".join(lines) + "\n"

    def _card_to_markdown(self, card: SummaryCard) -> str:
        label = STYLE_LABELS.get(card.style, card.style)
        return (
            f"{self._heading(2)} {card.title}\n\n"
            f"*{card.keyword} · {label}*\n\n"
            f"{card.content}\n"
        )

    def _transcript_to_markdown(
        self,
        answers: Mapping[int, str],
        questions: Sequence[Question],
    ) -> str:
        lines = [f"{self._heading(2)} 问答记录\n"]
        for question in questions:
            answer = (answers.get(question.id) or "").strip()
            if not answer:
                continue
            lines.append(f"**{question.id}. {question.text}**\n")
            lines.append(f"{answer}\n")
        return "\n".join(lines)

    def _heading(self, level: int) -> str:
        """Heading marker with the configured offset, capped at level 6."""
        return "#" * min(level + self._config.heading_offset, 6)

    @staticmethod
    def _quote(text: str) -> str:
        return "\n".join(f"> {line}" if line else ">" for line in text.splitlines())
