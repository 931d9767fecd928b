# SPDX-License-Identifier: Apache-2.0
"""Review pipeline implementation."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Literal

from year_review.core.models import Answers, Question, YearSummary
from year_review.core.questions import QUESTIONS
from year_review.fallback.builder import FallbackSummaryGenerator
from year_review.llm.answer_extractor import (
    DEFAULT_MIME_TYPE,
    DocumentAnswerExtractor,
    extract_text_document,
)
from year_review.llm.base import ChatClient
from year_review.llm.client import LLMConfig, create_chat_client
from year_review.llm.inspiration import HINT_PLACEHOLDERS, InspirationGenerator
from year_review.llm.summary_generator import RemoteSummaryGenerator
from year_review.pipeline.errors import ExtractionError, GenerationError
from year_review.pipeline.progress import ProgressCallback

logger = logging.getLogger(__name__)

SummarySource = Literal["remote", "fallback"]


@dataclass
class SummaryResult:
    """Review pipeline result."""

    summary: YearSummary
    source: SummarySource
    answers: Answers | None = None

    @property
    def is_fallback(self) -> bool:
        return self.source == "fallback"


class ReviewPipeline:
    """Year-in-review pipeline.

    Wires remote generation, document extraction and hints to the local
    fallback: a failed remote summary is replaced by a template summary, so
    ``summarize`` always yields a complete YearSummary.
    """

    def __init__(
        self,
        client: ChatClient | None = None,
        config: LLMConfig | None = None,
        questions: Sequence[Question] = QUESTIONS,
        progress_callback: ProgressCallback | None = None,
        offline: bool = False,
    ) -> None:
        """Initialize ReviewPipeline.

        Args:
            client: Chat-completion client. Created from ``config`` if None.
            config: LLM configuration. Defaults to ``LLMConfig.from_env()``.
            questions: Questions in catalogue order.
            progress_callback: Optional stage progress receiver.
            offline: Never contact the API; always use the local fallback.
        """
        self._config = config or LLMConfig.from_env()
        self._client = None if offline else client or create_chat_client(self._config)
        self._questions = questions
        self._progress_callback = progress_callback
        self._fallback = FallbackSummaryGenerator()

    @property
    def questions(self) -> Sequence[Question]:
        return self._questions

    async def summarize(self, answers: Mapping[int, str]) -> SummaryResult:
        """Build the year summary, falling back to templates on failure.

        Args:
            answers: Answer store (question id -> answer).

        Returns:
            SummaryResult with the summary and where it came from.

        Raises:
            ConfigurationError: On missing or rejected credentials.
        """
        if self._client is None:
            return self._stage_fallback(answers)

        generator = RemoteSummaryGenerator(self._client, self._config)
        self._notify("generate", 0, 1)
        try:
            summary = await generator.generate_summary(answers, self._questions)
        except GenerationError as e:
            logger.warning("Remote summary unavailable, using fallback: %s", e)
            return self._stage_fallback(answers)

        self._notify("generate", 1, 1)
        self._notify("done", 1, 1, "remote")
        return SummaryResult(summary=summary, source="remote", answers=dict(answers))

    async def extract(self, file_base64: str, mime_type: str | None = None) -> Answers:
        """Extract answers from a base64-encoded document.

        Plain-text documents are parsed locally, so this also works offline.

        Raises:
            ExtractionError: If no answers can be recovered.
            ConfigurationError: On missing or rejected credentials.
        """
        self._notify("extract", 0, 1)
        if self._client is None:
            mime = (mime_type or DEFAULT_MIME_TYPE).lower()
            if not mime.startswith("text/"):
                raise ExtractionError(f"Cannot read {mime} documents offline")
            answers = extract_text_document(file_base64)
        else:
            extractor = DocumentAnswerExtractor(self._client, self._config, self._questions)
            answers = await extractor.extract_answers(file_base64, mime_type)

        self._notify("extract", 1, 1, f"{len(answers)} answers")
        return answers

    async def summarize_document(
        self,
        file_base64: str,
        mime_type: str | None = None,
    ) -> SummaryResult:
        """Extract answers from a document and summarize them.

        Raises:
            ExtractionError: If the document yields no answers.
            ConfigurationError: On missing or rejected credentials.
        """
        answers = await self.extract(file_base64, mime_type)
        if not answers:
            raise ExtractionError("Document contained no answers")
        return await self.summarize(answers)

    async def hint(self, question_id: int) -> str:
        """Return an inspiration hint for one question.

        Raises:
            KeyError: If ``question_id`` is not in the question list.
        """
        question = self._find_question(question_id)
        if self._client is None:
            return HINT_PLACEHOLDERS[question.id % len(HINT_PLACEHOLDERS)]
        return await InspirationGenerator(self._client, self._config).get_hint(question)

    async def close(self) -> None:
        """Release the chat client, if it holds a connection."""
        close = getattr(self._client, "close", None)
        if close is not None:
            await close()

    def _stage_fallback(self, answers: Mapping[int, str]) -> SummaryResult:
        summary = self._fallback.build(answers, self._questions)
        self._notify("fallback", 1, 1)
        self._notify("done", 1, 1, "fallback")
        return SummaryResult(summary=summary, source="fallback", answers=dict(answers))

    def _find_question(self, question_id: int) -> Question:
        for question in self._questions:
            if question.id == question_id:
                return question
        raise KeyError(f"Unknown question id: {question_id}")

    def _notify(self, stage: str, current: int, total: int, message: str = "") -> None:
        if self._progress_callback is None:
            return
        self._progress_callback(stage, current, total, message)

