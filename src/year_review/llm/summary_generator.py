# SPDX-License-Identifier: Apache-2.0
"""Remote year-summary generation with structured-output validation."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from year_review.core.classification import (
    BUCKET_SPECS,
    Bucket,
    extract_unique_details,
    group_answers,
)
from year_review.core.models import Question, YearSummary
from year_review.llm.base import ChatClient, SchemaViolation, TransportError
from year_review.llm.client import LLMConfig
from year_review.llm.schemas import YearSummarySchema, parse_structured
from year_review.pipeline.errors import GenerationError

logger = logging.getLogger(__name__)

SKIPPED_MARKER = "Skipped"

# Number of unique details included in the prompt
PROMPT_DETAIL_LIMIT = 15


def build_transcript(answers: Mapping[int, str], questions: Sequence[Question]) -> str:
    """Render every question in order with its answer or the skip marker."""
    lines = ["User's Year in Review:"]
    for question in questions:
        answer = (answers.get(question.id) or "").strip() or SKIPPED_MARKER
        lines.append(f"[Category: {question.category}] Q: {question.text}\nA: {answer}\n")
    return "\n".join(lines)


def build_categorized_context(
    answers: Mapping[int, str],
    questions: Sequence[Question],
) -> str:
    """Render answered questions grouped by bucket.

    Buckets without answers are listed as "(no answers)" so the model knows
    to write that card from the overall tone.
    """
    grouped = group_answers(answers, questions)
    sections: list[str] = []
    for bucket in Bucket:
        spec = BUCKET_SPECS[bucket]
        header = f"## {bucket.value} ({spec.label}) - {spec.focus}"
        pairs = grouped[bucket]
        if not pairs:
            sections.append(f"{header}\n(no answers)")
            continue
        body = "\n".join(f"- {q.text} -> {answer}" for q, answer in pairs)
        sections.append(f"{header}\n{body}")
    return "\n\n".join(sections)


def build_content_rules() -> str:
    """Render the per-card content rules, including length bounds."""
    lines = [
        "- Never copy a full sentence from the answers verbatim; rewrite it.",
        "- Every card MUST mention at least two concrete details from the "
        "unique-detail list (names, places, titles, objects).",
        "- Do not use generic filler such as '这一年你经历了很多' or "
        "'未来可期' without concrete details.",
        "- Write in Chinese, address the user as '你'.",
    ]
    for index, bucket in enumerate(Bucket, 1):
        spec = BUCKET_SPECS[bucket]
        lines.append(
            f"- Card {index} ({bucket.value}): content between "
            f"{spec.min_len} and {spec.max_len} Chinese characters."
        )
    return "\n".join(lines)


class RemoteSummaryGenerator:
    """Generate a YearSummary through a chat-completion API.

    The request carries a strict JSON Schema (``YearSummarySchema``); the
    response is validated against the same schema before it is accepted.
    Any failure other than a configuration problem surfaces as
    ``GenerationError`` so the caller can switch to the local fallback.
    """

    SYSTEM_PROMPT = (
        "You are a soulful writer and concise JSON generator. "
        "Respond ONLY with JSON per schema."
    )

    SUMMARY_PROMPT = """You are a soulful writer and artist creating a scrapbooking kit for the user's year-end review.

Your task:
1. Create 4 distinct, beautifully written summary cards, in this order:
   journey (places, events), emotions (gains, losses), tastes (books, music,
   small joys), future (their future self).
2. Identify 5-8 concrete nouns from the answers and return them as short
   English keywords in "visualTags" (e.g. "coffee", "camera", "cat").
3. Write "poem": a short, abstract 4-line poem about their year (Chinese).
4. Write "analysis": a psychological analysis of their year (Chinese, ~100 words).
5. Choose "animal": a spirit animal, and "keyword": one main English keyword
   for the whole year (e.g. REBIRTH).

Each card has "title" (a creative 4-character Chinese title, e.g. 步履不停),
"content", "keyword" (one English word, e.g. BLOOM) and "style" (strictly one
of 'ticket', 'paper', 'polaroid', 'note').

Content rules:
{rules}

Answers grouped by theme:
{context}

Unique details (use them):
{details}

Transcript:
{transcript}"""

    def __init__(self, client: ChatClient, config: LLMConfig | None = None) -> None:
        """Initialize RemoteSummaryGenerator.

        Args:
            client: Chat-completion client.
            config: LLM configuration (temperatures).
        """
        self._client = client
        self._config = config or LLMConfig()

    def build_prompt(
        self,
        answers: Mapping[int, str],
        questions: Sequence[Question],
    ) -> str:
        """Build the user payload for the summary request."""
        details = extract_unique_details(dict(answers), questions, PROMPT_DETAIL_LIMIT)
        return self.SUMMARY_PROMPT.format(
            rules=build_content_rules(),
            context=build_categorized_context(answers, questions),
            details=", ".join(details) if details else "(none)",
            transcript=build_transcript(answers, questions),
        )

    async def generate_summary(
        self,
        answers: Mapping[int, str],
        questions: Sequence[Question],
    ) -> YearSummary:
        """Generate a summary for the given answers.

        Args:
            answers: Answer store (question id -> answer).
            questions: Questions in catalogue order.

        Returns:
            Validated YearSummary.

        Raises:
            GenerationError: On API failure, empty response or invalid JSON.
            ConfigurationError: On missing or rejected credentials.
        """
        messages = [
            {"role": "system", "content": self.SYSTEM_PROMPT},
            {"role": "user", "content": self.build_prompt(answers, questions)},
        ]

        try:
            text = await self._client.complete(
                messages,
                temperature=self._config.summary_temperature,
                response_model=YearSummarySchema,
                schema_name="year_summary",
            )
            result = parse_structured(text, YearSummarySchema)
        except (TransportError, SchemaViolation) as e:
            logger.warning("Summary generation failed: %s", e)
            raise GenerationError(f"Summary generation failed: {e}", cause=e) from e

        logger.debug("Summary generated with %d visual tags", len(result.visualTags))
        return result.to_summary()
