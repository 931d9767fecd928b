# SPDX-License-Identifier: Apache-2.0
"""Structured-output schemas for model responses.

The pydantic models here serve twice: their JSON Schema is sent to the
chat-completion API as the ``response_format`` constraint, and the same
models validate the text that comes back.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from year_review.core.models import CARD_COUNT, Answers, SummaryCard, YearSummary
from year_review.core.questions import is_valid_question_id
from year_review.core.text_utils import strip_code_fences
from year_review.llm.base import SchemaViolation

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class CardSchema(BaseModel):
    """One card as returned by the model."""

    title: str
    content: str
    keyword: str
    style: Literal["ticket", "paper", "polaroid", "note"]


class YearSummarySchema(BaseModel):
    """Full year summary as returned by the model."""

    cards: list[CardSchema] = Field(min_length=CARD_COUNT, max_length=CARD_COUNT)
    visualTags: list[str]  # noqa: N815 - wire name
    poem: str
    analysis: str
    keyword: str
    animal: str

    def to_summary(self) -> YearSummary:
        """Convert to the domain model."""
        return YearSummary(
            cards=[
                SummaryCard(
                    title=card.title,
                    content=card.content,
                    keyword=card.keyword,
                    style=card.style,
                )
                for card in self.cards
            ],
            visual_tags=list(self.visualTags),
            poem=self.poem,
            analysis=self.analysis,
            keyword=self.keyword,
            animal=self.animal,
        )


class ExtractedAnswer(BaseModel):
    """One (question id, answer) pair recovered from a document."""

    id: int = Field(description="The Question ID (1-40)")
    answer: str = Field(description="The extracted answer text")

    @field_validator("answer", mode="before")
    @classmethod
    def _stringify_answer(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class AnswerExtractionSchema(BaseModel):
    """Answer list as returned by the model."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[ExtractedAnswer] = Field(alias="list")


def build_response_format(model: type[BaseModel], name: str) -> dict[str, Any]:
    """Build an OpenAI-style ``response_format`` from a pydantic model.

    Args:
        model: Response model.
        name: Schema name reported to the API.

    Returns:
        ``{"type": "json_schema", "json_schema": {...}}`` payload.
    """
    return {
        "type": "json_schema",
        "json_schema": {
            "name": name,
            "schema": model.model_json_schema(by_alias=True),
        },
    }


def parse_structured(text: str, model: type[ModelT]) -> ModelT:
    """Strip code fences and validate response text against a model.

    No field-level repair is attempted.

    Args:
        text: Raw response text.
        model: Expected response model.

    Returns:
        Validated model instance.

    Raises:
        SchemaViolation: If the text is empty, not JSON, or does not match.
    """
    json_text = strip_code_fences(text)
    if not json_text:
        raise SchemaViolation("Empty response from model")
    try:
        return model.model_validate_json(json_text)
    except ValidationError as e:
        raise SchemaViolation(
            f"Response does not match {model.__name__}: {e.error_count()} error(s)"
        ) from e


def parse_answer_list(text: str) -> Answers:
    """Parse an extraction response into an answer mapping.

    Malformed items (missing id or answer, empty answer, id outside 1-40)
    are dropped individually. Duplicate ids keep the last occurrence.

    Args:
        text: Raw response text.

    Returns:
        Answer mapping (possibly empty).

    Raises:
        SchemaViolation: If the text is empty or not a JSON object.
    """
    json_text = strip_code_fences(text)
    if not json_text:
        raise SchemaViolation("Empty response from model")
    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as e:
        raise SchemaViolation(f"Response is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise SchemaViolation("Extraction response must be a JSON object")

    raw_items = data.get("list") or []
    if not isinstance(raw_items, list):
        raise SchemaViolation("Extraction response 'list' must be an array")

    answers: Answers = {}
    for raw in raw_items:
        try:
            item = ExtractedAnswer.model_validate(raw)
        except ValidationError:
            logger.debug("Dropping malformed extraction item: %r", raw)
            continue
        answer = item.answer.strip()
        if not answer or not is_valid_question_id(item.id):
            logger.debug("Dropping extraction item for id %s", item.id)
            continue
        answers[item.id] = answer
    return answers
