# SPDX-License-Identifier: Apache-2.0
"""Core data models, question catalogue and classification."""

from .classification import (
    BUCKET_SPECS,
    QUESTION_TABLE,
    Bucket,
    BucketSpec,
    classify_question,
    extract_unique_details,
    find_slot,
    group_answers,
    is_skipped,
)
from .models import CARD_STYLES, Answers, Question, SummaryCard, YearSummary
from .questions import QUESTIONS, get_question, questions_in_part

__all__ = [
    "Answers",
    "BUCKET_SPECS",
    "Bucket",
    "BucketSpec",
    "CARD_STYLES",
    "QUESTIONS",
    "QUESTION_TABLE",
    "Question",
    "SummaryCard",
    "YearSummary",
    "classify_question",
    "extract_unique_details",
    "find_slot",
    "get_question",
    "group_answers",
    "is_skipped",
    "questions_in_part",
]
