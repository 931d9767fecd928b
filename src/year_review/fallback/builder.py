# SPDX-License-Identifier: Apache-2.0
"""Deterministic local YearSummary builder.

Used whenever remote generation fails. The builder never raises and always
returns four cards whose content length lies within the bucket bounds, so
its output is interchangeable with a validated remote summary.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from year_review.core.classification import (
    BUCKET_SPECS,
    Bucket,
    BucketSpec,
    extract_unique_details,
    find_slot,
    group_answers,
)
from year_review.core.models import Question, SummaryCard, YearSummary
from year_review.core.questions import QUESTIONS
from year_review.core.text_utils import clip_clause, first_sentence, fit_length
from year_review.fallback.templates import (
    ANALYSIS_INTRO,
    ANALYSIS_OUTRO,
    CLOSINGS,
    FALLBACK_ANIMAL,
    GENERIC_CARDS,
    GENERIC_KEYWORD,
    GENERIC_POEM_TOKEN,
    GENERIC_TAGS,
    OPENINGS,
    POEM_TEMPLATE,
    SLOT_SENTENCES,
    TITLE_POOLS,
    UNSLOTTED_SENTENCE,
)

logger = logging.getLogger(__name__)

# Longest answer fragment interpolated into a sentence
MAX_SLOT_CHARS = 24

# Opening plus at most three follow-up sentences
MAX_SEGMENTS = 4

# Number of detail tokens used as visual tags
VISUAL_TAG_COUNT = 5

_WRAPPERS = "《》「」『』“”\"'‘’"


def slot_value(answer: str) -> str:
    """Reduce an answer to a short fragment suitable for a template."""
    return clip_clause(answer.strip().strip(_WRAPPERS), MAX_SLOT_CHARS).strip(_WRAPPERS)


def _stable_index(seed: str, size: int) -> int:
    """Deterministic index in ``range(size)`` derived from ``seed``."""
    return sum(map(ord, seed)) % size


def collect_slots(pairs: Sequence[tuple[Question, str]]) -> tuple[dict[str, str], list[str]]:
    """Fill named slots from a bucket's answered questions.

    Args:
        pairs: (question, answer) pairs of one bucket.

    Returns:
        Tuple of (slot name -> fragment, sentences for answers that fill
        no slot). The first answer for a slot wins.
    """
    slots: dict[str, str] = {}
    unslotted: list[str] = []
    for question, answer in pairs:
        value = slot_value(answer)
        if not value:
            continue
        slot = find_slot(question)
        if slot is None:
            unslotted.append(UNSLOTTED_SENTENCE.format(category=question.category, value=value))
        elif slot not in slots:
            slots[slot] = value
    return slots, unslotted


def choose_title(bucket: Bucket, slots: Mapping[str, str]) -> str:
    """Pick a title, narrowing the pool by the first matching filled slot."""
    seed = "".join(slots.values())
    for slot, titles in TITLE_POOLS[bucket]:
        if slot is None or slot in slots:
            return titles[_stable_index(seed, len(titles))]
    raise ValueError(f"No default title pool for {bucket}")  # pragma: no cover


def compose_content(
    bucket: Bucket,
    slots: Mapping[str, str],
    unslotted: Sequence[str],
    spec: BucketSpec,
) -> str:
    """Compose card content from filled slots and fit it to the bounds.

    An opening sentence consumes the slots it names; follow-up sentences
    are added while they keep the content within ``spec.max_len``.
    Closing sentences pad the result up to ``spec.min_len``.
    """
    segments: list[str] = []
    used: set[str] = set()
    for required, template in OPENINGS[bucket]:
        if all(slot in slots for slot in required):
            segments.append(template.format(**{slot: slots[slot] for slot in required}))
            used.update(required)
            break

    length = sum(len(s) for s in segments)
    followups = [
        template.format(value=slots[slot])
        for slot, template in SLOT_SENTENCES[bucket]
        if slot in slots and slot not in used
    ]
    for sentence in [*followups, *unslotted]:
        if len(segments) >= MAX_SEGMENTS:
            break
        if length + len(sentence) > spec.max_len:
            continue
        segments.append(sentence)
        length += len(sentence)

    closings = CLOSINGS[bucket]
    start = _stable_index("".join(slots.values()), len(closings))
    rotated = closings[start:] + closings[:start]
    return fit_length("".join(segments), spec.min_len, spec.max_len, rotated)


def build_card(
    bucket: Bucket,
    pairs: Sequence[tuple[Question, str]],
    spec: BucketSpec | None = None,
) -> SummaryCard:
    """Build one bucket's card.

    Args:
        bucket: Bucket to build.
        pairs: Answered (question, answer) pairs of the bucket.
        spec: Bucket properties. Defaults to BUCKET_SPECS[bucket].

    Returns:
        SummaryCard with the bucket's keyword and style.
    """
    spec = spec or BUCKET_SPECS[bucket]
    slots, unslotted = collect_slots(pairs)

    if not slots and not unslotted:
        title, content = GENERIC_CARDS[bucket]
        content = fit_length(content, spec.min_len, spec.max_len, CLOSINGS[bucket])
    else:
        title = choose_title(bucket, slots)
        content = compose_content(bucket, slots, unslotted, spec)

    return SummaryCard(title=title, content=content, keyword=spec.keyword, style=spec.style)


def build_analysis(cards: Sequence[SummaryCard]) -> str:
    """Summarize the cards: their titles and opening sentences."""
    chapters = "".join(f"「{card.title}」：{first_sentence(card.content)}" for card in cards)
    return f"{ANALYSIS_INTRO}{chapters}{ANALYSIS_OUTRO}"


class FallbackSummaryGenerator:
    """Build a YearSummary locally from templates.

    Output is fully determined by the answers and questions; no network
    access is involved.
    """

    def __init__(self, bucket_specs: Mapping[Bucket, BucketSpec] | None = None) -> None:
        """Initialize FallbackSummaryGenerator.

        Args:
            bucket_specs: Per-bucket keyword, style and length bounds.
        """
        self._specs = dict(bucket_specs or BUCKET_SPECS)

    def build(
        self,
        answers: Mapping[int, str],
        questions: Sequence[Question] = QUESTIONS,
    ) -> YearSummary:
        """Build the fallback summary.

        Args:
            answers: Answer store (may be empty).
            questions: Questions in catalogue order.

        Returns:
            Complete YearSummary with four cards.
        """
        grouped = group_answers(answers, questions)
        cards = [build_card(bucket, grouped[bucket], self._specs[bucket]) for bucket in Bucket]

        details = extract_unique_details(dict(answers), questions)
        logger.debug(
            "Built fallback summary from %d answers, %d details",
            sum(len(pairs) for pairs in grouped.values()),
            len(details),
        )

        return YearSummary(
            cards=cards,
            visual_tags=details[:VISUAL_TAG_COUNT] or list(GENERIC_TAGS),
            poem=POEM_TEMPLATE.format(token=details[0] if details else GENERIC_POEM_TOKEN),
            analysis=build_analysis(cards),
            keyword=details[0].upper() if details else GENERIC_KEYWORD,
            animal=FALLBACK_ANIMAL,
        )


def build_fallback(
    answers: Mapping[int, str],
    questions: Sequence[Question] = QUESTIONS,
) -> YearSummary:
    """Build a fallback summary with the default bucket properties."""
    return FallbackSummaryGenerator().build(answers, questions)
