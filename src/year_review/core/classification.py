# SPDX-License-Identifier: Apache-2.0
"""Thematic bucket classification and detail extraction.

Each answered question is assigned to one of four buckets (journey,
emotions, tastes, future). Catalogue questions are classified through the
static ``QUESTION_TABLE``; questions outside the table fall back to
category/text keyword rules. Every function here is pure.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from .models import Answers, CardStyle, Question


class Bucket(Enum):
    """Thematic bucket, in card order."""

    JOURNEY = "journey"
    EMOTIONS = "emotions"
    TASTES = "tastes"
    FUTURE = "future"


@dataclass(frozen=True)
class BucketSpec:
    """Static properties of a bucket's card.

    Attributes:
        bucket: The bucket described.
        label: Chinese label used in prompts.
        focus: What the card should be about (prompt text).
        keyword: Fixed English keyword of the fallback card.
        style: Fixed visual style of the fallback card.
        min_len: Minimum card content length (characters).
        max_len: Maximum card content length (characters).
    """

    bucket: Bucket
    label: str
    focus: str
    keyword: str
    style: CardStyle
    min_len: int
    max_len: int


BUCKET_SPECS: dict[Bucket, BucketSpec] = {
    Bucket.JOURNEY: BucketSpec(
        Bucket.JOURNEY, "旅程", "external journey: places, events, firsts",
        "GROWTH", "ticket", 100, 150,
    ),
    Bucket.EMOTIONS: BucketSpec(
        Bucket.EMOTIONS, "情绪", "internal emotions: gains, losses, people",
        "EMOTIONS", "paper", 120, 180,
    ),
    Bucket.TASTES: BucketSpec(
        Bucket.TASTES, "品味", "tastes: books, music, films, food, small joys",
        "TASTES", "note", 100, 150,
    ),
    Bucket.FUTURE: BucketSpec(
        Bucket.FUTURE, "未来", "future self: wishes, lessons, what comes next",
        "FUTURE", "polaroid", 120, 180,
    ),
}


class TableEntry(NamedTuple):
    """Bucket and slot assignment of a catalogue question."""

    bucket: Bucket
    slot: str


_J, _E, _T, _F = Bucket.JOURNEY, Bucket.EMOTIONS, Bucket.TASTES, Bucket.FUTURE

QUESTION_TABLE: dict[int, TableEntry] = {
    1: TableEntry(_J, "first_time"),
    2: TableEntry(_J, "promise"),
    3: TableEntry(_E, "new_life"),
    4: TableEntry(_E, "farewell"),
    5: TableEntry(_J, "destination"),
    6: TableEntry(_F, "wish"),
    7: TableEntry(_J, "memorable_day"),
    8: TableEntry(_J, "achievement"),
    9: TableEntry(_E, "failure"),
    10: TableEntry(_E, "difficulty"),
    11: TableEntry(_E, "health"),
    12: TableEntry(_T, "purchase"),
    13: TableEntry(_E, "praise"),
    14: TableEntry(_E, "shock"),
    15: TableEntry(_T, "spending"),
    16: TableEntry(_J, "excitement"),
    17: TableEntry(_T, "song"),
    18: TableEntry(_E, "change"),
    19: TableEntry(_F, "do_more"),
    20: TableEntry(_F, "do_less"),
    21: TableEntry(_J, "holiday"),
    22: TableEntry(_E, "love"),
    23: TableEntry(_E, "estrangement"),
    24: TableEntry(_T, "show"),
    25: TableEntry(_T, "book"),
    26: TableEntry(_T, "new_song"),
    27: TableEntry(_T, "movie"),
    28: TableEntry(_T, "meal"),
    29: TableEntry(_F, "gained"),
    30: TableEntry(_F, "missed"),
    31: TableEntry(_J, "birthday"),
    32: TableEntry(_F, "fulfilment"),
    33: TableEntry(_T, "style"),
    34: TableEntry(_E, "anchor"),
    35: TableEntry(_T, "idol"),
    36: TableEntry(_F, "cause"),
    37: TableEntry(_E, "missing"),
    38: TableEntry(_E, "new_friend"),
    39: TableEntry(_F, "lesson"),
    40: TableEntry(_F, "motto"),
}

# Category substrings for questions outside QUESTION_TABLE
CATEGORY_KEYWORDS: dict[Bucket, tuple[str, ...]] = {
    Bucket.JOURNEY: ("足迹", "探索", "成就", "时刻", "旅行", "仪式", "闲暇"),
    Bucket.EMOTIONS: ("情感", "离别", "思念", "挫折", "挑战", "健康", "人际", "相遇"),
    Bucket.TASTES: ("阅读", "旋律", "光影", "味蕾", "娱乐", "风格", "物质", "发现"),
    Bucket.FUTURE: ("愿望", "期待", "成长", "总结", "遗憾", "减法", "未得", "收获"),
}

# Question-text substrings that name a slot, for questions outside the table
SLOT_KEYWORDS: dict[Bucket, tuple[tuple[str, tuple[str, ...]], ...]] = {
    Bucket.JOURNEY: (
        ("destination", ("城市", "国家", "地方")),
        ("achievement", ("成就",)),
        ("first_time", ("从未", "第一次")),
        ("memorable_day", ("日子", "记忆")),
    ),
    Bucket.EMOTIONS: (
        ("failure", ("失败",)),
        ("difficulty", ("困难",)),
        ("love", ("爱",)),
        ("missing", ("想念",)),
        ("health", ("生病", "受伤")),
    ),
    Bucket.TASTES: (
        ("book", ("书",)),
        ("song", ("歌",)),
        ("movie", ("电影",)),
        ("show", ("电视", "节目")),
        ("meal", ("吃", "饭")),
        ("purchase", ("买",)),
    ),
    Bucket.FUTURE: (
        ("wish", ("愿望", "明年")),
        ("lesson", ("经验", "学到")),
        ("motto", ("一句话",)),
        ("do_more", ("更多",)),
    ),
}

# Explicit skip words; short replies such as "无" count as answers
SKIP_MARKERS: frozenset[str] = frozenset({"skipped", "skip", "跳过", "略过", "n/a"})

DEFAULT_DETAIL_LIMIT = 15
MAX_DETAIL_LENGTH = 16

_DETAIL_PATTERN = re.compile(
    r"《([^》]{1,30})》"
    r"|“([^”]{1,30})”"
    r'|"([^"]{1,30})"'
    r"|「([^」]{1,30})」"
    r"|『([^』]{1,30})』"
    r"|([\u4e00-\u9fff]{2,})"
    r"|([A-Za-z][A-Za-z'\-]*[A-Za-z])"
)

_STOPWORDS: frozenset[str] = frozenset(
    {
        "没有", "还是", "今年", "去年", "一个", "自己", "我们", "他们", "什么",
        "就是", "因为", "所以", "但是", "可以", "这个", "那个", "一些", "非常",
        "the", "and", "of", "to", "in", "it", "is", "my",
    }
)


def classify_question(question_id: int, category: str = "") -> Bucket | None:
    """Assign a question to a bucket.

    Args:
        question_id: Question id.
        category: Category label, consulted only for ids outside the table.

    Returns:
        The bucket, or None when no rule matches.
    """
    entry = QUESTION_TABLE.get(question_id)
    if entry is not None:
        return entry.bucket
    for bucket, keywords in CATEGORY_KEYWORDS.items():
        if any(keyword in category for keyword in keywords):
            return bucket
    return None


def find_slot(question: Question) -> str | None:
    """Return the named slot a question fills, if any."""
    entry = QUESTION_TABLE.get(question.id)
    if entry is not None:
        return entry.slot
    bucket = classify_question(question.id, question.category)
    if bucket is None:
        return None
    for slot, keywords in SLOT_KEYWORDS[bucket]:
        if any(keyword in question.text for keyword in keywords):
            return slot
    return None


def is_skipped(answer: str | None) -> bool:
    """Check whether an answer is empty or a skip marker."""
    if answer is None:
        return True
    stripped = answer.strip()
    return not stripped or stripped.lower() in SKIP_MARKERS


def answered_pairs(
    answers: Mapping[int, str],
    questions: Sequence[Question],
) -> list[tuple[Question, str]]:
    """Return (question, answer) pairs with a real answer, in question order."""
    pairs: list[tuple[Question, str]] = []
    for question in questions:
        answer = answers.get(question.id)
        if not is_skipped(answer):
            pairs.append((question, answer.strip()))  # type: ignore[union-attr]
    return pairs


def group_answers(
    answers: Mapping[int, str],
    questions: Sequence[Question],
) -> dict[Bucket, list[tuple[Question, str]]]:
    """Group answered questions by bucket.

    Questions no rule classifies are left out of every bucket.

    Returns:
        Mapping with an entry (possibly empty) for every bucket.
    """
    grouped: dict[Bucket, list[tuple[Question, str]]] = {b: [] for b in Bucket}
    for question, answer in answered_pairs(answers, questions):
        bucket = classify_question(question.id, question.category)
        if bucket is not None:
            grouped[bucket].append((question, answer))
    return grouped


def _ordered_answer_texts(
    answers: Answers,
    questions: Sequence[Question] | None,
) -> Iterable[str]:
    if questions is not None:
        return (answer for _, answer in answered_pairs(answers, questions))
    return (
        answers[qid].strip() for qid in sorted(answers) if not is_skipped(answers[qid])
    )


def extract_unique_details(
    answers: Answers,
    questions: Sequence[Question] | None = None,
    limit: int = DEFAULT_DETAIL_LIMIT,
) -> list[str]:
    """Extract distinctive detail tokens from the answers.

    Tokens are quoted substrings (《》, “”, "", 「」, 『』), runs of two or
    more CJK characters, and Latin-letter words. Tokens longer than
    ``MAX_DETAIL_LENGTH`` are clipped to that length. Tokens are deduplicated
    case-insensitively in order of first appearance.

    Args:
        answers: Answer store.
        questions: Optional question order; defaults to ascending id.
        limit: Maximum number of tokens returned.

    Returns:
        Up to ``limit`` tokens.
    """
    details: list[str] = []
    seen: set[str] = set()
    for text in _ordered_answer_texts(answers, questions):
        for match in _DETAIL_PATTERN.finditer(text):
            token = next(group for group in match.groups() if group is not None)
            # Long unpunctuated runs are clipped, not dropped
            token = token.strip()[:MAX_DETAIL_LENGTH].strip()
            key = token.lower()
            if len(token) < 2 or key in _STOPWORDS or key in seen:
                continue
            seen.add(key)
            details.append(token)
            if len(details) >= limit:
                return details
    return details
