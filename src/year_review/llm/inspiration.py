# SPDX-License-Identifier: Apache-2.0
"""One-line writing prompts for individual questions."""

from __future__ import annotations

import logging
import re

from year_review.core.models import Question
from year_review.llm.base import ChatClient
from year_review.llm.client import LLMConfig

logger = logging.getLogger(__name__)

# Returned when the model answers with an empty string
EMPTY_HINT = "闭上眼睛，答案就在呼吸之间..."

# Returned (by question id) when the request fails
HINT_PLACEHOLDERS: tuple[str, ...] = (
    "听听心底的声音...",
    "翻翻相册，也许答案就藏在某张照片里...",
    "想想那个让你嘴角上扬的瞬间...",
    "不用写得完美，写下第一个浮现的画面就好...",
)

_QUOTES = re.compile(r'["“”]')


class InspirationGenerator:
    """Produce a short, gentle thought starter for one question.

    Never raises: any failure, configuration problems included, yields a
    static placeholder.
    """

    SYSTEM_PROMPT = (
        "You are a close friend offering tiny, poetic nudges. "
        "Keep it under 20 Chinese characters, no quotes or prefacing."
    )

    HINT_PROMPT = (
        'Context: User is reflecting on their year by answering: "{question}". '
        "Return one gentle thought starter."
    )

    def __init__(self, client: ChatClient, config: LLMConfig | None = None) -> None:
        """Initialize InspirationGenerator.

        Args:
            client: Chat-completion client.
            config: LLM configuration (temperatures).
        """
        self._client = client
        self._config = config or LLMConfig()

    async def get_hint(self, question: Question) -> str:
        """Return a one-line hint for ``question``.

        Args:
            question: Question being answered.

        Returns:
            Hint text with quote characters removed.
        """
        messages = [
            {"role": "system", "content": self.SYSTEM_PROMPT},
            {"role": "user", "content": self.HINT_PROMPT.format(question=question.text)},
        ]
        try:
            text = await self._client.complete(
                messages, temperature=self._config.hint_temperature
            )
        except Exception as e:
            logger.warning("Inspiration request failed: %s", e)
            return HINT_PLACEHOLDERS[question.id % len(HINT_PLACEHOLDERS)]

        hint = _QUOTES.sub("", text).strip()
        return hint or EMPTY_HINT
