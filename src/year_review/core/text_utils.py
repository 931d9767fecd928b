# SPDX-License-Identifier: Apache-2.0
"""Text helpers shared by the remote and fallback summary paths.

Covers code-fence stripping for model output, punctuation trimming for
answers interpolated into templates, and length fitting for card content.
"""

from __future__ import annotations

import base64
import binascii
import re
from collections.abc import Sequence

# Characters that end a sentence
SENTENCE_ENDINGS = "。！？!?…"

# Punctuation trimmed from the end of an answer before interpolation
TRAILING_PUNCTUATION = "。，、；：！？!?,.;:…~～ \t\r\n"

_CLAUSE_SPLIT = re.compile(r"[。！？!?；;\n]")
_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences (```json ... ```) around model output.

    Args:
        text: Raw model response text.

    Returns:
        Text with every fence marker removed and surrounding whitespace
        stripped. Empty input yields an empty string.
    """
    if not text:
        return ""
    return _FENCE.sub("", text).strip()


def trim_trailing_punctuation(text: str) -> str:
    """Strip whitespace and trailing punctuation from an answer."""
    return text.strip().rstrip(TRAILING_PUNCTUATION).strip()


def clip_clause(text: str, max_chars: int = 24) -> str:
    """Reduce an answer to its first clause, capped at ``max_chars``.

    Long free-text answers are cut down so they read naturally inside a
    template sentence.

    Args:
        text: Raw answer text.
        max_chars: Upper bound on the returned length.

    Returns:
        The first non-empty clause without trailing punctuation.
    """
    for clause in _CLAUSE_SPLIT.split(text):
        clause = trim_trailing_punctuation(clause)
        if clause:
            if len(clause) > max_chars:
                clause = trim_trailing_punctuation(clause[:max_chars])
            return clause
    return ""


def first_sentence(text: str) -> str:
    """Return the first sentence of ``text`` including its terminator."""
    for index, char in enumerate(text):
        if char in SENTENCE_ENDINGS:
            return text[: index + 1].strip()
    return text.strip()


def ensure_terminal(text: str) -> str:
    """Append "。" when text does not already end a sentence."""
    text = text.rstrip()
    if not text:
        return text
    if text[-1] in SENTENCE_ENDINGS:
        return text
    return trim_trailing_punctuation(text) + "。"


def truncate_at_sentence(text: str, max_len: int, min_len: int = 1) -> str:
    """Truncate text to at most ``max_len`` characters at a sentence end.

    The cut is made after the last sentence-ending mark that fits within
    ``max_len``. When no such mark leaves at least ``min_len`` characters,
    the text is cut at ``max_len - 1`` and closed with "。".

    Args:
        text: Text to truncate.
        max_len: Maximum length of the result.
        min_len: Minimum acceptable length for a sentence-boundary cut.

    Returns:
        Truncated text that always ends with sentence-ending punctuation.
    """
    text = ensure_terminal(text)
    if len(text) <= max_len:
        return text

    window = text[:max_len]
    cut = max(window.rfind(mark) for mark in SENTENCE_ENDINGS)
    if cut + 1 >= max(min_len, 1):
        return window[: cut + 1]

    clipped = text[: max_len - 1]
    if clipped and clipped[-1] in TRAILING_PUNCTUATION:
        clipped = clipped[:-1]
    return clipped + "。"


def fit_length(
    text: str,
    min_len: int,
    max_len: int,
    closings: Sequence[str],
) -> str:
    """Fit text into ``[min_len, max_len]`` characters.

    Short text is padded with closing sentences (preferring ones that keep
    the result within ``max_len``); long text is truncated at a sentence
    boundary.

    Args:
        text: Composed card content.
        min_len: Minimum content length.
        max_len: Maximum content length.
        closings: Non-empty pool of generic closing sentences.

    Returns:
        Text within the bounds, ending with sentence punctuation.
    """
    if min_len > max_len:
        raise ValueError(f"min_len {min_len} exceeds max_len {max_len}")
    if not closings:
        raise ValueError("closings must not be empty")

    result = ensure_terminal(text.strip())
    used: set[int] = set()
    while len(result) < min_len:
        room = max_len - len(result)
        candidates = [i for i in range(len(closings)) if i not in used]
        if not candidates:
            used.clear()
            candidates = list(range(len(closings)))
        fitting = [i for i in candidates if len(closings[i]) <= room]
        index = fitting[0] if fitting else candidates[0]
        used.add(index)
        result += closings[index]

    return truncate_at_sentence(result, max_len, min_len)


def decode_base64_text(data: str) -> str:
    """Decode base64 data into UTF-8 text.

    Invalid byte sequences are replaced rather than rejected; invalid
    base64 yields an empty string.
    """
    if not data:
        return ""
    try:
        raw = base64.b64decode(data, validate=False)
    except (binascii.Error, ValueError):
        return ""
    return raw.decode("utf-8", errors="replace")
