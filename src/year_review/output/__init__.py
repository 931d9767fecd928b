# SPDX-License-Identifier: Apache-2.0
"""Output format modules for year reviews.

This module provides Markdown export of a YearSummary.
"""

from year_review.output.markdown_writer import (
    STYLE_LABELS,
    MarkdownConfig,
    MarkdownWriter,
)

__all__ = [
    "MarkdownConfig",
    "MarkdownWriter",
    "STYLE_LABELS",
]
