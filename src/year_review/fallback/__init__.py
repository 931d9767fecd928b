# SPDX-License-Identifier: Apache-2.0
"""Local template-based summary generation used when the API is unavailable."""

from year_review.fallback.builder import FallbackSummaryGenerator, build_fallback

__all__ = [
    "FallbackSummaryGenerator",
    "build_fallback",
]
