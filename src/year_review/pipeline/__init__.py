# SPDX-License-Identifier: Apache-2.0
"""Review pipeline package.

The orchestrator lives in ``year_review.pipeline.review_pipeline``; it is not
re-exported here because the LLM modules import these error types.
"""

from .errors import ExtractionError, GenerationError, PipelineError
from .progress import ProgressCallback

__all__ = [
    "ExtractionError",
    "GenerationError",
    "PipelineError",
    "ProgressCallback",
]
