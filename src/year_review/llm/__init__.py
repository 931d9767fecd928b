# SPDX-License-Identifier: Apache-2.0
"""LLM integration module for year-in-review summaries.

This module provides chat-completion based functionality:
- Year summary generation with structured-output validation
- Answer extraction from uploaded documents
- One-line inspiration hints per question

OpenAI-compatible endpoints are used through the openai SDK; other
providers require optional dependency: litellm
"""

from year_review.llm.answer_extractor import DocumentAnswerExtractor
from year_review.llm.base import (
    ChatClient,
    ConfigurationError,
    LLMError,
    SchemaViolation,
    TransportError,
)
from year_review.llm.client import (
    LiteLLMChatClient,
    LLMConfig,
    OpenAIChatClient,
    create_chat_client,
)
from year_review.llm.inspiration import InspirationGenerator
from year_review.llm.summary_generator import RemoteSummaryGenerator

__all__ = [
    "ChatClient",
    "ConfigurationError",
    "DocumentAnswerExtractor",
    "InspirationGenerator",
    "LLMConfig",
    "LLMError",
    "LiteLLMChatClient",
    "OpenAIChatClient",
    "RemoteSummaryGenerator",
    "SchemaViolation",
    "TransportError",
    "create_chat_client",
]
