# SPDX-License-Identifier: Apache-2.0
"""Tests for the review pipeline module."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import encode_text
from year_review.fallback.builder import build_fallback
from year_review.llm.base import ConfigurationError, TransportError
from year_review.llm.client import LLMConfig
from year_review.llm.inspiration import HINT_PLACEHOLDERS
from year_review.pipeline import (
    ExtractionError,
    GenerationError,
    PipelineError,
    ProgressCallback,
)
from year_review.pipeline.review_pipeline import ReviewPipeline, SummaryResult


def make_client(response: str | None = None, error: Exception | None = None) -> MagicMock:
    """Build a fake ChatClient."""
    client = MagicMock()
    client.name = "fake"
    client.complete = AsyncMock(return_value=response, side_effect=error)
    client.close = AsyncMock()
    return client


class RecordingCallback:
    """Progress callback that records every event."""

    def __init__(self) -> None:
        self.events: list[tuple[str, int, int, str]] = []

    def __call__(self, stage: str, current: int, total: int, message: str = "") -> None:
        self.events.append((stage, current, total, message))

    @property
    def stages(self) -> list[str]:
        return [event[0] for event in self.events]


class TestPipelineErrors:
    """Tests for pipeline error classes."""

    def test_generation_error(self) -> None:
        """Test GenerationError stage and cause."""
        cause = TransportError("down")
        error = GenerationError("failed", cause=cause)

        assert isinstance(error, PipelineError)
        assert error.stage == "generate"
        assert error.cause is cause
        assert str(error) == "failed"

    def test_extraction_error(self) -> None:
        """Test ExtractionError stage."""
        assert ExtractionError("none").stage == "extract"

    def test_callback_protocol(self) -> None:
        """Test the recording callback satisfies ProgressCallback."""
        assert isinstance(RecordingCallback(), ProgressCallback)


class TestSummarize:
    """Tests for ReviewPipeline.summarize."""

    async def test_remote_success(self, summary_json: str, sample_answers: dict[int, str]) -> None:
        """Test a valid remote summary is returned as-is."""
        callback = RecordingCallback()
        pipeline = ReviewPipeline(make_client(summary_json), LLMConfig(), progress_callback=callback)

        result = await pipeline.summarize(sample_answers)

        assert isinstance(result, SummaryResult)
        assert result.source == "remote"
        assert not result.is_fallback
        assert result.summary.keyword == "REBIRTH"
        assert result.answers == sample_answers
        assert callback.stages == ["generate", "generate", "done"]

    async def test_fallback_on_invalid_json(self, sample_answers: dict[int, str]) -> None:
        """Test malformed output switches to the local summary."""
        callback = RecordingCallback()
        pipeline = ReviewPipeline(make_client("not json"), LLMConfig(), progress_callback=callback)

        result = await pipeline.summarize(sample_answers)

        assert result.source == "fallback"
        assert result.summary == build_fallback(sample_answers)
        assert callback.stages == ["generate", "fallback", "done"]

    async def test_fallback_on_transport_error(self) -> None:
        """Test API failure switches to the local summary."""
        pipeline = ReviewPipeline(make_client(error=TransportError("down")), LLMConfig())

        result = await pipeline.summarize({})

        assert result.is_fallback
        assert len(result.summary.cards) == 4

    async def test_configuration_error_propagates(self) -> None:
        """Test credential problems are reported, not hidden."""
        pipeline = ReviewPipeline(make_client(error=ConfigurationError("no key")), LLMConfig())
        with pytest.raises(ConfigurationError):
            await pipeline.summarize({1: "x"})

    async def test_offline(self, sample_answers: dict[int, str]) -> None:
        """Test offline mode never builds a client."""
        pipeline = ReviewPipeline(config=LLMConfig(), offline=True)

        result = await pipeline.summarize(sample_answers)

        assert result.source == "fallback"


class TestExtractAndSummarizeDocument:
    """Tests for document entry points."""

    async def test_summarize_document(self, summary_json: str) -> None:
        """Test text document to remote summary."""
        client = make_client(summary_json)
        pipeline = ReviewPipeline(client, LLMConfig())

        result = await pipeline.summarize_document(encode_text("5. 城市\n东京"), "text/plain")

        assert result.answers == {5: "东京"}
        assert result.source == "remote"
        # Plain text is parsed locally; only the summary request is made.
        assert client.complete.await_count == 1

    async def test_summarize_document_empty(self) -> None:
        """Test an empty document raises ExtractionError."""
        pipeline = ReviewPipeline(make_client(), LLMConfig())
        with pytest.raises(ExtractionError):
            await pipeline.summarize_document(encode_text(""), "text/plain")

    async def test_extract_progress(self) -> None:
        """Test extract reports progress."""
        callback = RecordingCallback()
        pipeline = ReviewPipeline(make_client(), LLMConfig(), progress_callback=callback)

        await pipeline.extract(encode_text("1. Q\nA"), "text/plain")

        assert callback.events[-1] == ("extract", 1, 1, "1 answers")

    async def test_offline_text(self) -> None:
        """Test offline mode still parses text documents."""
        pipeline = ReviewPipeline(config=LLMConfig(), offline=True)
        result = await pipeline.summarize_document(encode_text("8. 成就\n马拉松"))
        assert result.answers == {8: "马拉松"}

    async def test_offline_image(self) -> None:
        """Test offline mode rejects documents that need the API."""
        pipeline = ReviewPipeline(config=LLMConfig(), offline=True)
        with pytest.raises(ExtractionError):
            await pipeline.extract("aW1hZ2U=", "image/png")


class TestHint:
    """Tests for ReviewPipeline.hint."""

    async def test_hint(self) -> None:
        """Test the hint comes from the client."""
        pipeline = ReviewPipeline(make_client("想想那张车票"), LLMConfig())
        assert await pipeline.hint(5) == "想想那张车票"

    async def test_hint_offline(self) -> None:
        """Test offline hints are placeholders."""
        pipeline = ReviewPipeline(config=LLMConfig(), offline=True)
        assert await pipeline.hint(5) == HINT_PLACEHOLDERS[1]

    async def test_hint_unknown_question(self) -> None:
        """Test unknown ids raise KeyError."""
        pipeline = ReviewPipeline(make_client(), LLMConfig())
        with pytest.raises(KeyError):
            await pipeline.hint(99)


class TestClose:
    """Tests for ReviewPipeline.close."""

    async def test_close_client(self) -> None:
        """Test close is forwarded to the client."""
        client = make_client()
        pipeline = ReviewPipeline(client, LLMConfig())

        await pipeline.close()

        client.close.assert_awaited_once()

    async def test_close_offline(self) -> None:
        """Test close without a client is a no-op."""
        pipeline = ReviewPipeline(config=LLMConfig(), offline=True)
        await pipeline.close()
