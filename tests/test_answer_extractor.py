# SPDX-License-Identifier: Apache-2.0
"""Tests for document answer extraction."""

from __future__ import annotations

import base64
import io
import json
from unittest.mock import AsyncMock, MagicMock

import pypdfium2 as pdfium
import pytest

from conftest import encode_text
from year_review.llm.answer_extractor import (
    DocumentAnswerExtractor,
    build_total_capture,
    extract_text_document,
    parse_plain_text_answers,
)
from year_review.llm.base import ConfigurationError, SchemaViolation, TransportError
from year_review.llm.schemas import AnswerExtractionSchema
from year_review.pipeline.errors import ExtractionError


def make_client(response: str | None = None, error: Exception | None = None) -> MagicMock:
    """Build a fake ChatClient."""
    client = MagicMock()
    client.name = "fake"
    client.complete = AsyncMock(return_value=response, side_effect=error)
    return client


def answer_list(**answers: str) -> str:
    """Build an extraction response from q<N>=answer keywords."""
    items = [{"id": int(key[1:]), "answer": value} for key, value in answers.items()]
    return json.dumps({"list": items})


def blank_pdf_base64() -> str:
    """Build a one-page PDF without a text layer."""
    pdf = pdfium.PdfDocument.new()
    pdf.new_page(200, 200)
    buffer = io.BytesIO()
    pdf.save(buffer)
    pdf.close()
    return base64.b64encode(buffer.getvalue()).decode("ascii")


class TestParsePlainTextAnswers:
    """Tests for parse_plain_text_answers."""

    def test_numbered_entries(self) -> None:
        """Test answers under numbered question lines."""
        text = "1. Q1\n\nAnswer one\n\n2. Q2\n\nAnswer two"
        assert parse_plain_text_answers(text) == {1: "Answer one", 2: "Answer two"}

    def test_multiline_answer(self) -> None:
        """Test answer lines are joined and trimmed."""
        text = "5. 你去了哪些城市？\n东京\n京都\n\n6. 愿望\n一只猫"
        assert parse_plain_text_answers(text) == {5: "东京\n京都", 6: "一只猫"}

    def test_empty_answer_skipped(self) -> None:
        """Test a question with no answer text is left out."""
        assert parse_plain_text_answers("1. Q1\n\n2. Q2\nyes") == {2: "yes"}

    def test_part_heading_closes_entry(self) -> None:
        """Test a Part heading ends the previous answer."""
        text = "10. Q10\nhard\nPart 2\n11. Q11\nfine"
        assert parse_plain_text_answers(text) == {10: "hard", 11: "fine"}

    def test_out_of_range_id_is_answer_text(self) -> None:
        """Test numbers outside 1-40 are not markers."""
        text = "3. Q3\n99. bottles\n"
        assert parse_plain_text_answers(text) == {3: "99. bottles"}

    def test_duplicate_last_wins(self) -> None:
        """Test a repeated id keeps its last answer."""
        assert parse_plain_text_answers("1. Q\nfirst\n1. Q\nsecond") == {1: "second"}

    def test_fullwidth_dot_and_crlf(self) -> None:
        """Test full-width dot markers and Windows line endings."""
        assert parse_plain_text_answers("7．日子\r\n生日那天\r\n") == {7: "生日那天"}

    def test_no_markers(self) -> None:
        """Test free text yields nothing."""
        assert parse_plain_text_answers("just some free text") == {}


class TestTotalCapture:
    """Tests for build_total_capture and extract_text_document."""

    def test_total_capture(self) -> None:
        """Test whole text goes under question 1."""
        assert build_total_capture("  some text ") == {1: "some text"}
        assert build_total_capture("   ") == {}

    def test_free_text_document(self) -> None:
        """Test unstructured text is captured whole."""
        result = extract_text_document(encode_text("just some free text"))
        assert result == {1: "just some free text"}

    def test_empty_document(self) -> None:
        """Test an empty document raises ExtractionError."""
        with pytest.raises(ExtractionError):
            extract_text_document(encode_text("   "))


class TestExtractAnswers:
    """Tests for DocumentAnswerExtractor.extract_answers."""

    @pytest.mark.asyncio
    async def test_plain_text_local(self) -> None:
        """Test text documents never reach the API."""
        client = make_client()
        extractor = DocumentAnswerExtractor(client)

        result = await extractor.extract_answers(
            encode_text("1. Q1\n\nAnswer one\n\n2. Q2\n\nAnswer two"), "text/plain"
        )

        assert result == {1: "Answer one", 2: "Answer two"}
        client.complete.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_mime_defaults_to_text(self) -> None:
        """Test a missing MIME type is treated as plain text."""
        extractor = DocumentAnswerExtractor(make_client())
        result = await extractor.extract_answers(encode_text("free text"), None)
        assert result == {1: "free text"}

    @pytest.mark.asyncio
    async def test_image_remote(self) -> None:
        """Test images are sent as a data URL with the schema."""
        client = make_client(answer_list(q5="东京", q17="晴天"))
        extractor = DocumentAnswerExtractor(client)

        result = await extractor.extract_answers("aW1hZ2U=", "image/png")

        assert result == {5: "东京", 17: "晴天"}
        kwargs = client.complete.call_args.kwargs
        assert kwargs["response_model"] is AnswerExtractionSchema
        assert kwargs["schema_name"] == "answer_extraction"
        assert kwargs["temperature"] == 0.0
        content = client.complete.call_args.args[0][1]["content"]
        assert content[0]["image_url"]["url"] == "data:image/png;base64,aW1hZ2U="
        assert "40 Reference Questions" in content[1]["text"]

    @pytest.mark.asyncio
    async def test_remote_duplicates(self) -> None:
        """Test duplicate ids from the model keep the last answer."""
        response = json.dumps(
            {"list": [{"id": 2, "answer": "one"}, {"id": 2, "answer": "two"}]}
        )
        extractor = DocumentAnswerExtractor(make_client(response))

        assert await extractor.extract_answers("aW1hZ2U=", "image/jpeg") == {2: "two"}

    @pytest.mark.asyncio
    async def test_other_binary_sends_text(self) -> None:
        """Test unknown types are decoded and sent as text."""
        client = make_client(answer_list(q1="yes"))
        extractor = DocumentAnswerExtractor(client)

        await extractor.extract_answers(encode_text("hello doc"), "application/msword")

        content = client.complete.call_args.args[0][1]["content"]
        assert len(content) == 1
        assert "hello doc" in content[0]["text"]

    @pytest.mark.asyncio
    async def test_remote_failure_total_capture(self) -> None:
        """Test a failed request falls back to the decoded text."""
        extractor = DocumentAnswerExtractor(make_client(error=TransportError("down")))

        result = await extractor.extract_answers(encode_text("raw answers"), "application/rtf")

        assert result == {1: "raw answers"}

    @pytest.mark.asyncio
    async def test_remote_empty_list_total_capture(self) -> None:
        """Test an empty answer list falls back to the decoded text."""
        extractor = DocumentAnswerExtractor(make_client('{"list": []}'))
        result = await extractor.extract_answers(encode_text("raw"), "application/rtf")
        assert result == {1: "raw"}

    @pytest.mark.asyncio
    async def test_image_failure_raises(self) -> None:
        """Test an image with no recoverable text raises ExtractionError."""
        error = SchemaViolation("bad")
        extractor = DocumentAnswerExtractor(make_client(error=error))

        with pytest.raises(ExtractionError) as exc_info:
            await extractor.extract_answers("aW1hZ2U=", "image/png")

        assert exc_info.value.stage == "extract"
        assert exc_info.value.cause is error

    @pytest.mark.asyncio
    async def test_configuration_error_propagates(self) -> None:
        """Test credential problems are not swallowed."""
        extractor = DocumentAnswerExtractor(make_client(error=ConfigurationError("no key")))
        with pytest.raises(ConfigurationError):
            await extractor.extract_answers("aW1hZ2U=", "image/png")

    @pytest.mark.asyncio
    async def test_scanned_pdf_rendered(self) -> None:
        """Test a PDF without text is sent as a PNG of its first page."""
        client = make_client(answer_list(q8="马拉松"))
        extractor = DocumentAnswerExtractor(client)

        result = await extractor.extract_answers(blank_pdf_base64(), "application/pdf")

        assert result == {8: "马拉松"}
        content = client.complete.call_args.args[0][1]["content"]
        assert content[0]["image_url"]["url"].startswith("data:image/png;base64,")

    @pytest.mark.asyncio
    async def test_invalid_pdf_treated_as_text(self) -> None:
        """Test unreadable PDF bytes fall back to decoded text."""
        extractor = DocumentAnswerExtractor(make_client(error=TransportError("down")))

        result = await extractor.extract_answers(encode_text("not a pdf"), "application/pdf")

        assert result == {1: "not a pdf"}

    @pytest.mark.asyncio
    async def test_undecodable_pdf_not_sent(self) -> None:
        """Test invalid base64 for a PDF raises without calling the model."""
        client = make_client(answer_list(q1="invented"))
        extractor = DocumentAnswerExtractor(client)

        with pytest.raises(ExtractionError):
            await extractor.extract_answers("abc", "application/pdf")

        client.complete.assert_not_awaited()

    @pytest.mark.parametrize("mime_type", ["image/png", "application/pdf", "application/rtf"])
    @pytest.mark.asyncio
    async def test_empty_upload_not_sent(self, mime_type: str) -> None:
        """Test an empty upload raises without calling the model."""
        client = make_client(answer_list(q1="invented"))
        extractor = DocumentAnswerExtractor(client)

        with pytest.raises(ExtractionError):
            await extractor.extract_answers("", mime_type)

        client.complete.assert_not_awaited()
