# SPDX-License-Identifier: Apache-2.0
"""Answer extraction from uploaded documents.

Plain-text uploads are parsed locally. Images, PDFs and other binaries are
sent to the chat-completion API with a structured extraction schema. When
everything else fails, the whole decoded text is captured under question 1
so the review can still proceed.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
import re
from collections.abc import Sequence
from typing import Any

import pypdfium2 as pdfium  # type: ignore[import-untyped]

from year_review.core.models import Answers, Question
from year_review.core.questions import QUESTIONS, is_valid_question_id
from year_review.core.text_utils import decode_base64_text
from year_review.llm.base import ChatClient, SchemaViolation, TransportError
from year_review.llm.client import LLMConfig
from year_review.llm.schemas import AnswerExtractionSchema, parse_answer_list
from year_review.pipeline.errors import ExtractionError

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "text/plain"

_MARKER = re.compile(r"^\s*(\d{1,2})\s*[.．]\s*(.*)$")
_PART_HEADING = re.compile(r"^\s*part\s*\d+\b", re.IGNORECASE)


def parse_plain_text_answers(text: str) -> Answers:
    """Parse the numbered-question text format.

    A line starting with an id 1-40 followed by "." opens an entry; the
    rest of that line is the question and is discarded. Every following
    line up to the next marker, a "Part N" heading, or the end of input is
    the answer. Entries with an empty answer are skipped; a repeated id
    keeps its last answer.

    Args:
        text: Decoded document text.

    Returns:
        Answer mapping (possibly empty).
    """
    if not text:
        return {}

    answers: Answers = {}
    current_id: int | None = None
    buffer: list[str] = []

    def flush() -> None:
        if current_id is None:
            return
        answer = "\n".join(buffer).strip()
        if answer:
            answers[current_id] = answer

    for line in text.replace("\r\n", "\n").split("\n"):
        match = _MARKER.match(line)
        if match and is_valid_question_id(int(match.group(1))):
            flush()
            current_id = int(match.group(1))
            buffer = []
        elif _PART_HEADING.match(line):
            flush()
            current_id = None
            buffer = []
        elif current_id is not None:
            buffer.append(line)
    flush()

    return answers


def build_total_capture(text: str) -> Answers:
    """Place the entire text under question 1 (empty text yields {})."""
    clean = (text or "").strip()
    if not clean:
        return {}
    return {1: clean}


def extract_text_document(file_base64: str) -> Answers:
    """Parse a base64-encoded plain-text document locally.

    Raises:
        ExtractionError: If the document is empty.
    """
    text = decode_base64_text(file_base64)
    parsed = parse_plain_text_answers(text)
    if parsed:
        return parsed

    fallback = build_total_capture(text)
    if fallback:
        logger.warning("No numbered answers found; capturing full text")
        return fallback

    raise ExtractionError("Text document is empty")


class DocumentAnswerExtractor:
    """Recover questionnaire answers from an uploaded document."""

    SYSTEM_PROMPT = (
        "You extract answers from the provided material and return ONLY "
        "valid JSON following the given schema."
    )

    EXTRACTION_PROMPT = """Task: Extract answers from the provided user document (which may be an image, PDF, or text).
The document contains answers to a specific "Year in Review" questionnaire.

Here are the {count} Reference Questions:
{questions}

Instructions:
1. Analyze the document to find answers corresponding to these questions.
2. Map the answers to the correct Question ID.
3. Return a list of objects containing the Question ID and the Answer.
4. If a question is not answered in the document, ignore it.

Output Format: JSON."""

    # Maximum characters of decoded document text sent to the model
    TEXT_EXCERPT_LIMIT = 8000

    def __init__(
        self,
        client: ChatClient,
        config: LLMConfig | None = None,
        questions: Sequence[Question] = QUESTIONS,
    ) -> None:
        """Initialize DocumentAnswerExtractor.

        Args:
            client: Chat-completion client.
            config: LLM configuration (temperatures).
            questions: Reference question list sent with the document.
        """
        self._client = client
        self._config = config or LLMConfig()
        self._questions = questions

    def build_prompt(self, excerpt: str = "") -> str:
        """Build the text part of the extraction request."""
        reference = "\n".join(f"{q.id}. {q.text}" for q in self._questions)
        prompt = self.EXTRACTION_PROMPT.format(
            count=len(self._questions), questions=reference
        )
        if excerpt:
            prompt += f"\n\nDocument (text or OCR expected):\n{excerpt}"
        return prompt

    async def extract_answers(self, file_base64: str, mime_type: str | None) -> Answers:
        """Extract answers from a base64-encoded document.

        Args:
            file_base64: Document content, base64 encoded.
            mime_type: MIME type of the document (defaults to text/plain).

        Returns:
            Non-empty answer mapping.

        Raises:
            ExtractionError: If no answers can be recovered.
            ConfigurationError: On missing or rejected credentials.
        """
        mime = (mime_type or DEFAULT_MIME_TYPE).lower()

        if mime.startswith("text/"):
            return extract_text_document(file_base64)

        image_url: str | None = None
        text_payload = ""
        if mime.startswith("image/"):
            if not file_base64.strip():
                raise ExtractionError("Image document is empty")
            image_url = f"data:{mime};base64,{file_base64}"
        elif mime == "application/pdf":
            text_payload, image_url = self._read_pdf(file_base64)
        else:
            text_payload = decode_base64_text(file_base64)

        if not text_payload.strip() and image_url is None:
            raise ExtractionError(f"Document has no readable content ({mime})")

        cause: Exception | None = None
        answers: Answers = {}
        try:
            answers = await self._extract_remote(text_payload, image_url)
        except (TransportError, SchemaViolation) as e:
            logger.warning("Remote answer extraction failed: %s", e)
            cause = e

        if answers:
            logger.info("Extracted %d answers from %s document", len(answers), mime)
            return answers

        fallback = build_total_capture(text_payload)
        if fallback:
            logger.warning("No structured answers found; capturing full text")
            return fallback

        raise ExtractionError("No answers could be extracted from the document", cause=cause)

    async def _extract_remote(self, text_payload: str, image_url: str | None) -> Answers:
        excerpt = text_payload[: self.TEXT_EXCERPT_LIMIT] if text_payload else ""
        content: list[dict[str, Any]] = []
        if image_url:
            content.append({"type": "image_url", "image_url": {"url": image_url}})
        content.append({"type": "text", "text": self.build_prompt(excerpt)})

        messages = [
            {"role": "system", "content": self.SYSTEM_PROMPT},
            {"role": "user", "content": content},
        ]
        text = await self._client.complete(
            messages,
            temperature=self._config.extraction_temperature,
            response_model=AnswerExtractionSchema,
            schema_name="answer_extraction",
        )
        return parse_answer_list(text)

    def _read_pdf(self, file_base64: str) -> tuple[str, str | None]:
        """Read a PDF's text layer, or render its first page when it has none.

        Returns:
            Tuple of (text, image data URL). At most one is non-empty.
        """
        try:
            raw = base64.b64decode(file_base64)
        except (binascii.Error, ValueError):
            return "", None

        try:
            doc = pdfium.PdfDocument(raw)
        except pdfium.PdfiumError as e:
            logger.warning("Could not open PDF, treating as text: %s", e)
            return decode_base64_text(file_base64), None

        try:
            pages_text: list[str] = []
            for index in range(len(doc)):
                textpage = doc[index].get_textpage()
                try:
                    pages_text.append(textpage.get_text_bounded())
                finally:
                    textpage.close()
                if sum(len(t) for t in pages_text) >= self.TEXT_EXCERPT_LIMIT:
                    break

            text = "\n".join(pages_text).strip()
            if text or len(doc) == 0:
                return text, None

            # No text layer (scanned PDF): send the first page as an image
            bitmap = doc[0].render(scale=2)
            buffer = io.BytesIO()
            bitmap.to_pil().save(buffer, format="PNG")
            encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
            return "", f"data:image/png;base64,{encoded}"
        finally:
            doc.close()
