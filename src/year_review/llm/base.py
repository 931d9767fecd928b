# SPDX-License-Identifier: Apache-2.0
"""Base classes and protocols for chat-completion clients."""

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel


class LLMError(Exception):
    """Base exception for the LLM module."""

    pass


class ConfigurationError(LLMError):
    """Configuration error (missing API key, invalid key, unknown model).

    This error type is NOT retryable - fix the configuration first.
    """

    pass


class TransportError(LLMError):
    """Network failure or non-2xx response from the chat-completion API."""

    pass


class SchemaViolation(LLMError):
    """Response was empty, not JSON, or did not match the expected schema."""

    pass


@runtime_checkable
class ChatClient(Protocol):
    """Protocol definition for chat-completion clients.

    All client implementations must conform to this protocol.
    """

    @property
    def name(self) -> str:
        """Client name ("openai", "litellm")."""
        ...

    async def complete(
        self,
        messages: list[dict[str, Any]],
        *,
        temperature: float,
        response_model: type[BaseModel] | None = None,
        schema_name: str | None = None,
    ) -> str:
        """Run one chat completion and return the response text.

        Args:
            messages: Role-tagged messages. ``content`` is either a string or
                a list of content parts (text / image_url).
            temperature: Sampling temperature.
            response_model: Optional pydantic model whose JSON Schema is sent
                as the structured-output constraint.
            schema_name: Name of the structured-output schema.

        Returns:
            Raw response text (may still be wrapped in code fences).

        Raises:
            ConfigurationError: On missing or rejected credentials.
            TransportError: On network or API failure.
            SchemaViolation: If the response has no text.
        """
        ...
