# SPDX-License-Identifier: Apache-2.0
"""Chat-completion clients for OpenAI-compatible endpoints and LiteLLM."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import Any, ClassVar

from openai import (
    AsyncOpenAI,
    AuthenticationError,
    NotFoundError,
    OpenAIError,
    PermissionDeniedError,
    RateLimitError,
)
from pydantic import BaseModel

from year_review.llm.base import (
    ChatClient,
    ConfigurationError,
    LLMError,
    SchemaViolation,
    TransportError,
)
from year_review.llm.schemas import build_response_format

logger = logging.getLogger(__name__)

_CHAT_COMPLETIONS_SUFFIX = re.compile(r"/chat/completions/?$", re.IGNORECASE)


@dataclass
class LLMConfig:
    """Configuration for the chat-completion API.

    Attributes:
        provider: "openai" for any OpenAI-compatible endpoint (used directly
            through the openai SDK); any other provider is routed through
            LiteLLM ("gemini", "anthropic", ...).
        model: Model name within provider. If None, uses PROVIDER_DEFAULTS.
        api_key: API key. If None, resolved from environment on first use.
        base_url: Endpoint base URL. If None, uses DEFAULT_BASE_URL for the
            "openai" provider and the provider's own endpoint otherwise.
        summary_temperature: Temperature for summary generation.
        extraction_temperature: Temperature for answer extraction.
        hint_temperature: Temperature for inspiration hints.
        timeout: Request timeout in seconds.
    """

    provider: str = "openai"
    model: str | None = None  # None = use PROVIDER_DEFAULTS[provider]
    api_key: str | None = None
    base_url: str | None = None
    summary_temperature: float = 0.7
    extraction_temperature: float = 0.0
    hint_temperature: float = 0.7
    timeout: float = 60.0

    DEFAULT_BASE_URL: ClassVar[str] = "https://open.bigmodel.cn/api/paas/v4/"

    # Supported providers and their default models
    PROVIDER_DEFAULTS: ClassVar[dict[str, str]] = {
        "openai": "glm-4-flash",
        "gemini": "gemini-2.5-flash",
        "anthropic": "claude-sonnet-4-5",
    }

    # Environment variable names for API keys, in priority order
    API_KEY_ENV_VARS: ClassVar[dict[str, tuple[str, ...]]] = {
        "openai": ("YEAR_REVIEW_API_KEY", "BIGMODEL_API_KEY", "OPENAI_API_KEY"),
        "gemini": ("YEAR_REVIEW_API_KEY", "GEMINI_API_KEY"),
        "anthropic": ("YEAR_REVIEW_API_KEY", "ANTHROPIC_API_KEY"),
    }

    @property
    def effective_model(self) -> str:
        """Get effective model name (resolves None to provider default)."""
        if self.model is not None:
            return self.model
        return self.PROVIDER_DEFAULTS.get(self.provider, "glm-4-flash")

    @property
    def litellm_model(self) -> str:
        """Get LiteLLM model string (provider/model format)."""
        return f"{self.provider}/{self.effective_model}"

    @property
    def effective_base_url(self) -> str | None:
        """Get base URL with any trailing /chat/completions trimmed."""
        url = self.base_url
        if url is None and self.provider == "openai":
            url = self.DEFAULT_BASE_URL
        if url is None:
            return None
        return _CHAT_COMPLETIONS_SUFFIX.sub("/", url)

    def get_api_key_env_vars(self) -> tuple[str, ...]:
        """Get environment variable names consulted for the API key."""
        return self.API_KEY_ENV_VARS.get(
            self.provider,
            ("YEAR_REVIEW_API_KEY", f"{self.provider.upper()}_API_KEY"),
        )

    def resolve_api_key(self) -> str | None:
        """Resolve the API key from config, then environment."""
        if self.api_key:
            return self.api_key
        for env_var in self.get_api_key_env_vars():
            value = os.environ.get(env_var)
            if value:
                return value
        return None

    @classmethod
    def from_env(cls) -> LLMConfig:
        """Build a config from environment variables.

        The API key itself is left unresolved so that it is read on first
        use.
        """
        return cls(
            provider=os.getenv("YEAR_REVIEW_PROVIDER", "openai"),
            model=os.getenv("YEAR_REVIEW_MODEL") or os.getenv("OPENAI_MODEL"),
            base_url=os.getenv("YEAR_REVIEW_BASE_URL") or os.getenv("OPENAI_BASE_URL"),
            timeout=float(os.getenv("YEAR_REVIEW_TIMEOUT", "60")),
        )


def _map_api_error(error: Exception, model: str) -> LLMError:
    """Translate an SDK exception into the LLM error taxonomy.

    LiteLLM exceptions subclass the openai ones, so one mapping serves both
    clients.
    """
    if isinstance(error, (AuthenticationError, PermissionDeniedError)):
        return ConfigurationError(f"API key was rejected: {error}")
    if isinstance(error, NotFoundError):
        return ConfigurationError(
            f"Model '{model}' is not available. "
            f"Set YEAR_REVIEW_MODEL to use a different model."
        )
    if isinstance(error, RateLimitError):
        return TransportError("Rate limit exceeded, please retry later")
    return TransportError(f"Chat completion failed: {error}")


def _response_text(response: Any) -> str:
    """Pull the text payload out of a chat-completion response.

    Raises:
        SchemaViolation: If the response has no text.
    """
    choices = getattr(response, "choices", None) or []
    if not choices:
        raise SchemaViolation("Response contained no choices")
    content = choices[0].message.content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, dict):
                if part.get("type") == "text":
                    parts.append(part.get("text") or "")
            elif getattr(part, "type", None) == "text":
                parts.append(getattr(part, "text", "") or "")
        content = "\n".join(parts)
    text = (content or "").strip()
    if not text:
        raise SchemaViolation("Empty response from model")
    return text


class OpenAIChatClient:
    """Client for OpenAI-compatible chat-completion endpoints.

    The underlying ``AsyncOpenAI`` handle is built lazily on first use and
    reused across calls. It is rebuilt only when the resolved API key or
    base URL changes.
    """

    def __init__(self, config: LLMConfig) -> None:
        """Initialize OpenAIChatClient.

        Args:
            config: LLM configuration.
        """
        self._config = config
        self._client: AsyncOpenAI | None = None
        self._cached_api_key: str | None = None
        self._cached_base_url: str | None = None

    @property
    def name(self) -> str:
        """Return client name."""
        return "openai"

    @property
    def config(self) -> LLMConfig:
        """Return the active configuration."""
        return self._config

    def _ensure_client(self) -> AsyncOpenAI:
        """Ensure the SDK client exists for the current credentials.

        Returns:
            Active OpenAI async client.

        Raises:
            ConfigurationError: If no API key can be resolved.
        """
        api_key = self._config.resolve_api_key()
        if not api_key:
            env_vars = " or ".join(self._config.get_api_key_env_vars())
            raise ConfigurationError(f"Missing API key. Set {env_vars}.")

        base_url = self._config.effective_base_url
        if (
            self._client is None
            or api_key != self._cached_api_key
            or base_url != self._cached_base_url
        ):
            logger.debug("Creating chat client for %s", base_url)
            self._client = AsyncOpenAI(
                api_key=api_key,
                base_url=base_url,
                timeout=self._config.timeout,
            )
            self._cached_api_key = api_key
            self._cached_base_url = base_url
        return self._client

    async def complete(
        self,
        messages: list[dict[str, Any]],
        *,
        temperature: float,
        response_model: type[BaseModel] | None = None,
        schema_name: str | None = None,
    ) -> str:
        """Run one chat completion.

        Args:
            messages: Role-tagged messages.
            temperature: Sampling temperature.
            response_model: Optional structured-output model.
            schema_name: Structured-output schema name.

        Returns:
            Raw response text.

        Raises:
            ConfigurationError: On missing or rejected credentials.
            TransportError: On API failure.
            SchemaViolation: If the response has no text.
        """
        client = self._ensure_client()
        model = self._config.effective_model

        kwargs: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
        }
        if response_model is not None:
            kwargs["response_format"] = build_response_format(
                response_model, schema_name or response_model.__name__
            )

        try:
            response = await client.chat.completions.create(**kwargs)
        except OpenAIError as e:
            raise _map_api_error(e, model) from e

        return _response_text(response)

    async def close(self) -> None:
        """Close the SDK client."""
        if self._client:
            await self._client.close()
            self._client = None


class LiteLLMChatClient:
    """Chat client routed through LiteLLM for non-OpenAI providers.

    Requires optional dependency: litellm
    """

    def __init__(self, config: LLMConfig) -> None:
        """Initialize LiteLLMChatClient.

        Args:
            config: LLM configuration.
        """
        self._config = config

    @property
    def name(self) -> str:
        """Return client name."""
        return "litellm"

    @property
    def config(self) -> LLMConfig:
        """Return the active configuration."""
        return self._config

    async def complete(
        self,
        messages: list[dict[str, Any]],
        *,
        temperature: float,
        response_model: type[BaseModel] | None = None,
        schema_name: str | None = None,
    ) -> str:
        """Run one chat completion through LiteLLM.

        Raises:
            ConfigurationError: On missing credentials or missing litellm.
            TransportError: On API failure.
            SchemaViolation: If the response has no text.
        """
        try:
            from litellm import acompletion
        except ImportError:
            raise ConfigurationError(
                f"litellm is required for provider '{self._config.provider}'. "
                "Install with: pip install year-review[litellm]"
            ) from None

        api_key = self._config.resolve_api_key()
        if not api_key:
            env_vars = " or ".join(self._config.get_api_key_env_vars())
            raise ConfigurationError(f"Missing API key. Set {env_vars}.")

        kwargs: dict[str, Any] = {
            "model": self._config.litellm_model,
            "messages": messages,
            "temperature": temperature,
            "api_key": api_key,
            "timeout": self._config.timeout,
        }
        base_url = self._config.effective_base_url
        if base_url:
            kwargs["api_base"] = base_url
        if response_model is not None:
            kwargs["response_format"] = build_response_format(
                response_model, schema_name or response_model.__name__
            )

        try:
            response = await acompletion(**kwargs)
        except Exception as e:
            raise _map_api_error(e, self._config.litellm_model) from e

        return _response_text(response)


def create_chat_client(config: LLMConfig | None = None) -> ChatClient:
    """Create the chat client matching the configured provider.

    Args:
        config: LLM configuration. Defaults to ``LLMConfig.from_env()``.

    Returns:
        ChatClient instance.
    """
    config = config or LLMConfig.from_env()
    if config.provider == "openai":
        return OpenAIChatClient(config)
    return LiteLLMChatClient(config)
