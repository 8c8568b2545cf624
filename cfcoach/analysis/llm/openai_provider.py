"""
OpenAI chat-completions backend for coaching suggestions.
"""
from __future__ import annotations

import logging
import time

from .base import (
    BaseLLMProvider,
    LLMConfigurationError,
    LLMDecodeError,
    LLMEmptyOutputError,
    LLMResponse,
    LLMStatusError,
    LLMTransportError,
)
from .config import DEFAULT_TIMEOUT_SECONDS, GENERATION_CONFIG, get_default_model

logger = logging.getLogger(__name__)

try:
    import openai

    _OPENAI_AVAILABLE = True
except ImportError:
    _OPENAI_AVAILABLE = False
    logger.info(
        "openai package not installed. OpenAI provider will not be available. "
        "Install with: pip install openai"
    )


def _register_if_available(cls):
    """Only register the provider if the openai SDK is importable."""
    if _OPENAI_AVAILABLE:
        from . import register_provider

        return register_provider(cls)
    return cls


@_register_if_available
class OpenAIProvider(BaseLLMProvider):
    """OpenAI GPT LLM provider."""

    PROVIDER_NAME = "openai"
    DEFAULT_MODEL = get_default_model("openai")

    def __init__(
        self,
        api_key: str = None,
        model: str = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        **kwargs,
    ):
        super().__init__(api_key=api_key, model=model, timeout=timeout)
        self._client = None

    def _ensure_client(self):
        """Lazily initialize the client if not yet created."""
        if self._client is None:
            if not _OPENAI_AVAILABLE:
                raise LLMConfigurationError(
                    "openai package is not installed. "
                    "Install with: pip install openai"
                )
            if not self.api_key:
                raise LLMConfigurationError("OpenAI API key is required.")
            self._client = openai.OpenAI(
                api_key=self.api_key, timeout=self.timeout, max_retries=0,
            )
        return self._client

    def generate(self, prompt: str) -> LLMResponse:
        """Send the prompt to OpenAI as a single user message.

        The chat completions API has no top-k; temperature, top-p and the
        output cap are forwarded.
        """
        client = self._ensure_client()

        start_time = time.time()
        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=GENERATION_CONFIG["max_output_tokens"],
                temperature=GENERATION_CONFIG["temperature"],
                top_p=GENERATION_CONFIG["top_p"],
            )
        except openai.APIConnectionError as e:
            raise LLMTransportError(f"Could not reach OpenAI: {e}") from e
        except openai.APIStatusError as e:
            raise LLMStatusError(
                f"OpenAI returned HTTP {e.status_code}", status_code=e.status_code,
            ) from e
        except openai.APIError as e:
            raise LLMDecodeError(f"Unexpected OpenAI response: {type(e).__name__}") from e
        latency_ms = int((time.time() - start_time) * 1000)

        if not response.choices:
            raise LLMDecodeError("OpenAI response has no choices")
        choice = response.choices[0]
        content = choice.message.content or ""
        if not content.strip():
            raise LLMEmptyOutputError("OpenAI returned no text content")

        logger.info(
            f"OpenAI LLM response: model={self.model}, "
            f"finish_reason={choice.finish_reason}, "
            f"content_len={len(content)}, latency={latency_ms}ms"
        )

        return LLMResponse(
            content=content,
            model=self.model,
            provider=self.PROVIDER_NAME,
            input_tokens=response.usage.prompt_tokens if response.usage else 0,
            output_tokens=response.usage.completion_tokens if response.usage else 0,
            latency_ms=latency_ms,
            finish_reason=choice.finish_reason or "",
        )
