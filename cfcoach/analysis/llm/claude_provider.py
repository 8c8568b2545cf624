"""
Claude backend for coaching suggestions, built on the anthropic SDK.
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
    import anthropic

    _ANTHROPIC_AVAILABLE = True
except ImportError:
    _ANTHROPIC_AVAILABLE = False
    logger.info(
        "anthropic package not installed. Claude provider will not be available. "
        "Install with: pip install anthropic"
    )


def _register_if_available(cls):
    """Only register the provider if the anthropic SDK is importable."""
    if _ANTHROPIC_AVAILABLE:
        from . import register_provider

        return register_provider(cls)
    return cls


@_register_if_available
class ClaudeProvider(BaseLLMProvider):
    """Anthropic Claude LLM provider."""

    PROVIDER_NAME = "claude"
    DEFAULT_MODEL = get_default_model("claude")

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
            if not _ANTHROPIC_AVAILABLE:
                raise LLMConfigurationError(
                    "anthropic package is not installed. "
                    "Install with: pip install anthropic"
                )
            if not self.api_key:
                raise LLMConfigurationError("Anthropic API key is required.")
            self._client = anthropic.Anthropic(
                api_key=self.api_key, timeout=self.timeout, max_retries=0,
            )
        return self._client

    def generate(self, prompt: str) -> LLMResponse:
        """Send the prompt to Claude as a single user message.

        Only temperature and top-k are forwarded; newer Claude models reject
        temperature and top-p together.
        """
        client = self._ensure_client()

        start_time = time.time()
        try:
            response = client.messages.create(
                model=self.model,
                max_tokens=GENERATION_CONFIG["max_output_tokens"],
                temperature=GENERATION_CONFIG["temperature"],
                top_k=GENERATION_CONFIG["top_k"],
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIConnectionError as e:
            raise LLMTransportError(f"Could not reach Anthropic: {e}") from e
        except anthropic.APIStatusError as e:
            raise LLMStatusError(
                f"Anthropic returned HTTP {e.status_code}", status_code=e.status_code,
            ) from e
        except anthropic.APIError as e:
            raise LLMDecodeError(f"Unexpected Anthropic response: {type(e).__name__}") from e
        latency_ms = int((time.time() - start_time) * 1000)

        # Tool-use and thinking blocks carry no text
        content = "".join(getattr(block, "text", "") for block in response.content)
        if not content.strip():
            raise LLMEmptyOutputError("Claude returned no text content")

        logger.info(
            f"Claude LLM response: model={self.model}, "
            f"stop_reason={response.stop_reason}, "
            f"content_len={len(content)}, latency={latency_ms}ms"
        )

        return LLMResponse(
            content=content,
            model=self.model,
            provider=self.PROVIDER_NAME,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            latency_ms=latency_ms,
            finish_reason=response.stop_reason or "",
        )
