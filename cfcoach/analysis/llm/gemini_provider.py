"""
Google Gemini LLM provider.

Calls the ``generateContent`` REST endpoint directly with requests and uses
the first text part of the first candidate.
"""
from __future__ import annotations

import logging
import time
from urllib.parse import urlparse

import requests

from . import register_provider
from .base import (
    BaseLLMProvider,
    LLMConfigurationError,
    LLMDecodeError,
    LLMEmptyOutputError,
    LLMResponse,
    LLMStatusError,
    LLMTransportError,
)
from .config import DEFAULT_TIMEOUT_SECONDS, GEMINI_BASE_URL, GENERATION_CONFIG, get_default_model

logger = logging.getLogger(__name__)


@register_provider
class GeminiProvider(BaseLLMProvider):
    """Google Gemini provider over plain HTTPS."""

    PROVIDER_NAME = "gemini"
    DEFAULT_MODEL = get_default_model("gemini")

    def __init__(
        self,
        api_key: str = None,
        model: str = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        base_url: str = None,
        session: requests.Session = None,
    ):
        super().__init__(api_key=api_key, model=model, timeout=timeout)
        self.base_url = (base_url or GEMINI_BASE_URL).rstrip("/")
        self.session = session or requests.Session()

    def endpoint(self) -> str:
        """Return the generateContent URL for the configured model.

        Raises:
            LLMConfigurationError: If the base URL or API key is unusable.
        """
        parsed = urlparse(self.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise LLMConfigurationError(f"Malformed Gemini endpoint: {self.base_url!r}")
        if not self.api_key:
            raise LLMConfigurationError("Gemini API key is required.")
        return f"{self.base_url}/{self.model}:generateContent"

    @staticmethod
    def build_payload(prompt: str) -> dict:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": GENERATION_CONFIG["temperature"],
                "topK": GENERATION_CONFIG["top_k"],
                "topP": GENERATION_CONFIG["top_p"],
                "maxOutputTokens": GENERATION_CONFIG["max_output_tokens"],
            },
        }

    @staticmethod
    def extract_text(data) -> tuple[str, str]:
        """Pull ``(text, finish_reason)`` out of a decoded response body.

        Raises:
            LLMDecodeError: The body does not follow the candidates schema.
            LLMEmptyOutputError: No candidate text is present.
        """
        if not isinstance(data, dict) or not isinstance(data.get("candidates"), list):
            raise LLMDecodeError("Gemini response has no candidates list")
        candidates = data["candidates"]
        if not candidates:
            raise LLMEmptyOutputError("Gemini returned no candidates")

        first = candidates[0]
        try:
            parts = first["content"]["parts"]
        except (KeyError, TypeError) as e:
            raise LLMDecodeError(f"Gemini candidate is missing content parts: {e}") from e
        if not isinstance(parts, list):
            raise LLMDecodeError("Gemini candidate parts is not a list")
        if not parts:
            raise LLMEmptyOutputError("Gemini candidate has no parts")

        text = parts[0].get("text") if isinstance(parts[0], dict) else None
        if not isinstance(text, str):
            raise LLMDecodeError("Gemini candidate part has no text")
        if not text.strip():
            raise LLMEmptyOutputError("Gemini candidate text is empty")
        return text, first.get("finishReason") or ""

    def generate(self, prompt: str) -> LLMResponse:
        """Send the prompt to Gemini.

        Args:
            prompt: Full prompt text.

        Returns:
            LLMResponse with the first candidate's first text part.

        Raises:
            LLMConfigurationError, LLMTransportError, LLMStatusError,
            LLMDecodeError, LLMEmptyOutputError.
        """
        url = self.endpoint()

        start_time = time.time()
        try:
            resp = self.session.post(
                url,
                params={"key": self.api_key},
                json=self.build_payload(prompt),
                timeout=self.timeout,
            )
        except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema) as e:
            raise LLMConfigurationError(f"Malformed Gemini endpoint: {e}") from e
        except requests.RequestException as e:
            logger.warning(f"Gemini request failed: {type(e).__name__}")
            raise LLMTransportError(f"Could not reach Gemini: {type(e).__name__}") from e
        latency_ms = int((time.time() - start_time) * 1000)

        if resp.status_code != 200:
            logger.warning(
                f"Gemini returned HTTP {resp.status_code} "
                f"(model={self.model}, latency={latency_ms}ms)"
            )
            raise LLMStatusError(
                f"Gemini returned HTTP {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise LLMDecodeError("Gemini response is not valid JSON") from e

        text, finish_reason = self.extract_text(data)
        usage = data.get("usageMetadata") or {}

        logger.info(
            f"Gemini LLM response: model={self.model}, "
            f"finish_reason={finish_reason}, "
            f"content_len={len(text)}, "
            f"latency={latency_ms}ms"
        )

        return LLMResponse(
            content=text,
            model=self.model,
            provider=self.PROVIDER_NAME,
            input_tokens=usage.get("promptTokenCount", 0) or 0,
            output_tokens=usage.get("candidatesTokenCount", 0) or 0,
            latency_ms=latency_ms,
            finish_reason=finish_reason,
        )
