"""
Base classes and failure types for LLM providers.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from .config import DEFAULT_TIMEOUT_SECONDS


@dataclass
class LLMResponse:
    """Standardized response from any LLM provider."""

    content: str
    model: str
    provider: str
    input_tokens: int = 0
    output_tokens: int = 0
    latency_ms: int = 0
    finish_reason: str = ""


class LLMError(Exception):
    """Base class for every failure of a single generation call.

    Attributes:
        kind: Short machine-readable failure kind.
        retryable: Whether re-running the call may succeed without a
            configuration change.
    """

    kind = "llm_error"
    retryable = True


class LLMConfigurationError(LLMError):
    """Malformed endpoint, missing API key or unavailable SDK."""

    kind = "configuration"
    retryable = False


class LLMTransportError(LLMError):
    """The request never produced an HTTP response (DNS, TLS, timeout...)."""

    kind = "transport"


class LLMStatusError(LLMError):
    """The service answered with a non-success status code."""

    kind = "status"

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class LLMDecodeError(LLMError):
    """The response body did not have the expected shape."""

    kind = "decode"


class LLMEmptyOutputError(LLMError):
    """The response decoded fine but carried no candidate text."""

    kind = "empty_output"


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers.

    Subclasses send one prompt per call with the fixed generation parameters
    from ``config.GENERATION_CONFIG`` and never retry internally.

    Args:
        api_key: Provider API key.
        model: Model identifier; provider default when None.
        timeout: Request timeout in seconds.
    """

    PROVIDER_NAME: str = ""
    DEFAULT_MODEL: str = ""

    def __init__(
        self,
        api_key: str = None,
        model: str = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self.timeout = timeout

    @abstractmethod
    def generate(self, prompt: str) -> LLMResponse:
        """Send a single prompt and return the first candidate's text.

        Args:
            prompt: Full prompt text.

        Returns:
            LLMResponse whose ``content`` is non-empty.

        Raises:
            LLMError: One of its subclasses, describing why the call failed.
        """
        ...


class UnavailableProvider(BaseLLMProvider):
    """Stand-in used when the configured provider cannot be built.

    Every ``generate`` call raises the original configuration error, so the
    failure shows up per call instead of preventing the app from starting.
    """

    PROVIDER_NAME = "unavailable"

    def __init__(self, error: LLMConfigurationError):
        super().__init__()
        self.error = error

    def generate(self, prompt: str) -> LLMResponse:
        raise LLMConfigurationError(str(self.error))
