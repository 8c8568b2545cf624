"""Tests for the LLM provider registry and providers with mocked transports."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
import requests

from cfcoach.analysis.llm import (
    LLMConfigurationError,
    LLMDecodeError,
    LLMEmptyOutputError,
    LLMStatusError,
    LLMTransportError,
    UnavailableProvider,
    get_available_providers,
    get_provider,
)
from cfcoach.analysis.llm.config import GENERATION_CONFIG
from cfcoach.analysis.llm.gemini_provider import GeminiProvider


def _gemini_body(text="SUGGESTION_1:\nTitle: T", finish="STOP"):
    return {
        "candidates": [
            {"content": {"parts": [{"text": text}], "role": "model"}, "finishReason": finish}
        ],
        "usageMetadata": {"promptTokenCount": 120, "candidatesTokenCount": 40},
    }


def _http_response(status_code=200, body=None, json_error=None):
    resp = MagicMock()
    resp.status_code = status_code
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = body
    return resp


def _gemini(session, **kwargs):
    kwargs.setdefault("api_key", "test-key")
    return GeminiProvider(session=session, timeout=5, **kwargs)


class TestRegistry:
    def test_gemini_is_registered(self):
        assert "gemini" in get_available_providers()

    def test_get_provider_passes_options(self):
        provider = get_provider("gemini", api_key="k", timeout=7, model="gemini-1.5-flash")
        assert isinstance(provider, GeminiProvider)
        assert provider.timeout == 7
        assert provider.model == "gemini-1.5-flash"

    def test_unknown_provider(self):
        with pytest.raises(LLMConfigurationError):
            get_provider("does-not-exist")


class TestGeminiProvider:
    def test_success(self):
        session = MagicMock()
        session.post.return_value = _http_response(body=_gemini_body("hello"))

        response = _gemini(session).generate("my prompt")

        assert response.content == "hello"
        assert response.provider == "gemini"
        assert response.input_tokens == 120
        assert response.finish_reason == "STOP"

        args, kwargs = session.post.call_args
        assert args[0].endswith("/gemini-pro:generateContent")
        assert kwargs["params"] == {"key": "test-key"}
        assert kwargs["timeout"] == 5
        payload = kwargs["json"]
        assert payload["contents"][0]["parts"][0]["text"] == "my prompt"
        assert payload["generationConfig"] == {
            "temperature": GENERATION_CONFIG["temperature"],
            "topK": 40,
            "topP": 0.95,
            "maxOutputTokens": 1024,
        }

    def test_uses_first_candidate_first_part(self):
        body = {
            "candidates": [
                {"content": {"parts": [{"text": "first"}, {"text": "second"}]}},
                {"content": {"parts": [{"text": "other"}]}},
            ]
        }
        session = MagicMock()
        session.post.return_value = _http_response(body=body)
        assert _gemini(session).generate("p").content == "first"

    @pytest.mark.parametrize("kwargs", [
        {"base_url": "not a url"},
        {"base_url": "ftp://example.com/models"},
        {"api_key": ""},
    ])
    def test_configuration_errors(self, kwargs):
        session = MagicMock()
        with pytest.raises(LLMConfigurationError) as exc:
            _gemini(session, **kwargs).generate("p")
        assert exc.value.retryable is False
        session.post.assert_not_called()

    @pytest.mark.parametrize("error", [
        requests.ConnectionError("refused"),
        requests.Timeout("slow"),
    ])
    def test_transport_errors(self, error):
        session = MagicMock()
        session.post.side_effect = error
        with pytest.raises(LLMTransportError) as exc:
            _gemini(session).generate("p")
        assert exc.value.retryable is True

    def test_transport_error_does_not_leak_key(self):
        session = MagicMock()
        session.post.side_effect = requests.ConnectionError("https://x?key=test-key")
        with pytest.raises(LLMTransportError) as exc:
            _gemini(session).generate("p")
        assert "test-key" not in str(exc.value)

    def test_status_error(self):
        session = MagicMock()
        session.post.return_value = _http_response(status_code=503)
        with pytest.raises(LLMStatusError) as exc:
            _gemini(session).generate("p")
        assert exc.value.status_code == 503

    def test_invalid_json(self):
        session = MagicMock()
        session.post.return_value = _http_response(json_error=ValueError("bad json"))
        with pytest.raises(LLMDecodeError):
            _gemini(session).generate("p")

    @pytest.mark.parametrize("body", [
        {"error": "nope"},
        [],
        {"candidates": [{"content": "text"}]},
        {"candidates": [{"content": {"parts": [{"inline": 1}]}}]},
    ])
    def test_decode_errors(self, body):
        session = MagicMock()
        session.post.return_value = _http_response(body=body)
        with pytest.raises(LLMDecodeError):
            _gemini(session).generate("p")

    @pytest.mark.parametrize("body", [
        {"candidates": []},
        {"candidates": [{"content": {"parts": []}}]},
        _gemini_body(text="   "),
    ])
    def test_empty_output(self, body):
        session = MagicMock()
        session.post.return_value = _http_response(body=body)
        with pytest.raises(LLMEmptyOutputError):
            _gemini(session).generate("p")


class TestClaudeProvider:
    def test_generate(self):
        pytest.importorskip("anthropic")
        from cfcoach.analysis.llm.claude_provider import ClaudeProvider

        provider = ClaudeProvider(api_key="k")
        provider._client = MagicMock()
        provider._client.messages.create.return_value = SimpleNamespace(
            content=[SimpleNamespace(text="SUGGESTION_1:")],
            usage=SimpleNamespace(input_tokens=10, output_tokens=5),
            stop_reason="end_turn",
        )

        response = provider.generate("p")
        assert response.content == "SUGGESTION_1:"
        kwargs = provider._client.messages.create.call_args.kwargs
        assert kwargs["max_tokens"] == 1024
        assert kwargs["messages"] == [{"role": "user", "content": "p"}]

    def test_status_error_mapped(self):
        anthropic = pytest.importorskip("anthropic")
        import httpx
        from cfcoach.analysis.llm.claude_provider import ClaudeProvider

        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        response = httpx.Response(529, request=request)
        provider = ClaudeProvider(api_key="k")
        provider._client = MagicMock()
        provider._client.messages.create.side_effect = anthropic.APIStatusError(
            "overloaded", response=response, body=None,
        )
        with pytest.raises(LLMStatusError) as exc:
            provider.generate("p")
        assert exc.value.status_code == 529

    def test_missing_key(self):
        pytest.importorskip("anthropic")
        from cfcoach.analysis.llm.claude_provider import ClaudeProvider

        with pytest.raises(LLMConfigurationError):
            ClaudeProvider(api_key="").generate("p")


class TestOpenAIProvider:
    def test_generate(self):
        pytest.importorskip("openai")
        from cfcoach.analysis.llm.openai_provider import OpenAIProvider

        provider = OpenAIProvider(api_key="k")
        provider._client = MagicMock()
        provider._client.chat.completions.create.return_value = SimpleNamespace(
            choices=[SimpleNamespace(
                message=SimpleNamespace(content="reply"), finish_reason="stop",
            )],
            usage=SimpleNamespace(prompt_tokens=3, completion_tokens=4),
        )
        response = provider.generate("p")
        assert response.content == "reply"
        assert response.output_tokens == 4

    def test_connection_error_mapped(self):
        openai = pytest.importorskip("openai")
        import httpx
        from cfcoach.analysis.llm.openai_provider import OpenAIProvider

        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        provider = OpenAIProvider(api_key="k")
        provider._client = MagicMock()
        provider._client.chat.completions.create.side_effect = openai.APIConnectionError(
            request=request,
        )
        with pytest.raises(LLMTransportError):
            provider.generate("p")

    def test_empty_content(self):
        pytest.importorskip("openai")
        from cfcoach.analysis.llm.openai_provider import OpenAIProvider

        provider = OpenAIProvider(api_key="k")
        provider._client = MagicMock()
        provider._client.chat.completions.create.return_value = SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=None), finish_reason="length")],
            usage=None,
        )
        with pytest.raises(LLMEmptyOutputError):
            provider.generate("p")


class TestUnexpectedSDKErrors:
    def test_claude_response_validation_error(self):
        anthropic = pytest.importorskip("anthropic")
        import httpx
        from cfcoach.analysis.llm.claude_provider import ClaudeProvider

        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        response = httpx.Response(200, request=request)
        provider = ClaudeProvider(api_key="k")
        provider._client = MagicMock()
        provider._client.messages.create.side_effect = anthropic.APIResponseValidationError(
            response=response, body=None,
        )
        with pytest.raises(LLMDecodeError):
            provider.generate("p")

    def test_openai_response_validation_error(self):
        openai = pytest.importorskip("openai")
        import httpx
        from cfcoach.analysis.llm.openai_provider import OpenAIProvider

        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        response = httpx.Response(200, request=request)
        provider = OpenAIProvider(api_key="k")
        provider._client = MagicMock()
        provider._client.chat.completions.create.side_effect = openai.APIResponseValidationError(
            response=response, body=None,
        )
        with pytest.raises(LLMDecodeError):
            provider.generate("p")


def test_unavailable_provider_reraises_configuration_error():
    provider = UnavailableProvider(LLMConfigurationError("Unknown AI provider 'bogus'"))
    with pytest.raises(LLMConfigurationError, match="bogus"):
        provider.generate("p")
