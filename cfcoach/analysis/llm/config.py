"""
Generation parameters and model defaults for all supported LLM providers.

The generation parameters are fixed for every call; they are not tunable per
request.
"""
from __future__ import annotations

GENERATION_CONFIG = {
    "temperature": 0.7,
    "top_k": 40,
    "top_p": 0.95,
    "max_output_tokens": 1024,
}

# Explicit request timeout for every provider call, in seconds.
DEFAULT_TIMEOUT_SECONDS = 30.0

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

MODEL_CONFIG = {
    "gemini": {
        "default_model": "gemini-pro",
        "models": ["gemini-pro", "gemini-1.5-flash", "gemini-1.5-pro"],
    },
    "claude": {
        "default_model": "claude-haiku-4-5",
        "models": ["claude-haiku-4-5", "claude-opus-4-6"],
    },
    "openai": {
        "default_model": "gpt-4.1-mini",
        "models": ["gpt-4.1-mini", "gpt-5.2"],
    },
}


def get_default_model(provider: str) -> str | None:
    """Return the default model identifier for a provider, or None if unknown."""
    return MODEL_CONFIG.get(provider, {}).get("default_model")


def get_all_models_for_provider(provider: str) -> list[str]:
    """Return all model identifiers for a given provider."""
    return list(MODEL_CONFIG.get(provider, {}).get("models", []))
