"""
LLM provider registry and factory.

Supports multiple text-generation backends (Gemini, Claude, OpenAI) via a
plugin architecture. Providers are auto-discovered from modules in this
package.
"""

import logging

from .base import (
    BaseLLMProvider,
    LLMConfigurationError,
    LLMDecodeError,
    LLMEmptyOutputError,
    LLMError,
    LLMResponse,
    LLMStatusError,
    LLMTransportError,
    UnavailableProvider,
)

logger = logging.getLogger(__name__)

PROVIDER_MODULE_SUFFIX = "_provider"

_registry: dict[str, type] = {}


def register_provider(cls):
    """Class decorator adding a provider under its ``PROVIDER_NAME``."""
    _registry[cls.PROVIDER_NAME.lower()] = cls
    return cls


def get_provider(name: str, api_key: str = None, **kwargs):
    """Build the provider registered as ``name``.

    Args:
        name: Provider name, case-insensitive (e.g. 'gemini', 'claude', 'openai').
        api_key: API key handed to the provider constructor.
        **kwargs: Extra constructor arguments (model, timeout, base_url).

    Returns:
        A ready-to-use provider instance.

    Raises:
        LLMConfigurationError: If nothing is registered under ``name``.
    """
    key = (name or "").strip().lower()
    provider_cls = _registry.get(key)
    if provider_cls is None:
        raise LLMConfigurationError(
            f"Unknown AI provider '{name}'. Registered: {', '.join(sorted(_registry)) or 'none'}"
        )
    logger.debug(f"Building {key} provider with options {sorted(kwargs)}")
    return provider_cls(api_key=api_key, **kwargs)


def get_available_providers():
    """Registered provider classes keyed by name."""
    return dict(_registry)


# Import every *_provider module so its class registers itself
import importlib
import os
import pkgutil

for _, _module_name, _ in pkgutil.iter_modules([os.path.dirname(__file__)]):
    if not _module_name.endswith(PROVIDER_MODULE_SUFFIX):
        continue
    try:
        importlib.import_module(f".{_module_name}", package=__package__)
    except Exception as e:
        logger.warning(f"Skipping AI provider module {_module_name}: {e}")
