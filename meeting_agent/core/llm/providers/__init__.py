# meeting_agent/core/llm/providers/__init__.py

from __future__ import annotations

import importlib
import logging
from typing import Callable, Dict, Type

from meeting_agent.config import settings
from .base import BaseLLMProvider

log = logging.getLogger(__name__)


def _lazy_import(module_suffix: str, class_name: str) -> Type[BaseLLMProvider]:
    module_name = f"{__name__}{module_suffix}"
    try:
        module = importlib.import_module(module_name)
        provider_class = getattr(module, class_name)
        if not issubclass(provider_class, BaseLLMProvider):
            raise TypeError(f"Class {class_name} is not a subclass of BaseLLMProvider")  # pragma: no cover
        log.debug("Successfully lazy-imported %s from %s", class_name, module_name)
        return provider_class
    except (ModuleNotFoundError, AttributeError) as e:
        log.error("Failed to lazy-import provider '%s%s': %s", module_suffix, class_name, e)
        raise ImportError(f"Could not import provider {class_name} from {module_name}") from e


# --- Registry of available providers ---
_PROVIDER_LOADERS: Dict[str, Callable[[], Type[BaseLLMProvider]]] = {
    "stub": lambda: _lazy_import(".stub", "StubLLMProvider"),
    "gemini": lambda: _lazy_import(".gemini", "GeminiLLMProvider"),
    "openai": lambda: _lazy_import(".openai", "OpenAILLMProvider"),
}

_provider_instance: BaseLLMProvider | None = None


def get_llm_provider() -> BaseLLMProvider:
    """Factory returning the SINGLE LLM provider instance."""
    global _provider_instance
    if _provider_instance is None:
        provider_key = settings.LLM_PROVIDER.lower()
        log.info("Attempting to initialize LLM provider: %s", provider_key)
        loader = _PROVIDER_LOADERS.get(provider_key)
        if not loader:
            raise ValueError(f"Unknown LLM provider: {settings.LLM_PROVIDER}")
        try:
            provider_class = loader()
            _provider_instance = provider_class()
            log.info("Successfully initialized LLM provider instance: %s", _provider_instance.name)
        except (ImportError, ValueError, RuntimeError, TypeError) as e:
            log.exception("Failed to initialize LLM provider '%s': %s", provider_key, e)
            raise ValueError(f"Failed to initialize LLM provider '{provider_key}': {e}") from e

    return _provider_instance


__all__ = [
    "BaseLLMProvider",
    "get_llm_provider",
]
