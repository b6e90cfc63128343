from typing import Any, Dict, Optional, Type, Union

from .base import BaseProvider
from .openai import OpenAICompatibleProvider
from .anthropic import AnthropicProvider
from .google import GoogleProvider
from .ollama import OllamaProvider
from .ollama_gen import OllamaGenProvider
from ..core.error_handling import ErrorHandler, ErrorContext

PROVIDERS: Dict[str, Type[BaseProvider]] = {
    "openai": OpenAICompatibleProvider,
    "anthropic": AnthropicProvider,
    "google": GoogleProvider,
    "ollama": OllamaProvider,
    "ollama_gen": OllamaGenProvider,
}


def get_provider_class(provider: Union[str, Type[BaseProvider]]) -> Type[BaseProvider]:
    if isinstance(provider, type) and issubclass(provider, BaseProvider):
        return provider
    try:
        return PROVIDERS[provider]
    except (KeyError, TypeError):
        raise ErrorHandler.handle_provider_not_found(
            provider_name=str(provider),
            context=ErrorContext()
        ) from None


def get_provider_instance(provider: Union[str, Type[BaseProvider]], provider_config: Optional[Dict[str, Any]] = None) -> BaseProvider:
    return get_provider_class(provider)(provider_config)


__all__ = [
    'BaseProvider',
    'OpenAICompatibleProvider',
    'AnthropicProvider',
    'GoogleProvider',
    'OllamaProvider',
    'OllamaGenProvider',
    'PROVIDERS',
    'get_provider_class',
    'get_provider_instance',
]
