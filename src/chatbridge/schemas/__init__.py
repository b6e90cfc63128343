"""Request option schemas, one pydantic model per provider endpoint."""

from .base import StrictModel
from .openai import OpenAIChatRequest
from .anthropic import AnthropicMessagesRequest
from .google import GoogleGenerateRequest
from .ollama import OllamaChatRequest, OllamaGenerateRequest

__all__ = [
    'StrictModel',
    'OpenAIChatRequest',
    'AnthropicMessagesRequest',
    'GoogleGenerateRequest',
    'OllamaChatRequest',
    'OllamaGenerateRequest',
]
