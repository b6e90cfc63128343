"""
chatbridge: one chat-completion contract over several vendor APIs.

    import chatbridge

    client = chatbridge.init("openai")
    response = await chatbridge.generate(client, model="gpt-4o", messages=[...])

    async for event in chatbridge.stream(client, model="gpt-4o", messages=[...]):
        ...
"""

from .version import __version__
from .core.exceptions import (
    ChatBridgeError,
    RequestValidationError,
    APIError,
    ProviderNetworkError,
    ProviderStreamError,
    ProviderNotFoundError,
    ProviderConfigError,
)
from .core.config_manager import ConfigManager
from .providers import BaseProvider, get_provider_instance
from .streaming import (
    ChunkMessage,
    CompletedMessage,
    FailedMessage,
    DownMessage,
    StreamTask,
    EventStream,
)
from .client import Client, init, generate, start_stream, stream

__all__ = [
    '__version__',
    'Client',
    'init',
    'generate',
    'start_stream',
    'stream',
    'ConfigManager',
    'BaseProvider',
    'get_provider_instance',
    'ChunkMessage',
    'CompletedMessage',
    'FailedMessage',
    'DownMessage',
    'StreamTask',
    'EventStream',
    'ChatBridgeError',
    'RequestValidationError',
    'APIError',
    'ProviderNetworkError',
    'ProviderStreamError',
    'ProviderNotFoundError',
    'ProviderConfigError',
]
