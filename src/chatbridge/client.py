"""
Dispatcher: turns caller options into provider requests.

``generate`` performs one blocking request, ``start_stream`` (push mode) and
``stream`` (pull mode) run a streaming request in a background task whose
events are merged into the same document the blocking endpoint returns.
"""
import asyncio
import os
import time
import uuid
from typing import Any, Dict, Optional, Tuple, Type, Union

import httpx

from .core.config_manager import ConfigManager
from .core.error_handling import ErrorHandler, ErrorContext
from .core.logging import logger
from .providers import BaseProvider, get_provider_class
from .streaming import (
    PULL_TIMEOUT,
    ChunkMessage,
    EventStream,
    StreamBuffer,
    StreamSignal,
    StreamTask,
)
from .transport import Transport, TransportResponse
from .utils.deep_merge import deep_merge
from .validation import validate
from .version import __version__

USER_AGENT = f"chatbridge/{__version__}"
DEFAULT_RECEIVE_TIMEOUT = 60.0


class Client:
    """An initialised provider bound to its transport."""

    def __init__(self, provider: BaseProvider, transport: Transport):
        self.provider = provider
        self.transport = transport

    def __repr__(self):
        return f"Client(provider={self.provider!r})"


def init(
    provider: Union[str, Type[BaseProvider]],
    config_manager: Optional[ConfigManager] = None,
    **init_opts
) -> Client:
    """
    Initialise a client for ``provider``.

    Init options are handed to the provider (``api_key``, ``base_url``, ...)
    except for the transport settings ``headers``, ``receive_timeout``,
    ``http_client`` and ``transport``. Options from ``config_manager`` are
    used as defaults for the explicit ones; a provider class is looked up
    there by its ``name``. Without an ``api_key`` the
    provider's environment variable is read once, here.
    """
    provider_class = get_provider_class(provider)

    options: Dict[str, Any] = {}
    if config_manager is not None:
        options = config_manager.provider_options(provider if isinstance(provider, str) else provider_class.name)
    options = deep_merge(options, init_opts)

    if not options.get("api_key") and provider_class.api_key_env:
        api_key = os.environ.get(provider_class.api_key_env)
        if api_key:
            options["api_key"] = api_key

    receive_timeout = options.pop("receive_timeout", DEFAULT_RECEIVE_TIMEOUT)
    http_client: Optional[httpx.AsyncClient] = options.pop("http_client", None)
    transport: Optional[httpx.AsyncBaseTransport] = options.pop("transport", None)
    extra_headers = options.pop("headers", None) or {}

    instance = provider_class(options)

    headers = {"user-agent": USER_AGENT}
    headers.update(instance.request_headers())
    headers.update({name.lower(): value for name, value in extra_headers.items()})

    logger.debug(
        f"Initialised {provider_class.__name__}",
        provider_name=instance.name,
        base_url=instance.base_url(),
        has_api_key=bool(instance.api_key)
    )

    return Client(
        instance,
        Transport(
            base_url=instance.base_url(),
            headers=headers,
            provider_name=instance.name,
            receive_timeout=receive_timeout,
            http_client=http_client,
            transport=transport,
        ),
    )


def _new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


def _prepare(client: Client, options: Dict[str, Any], streaming: bool, request_id: str) -> Tuple[str, Dict[str, Any], ErrorContext]:
    """Validate options and resolve (path, body). Raises before any network activity."""
    provider = client.provider
    context = ErrorContext(request_id=request_id, provider_name=provider.name, model_id=options.get("model"))

    validated = validate(options, provider.schema(), context)
    if streaming:
        path, defaults = provider.resolve_stream_endpoint(validated)
    else:
        path, defaults = provider.resolve_endpoint(validated)

    # Caller options win over endpoint defaults
    body = provider.build_body({**defaults, **validated})
    context.url = f"{client.transport.base_url}{path}"
    return path, body, context


def _raise_for_status(response: TransportResponse, context: ErrorContext):
    if 200 <= response.status < 300:
        return
    body = response.body
    error = body.get("error", body) if isinstance(body, dict) else body
    raise ErrorHandler.handle_provider_http_error(response.status, error, context)


async def generate(client: Client, **options) -> Dict[str, Any]:
    """Send one blocking request and return the decoded response body."""
    request_id = _new_request_id()
    path, body, context = _prepare(client, options, False, request_id)

    start_time = time.time()
    logger.request("generate", request_id, provider_name=client.provider.name, model_id=context.model_id)

    response = await client.transport.perform_request(path, body, request_id=request_id)
    _raise_for_status(response, context)

    logger.response(
        "generate",
        request_id,
        status_code=response.status,
        processing_time_ms=int((time.time() - start_time) * 1000)
    )
    return response.body


def _stream_runner(client: Client, options: Dict[str, Any], request_id: str):
    """Validate now and return the coroutine function run by the request task."""
    provider = client.provider
    path, body, context = _prepare(client, options, True, request_id)

    async def run(recipient: asyncio.Queue) -> Any:
        buffer = StreamBuffer()
        accumulator = None
        event_count = 0

        def collect(chunk: bytes) -> StreamSignal:
            nonlocal accumulator, event_count
            parsed = provider.parse_chunk(buffer.feed(chunk))
            for event in parsed.events:
                recipient.put_nowait(ChunkMessage(request_id, event))
                accumulator = provider.merge_event(accumulator, event)
                event_count += 1
            buffer.keep(parsed.remainder)
            return parsed.signal

        start_time = time.time()
        logger.request("stream", request_id, provider_name=provider.name, model_id=context.model_id)

        response = await client.transport.perform_request(path, body, on_chunk=collect, request_id=request_id)
        _raise_for_status(response, context)

        leftover = buffer.get_remaining_data()
        if leftover.strip():
            logger.debug_data(
                title="Discarded incomplete stream frame",
                data={"leftover": leftover},
                request_id=request_id,
                component="dispatcher"
            )

        logger.response(
            "stream",
            request_id,
            status_code=response.status,
            processing_time_ms=int((time.time() - start_time) * 1000),
            event_count=event_count
        )
        return provider.finish_stream(accumulator)

    return run


def start_stream(client: Client, stream_to: Optional[asyncio.Queue] = None, **options) -> StreamTask:
    """
    Start a streaming request and push its messages to ``stream_to``.

    Must be called with a running event loop. Invalid options raise
    immediately; everything else is delivered as a terminal message.
    """
    request_id = _new_request_id()
    runner = _stream_runner(client, options, request_id)
    return StreamTask(runner, request_id, inbox=stream_to)


def stream(client: Client, timeout: float = PULL_TIMEOUT, **options) -> EventStream:
    """Return a lazy async iterator over the decoded events of a streaming request."""
    request_id = _new_request_id()
    runner = _stream_runner(client, options, request_id)
    return EventStream(runner, request_id, timeout=timeout)
