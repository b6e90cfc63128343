"""
Delivery of streamed events to the consumer.

Every streaming request runs as one background ``asyncio.Task``. Decoded
events and exactly one terminal message are put on a recipient queue:

- push mode (:class:`StreamTask`) hands the queue to the caller, who runs
  their own receive loop;
- pull mode (:class:`EventStream`) wraps the same queue in a lazy async
  iterator with a per-pull timeout.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

from ..core.logging import logger

PULL_TIMEOUT = 30.0


@dataclass
class StreamMessage:
    """Base for all messages put on a recipient queue."""
    request_id: str


@dataclass
class ChunkMessage(StreamMessage):
    """One decoded event, forwarded as soon as it was parsed."""
    chunk: Dict[str, Any]


@dataclass
class CompletedMessage(StreamMessage):
    """The task finished; ``response`` is the fully merged accumulator."""
    response: Any


@dataclass
class FailedMessage(StreamMessage):
    """The task raised ``error``. No partial response is delivered."""
    error: BaseException


@dataclass
class DownMessage(StreamMessage):
    """The task was cancelled before it could finish."""
    reason: str = "cancelled"


def monitor(task: asyncio.Task, request_id: str, recipient: asyncio.Queue) -> Callable[[asyncio.Task], None]:
    """
    Post the terminal message for ``task`` to ``recipient`` once it is done.

    Returns the registered callback so it can be removed again with
    ``task.remove_done_callback``.
    """
    def on_done(finished: asyncio.Task):
        if finished.cancelled():
            message = DownMessage(request_id)
        elif finished.exception() is not None:
            message = FailedMessage(request_id, finished.exception())
        else:
            message = CompletedMessage(request_id, finished.result())
        recipient.put_nowait(message)

    task.add_done_callback(on_done)
    return on_done


RequestRunner = Callable[[asyncio.Queue], Awaitable[Any]]


class StreamTask:
    """
    Handle of a push mode request.

    ``inbox`` receives a :class:`ChunkMessage` per event followed by one
    :class:`CompletedMessage`, :class:`FailedMessage` or :class:`DownMessage`.
    Awaiting the handle returns the merged response or raises the failure.
    """

    def __init__(self, runner: RequestRunner, request_id: str, inbox: Optional[asyncio.Queue] = None):
        self.request_id = request_id
        self.inbox = inbox if inbox is not None else asyncio.Queue()
        self.task = asyncio.create_task(runner(self.inbox), name=f"chatbridge-{request_id}")
        monitor(self.task, request_id, self.inbox)

    def __await__(self):
        return self.task.__await__()

    def done(self) -> bool:
        return self.task.done()

    def cancel(self) -> bool:
        return self.task.cancel()


class EventStream:
    """
    Lazy, single-use async iterator over the events of one request.

    The background task starts on the first pull. Each pull waits at most
    ``timeout`` seconds; iteration ends without error on completion, on
    cancellation of the task and on timeout, and re-raises the task's error
    on failure. Ending early (timeout, ``aclose()``, leaving ``async with``)
    cancels the background task.
    """

    def __init__(self, runner: RequestRunner, request_id: str, timeout: float = PULL_TIMEOUT):
        self.request_id = request_id
        self.timeout = timeout
        self._runner = runner
        self._queue: Optional[asyncio.Queue] = None
        self._task: Optional[asyncio.Task] = None
        self._on_done = None
        self._finished = False

    @property
    def task(self) -> Optional[asyncio.Task]:
        return self._task

    def __aiter__(self):
        return self

    async def __anext__(self) -> Dict[str, Any]:
        if self._finished:
            raise StopAsyncIteration

        if self._task is None:
            self._queue = asyncio.Queue()
            self._task = asyncio.create_task(self._runner(self._queue), name=f"chatbridge-{self.request_id}")
            self._on_done = monitor(self._task, self.request_id, self._queue)

        try:
            message = await asyncio.wait_for(self._queue.get(), self.timeout)
        except asyncio.TimeoutError:
            logger.warning(
                f"No stream message within {self.timeout}s, ending stream",
                request_id=self.request_id,
                component="event_stream"
            )
            self._release()
            raise StopAsyncIteration

        if isinstance(message, ChunkMessage):
            return message.chunk

        self._release()
        if isinstance(message, FailedMessage):
            raise message.error
        raise StopAsyncIteration

    def _release(self):
        self._finished = True
        if self._task is None:
            return
        if self._on_done is not None:
            self._task.remove_done_callback(self._on_done)
            self._on_done = None
        if not self._task.done():
            logger.debug("Stream abandoned, cancelling request task", request_id=self.request_id, component="event_stream")
            self._task.cancel()

    async def aclose(self):
        self._release()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()
