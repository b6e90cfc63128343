"""Mock provider helpers shared by the test suite."""

import asyncio
import json
from typing import Any, Dict, Iterable, List, Optional

import httpx

from chatbridge.streaming import ChunkMessage


def stream_body(chunks: Iterable[Any], delay: float = 0.0, hang: bool = False):
    """
    Async byte stream yielding ``chunks`` one read at a time.

    With ``hang`` the stream stalls after the last chunk until cancelled.
    """
    async def body():
        for chunk in chunks:
            if delay:
                await asyncio.sleep(delay)
            yield chunk.encode("utf-8") if isinstance(chunk, str) else chunk
        if hang:
            await asyncio.sleep(3600)
    return body()


class RecordingHandler:
    """MockTransport handler that records requests and replays one canned response."""

    def __init__(self, status: int = 200, json_body: Any = None, chunks: Optional[Iterable[Any]] = None, **stream_opts):
        self.status = status
        self.json_body = json_body
        self.chunks = chunks
        self.stream_opts = stream_opts
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.chunks is not None:
            return httpx.Response(self.status, content=stream_body(self.chunks, **self.stream_opts))
        return httpx.Response(self.status, json=self.json_body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_body(self) -> Dict[str, Any]:
        return json.loads(self.last_request.content)


def sse(*events: Dict[str, Any]) -> List[str]:
    """OpenAI style ``data:`` lines, terminated by the [DONE] sentinel."""
    return [f"data: {json.dumps(event, ensure_ascii=False)}\n\n" for event in events] + ["data: [DONE]\n\n"]


def anthropic_sse(*events: Dict[str, Any]) -> List[str]:
    return [f"event: {event['type']}\ndata: {json.dumps(event, ensure_ascii=False)}\n\n" for event in events]


def google_sse(*events: Dict[str, Any]) -> List[str]:
    return [f"data: {json.dumps(event, ensure_ascii=False)}\r\n\r\n" for event in events]


def ndjson(*events: Dict[str, Any]) -> List[str]:
    return [json.dumps(event, ensure_ascii=False) + "\n" for event in events]


async def drain(inbox: asyncio.Queue, timeout: float = 5.0) -> List[Any]:
    """Collect queue messages up to and including the terminal one."""
    messages = []
    while True:
        message = await asyncio.wait_for(inbox.get(), timeout)
        messages.append(message)
        if not isinstance(message, ChunkMessage):
            return messages
