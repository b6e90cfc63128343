from typing import Any, Dict

from .base import BaseProvider, Endpoint, HeaderValue
from ..schemas.ollama import OllamaChatRequest
from ..streaming.framing import ParsedChunk, StreamSignal, split_json_objects
from ..streaming.merge import concat, merge_with


class OllamaProvider(BaseProvider):
    """Ollama chat API (``/api/chat``), streamed as newline separated JSON objects."""

    name = "ollama"
    default_base_url = "http://localhost:11434/api"
    base_url_configurable = True

    def request_headers(self, options=None) -> Dict[str, HeaderValue]:
        return {"content-type": "application/json"}

    def resolve_endpoint(self, options: Dict[str, Any]) -> Endpoint:
        return "/chat", {}

    def resolve_stream_endpoint(self, options: Dict[str, Any]) -> Endpoint:
        return "/chat", {"stream": True}

    def schema(self):
        return OllamaChatRequest

    def parse_chunk(self, data: str) -> ParsedChunk:
        events, remainder = split_json_objects(data, self.name)
        return ParsedChunk(StreamSignal.CONTINUE, events, remainder)

    def merge_event(self, accumulator: Any, event: Dict[str, Any]) -> Dict[str, Any]:
        return merge_with(accumulator, event, {
            "message": lambda prev, nxt: merge_with(prev, nxt or {}, {"content": concat}),
        })
