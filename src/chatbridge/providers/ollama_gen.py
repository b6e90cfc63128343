from typing import Any, Dict

from .base import BaseProvider, Endpoint, HeaderValue
from .ollama import OllamaProvider
from ..schemas.ollama import OllamaGenerateRequest
from ..streaming.framing import ParsedChunk
from ..streaming.merge import concat, merge_with


class OllamaGenProvider(BaseProvider):
    """
    Ollama completion API (``/api/generate``).

    Transport details (base url, headers, body, chunk parsing) are those of
    :class:`OllamaProvider`; only endpoints, schema and merging differ.
    """

    name = "ollama_gen"
    default_base_url = OllamaProvider.default_base_url
    base_url_configurable = True

    def __init__(self, config=None):
        super().__init__(config)
        self.chat = OllamaProvider(self.config)

    def base_url(self, options=None) -> str:
        return self.chat.base_url(options)

    def request_headers(self, options=None) -> Dict[str, HeaderValue]:
        return self.chat.request_headers(options)

    def build_body(self, options: Dict[str, Any]) -> Dict[str, Any]:
        return self.chat.build_body(options)

    def parse_chunk(self, data: str) -> ParsedChunk:
        return self.chat.parse_chunk(data)

    def resolve_endpoint(self, options: Dict[str, Any]) -> Endpoint:
        return "/generate", {}

    def resolve_stream_endpoint(self, options: Dict[str, Any]) -> Endpoint:
        return "/generate", {"stream": True}

    def schema(self):
        return OllamaGenerateRequest

    def merge_event(self, accumulator: Any, event: Dict[str, Any]) -> Dict[str, Any]:
        return merge_with(accumulator, event, {"response": concat})
