from typing import Any, Dict, List

from .base import BaseProvider, Endpoint, HeaderValue
from ..schemas.openai import OpenAIChatRequest
from ..streaming.framing import ParsedChunk, StreamSignal, decode_frame, split_lines
from ..streaming.merge import concat, merge_with, merge_indexed

DONE_SENTINEL = "[DONE]"


class OpenAICompatibleProvider(BaseProvider):
    """
    OpenAI Chat Completions API.

    Many services mirror this API; point the provider at them with the
    ``base_url`` init option. ``organization_id`` and ``project_id`` set the
    matching OpenAI headers.
    """

    name = "openai"
    default_base_url = "https://api.openai.com/v1"
    base_url_configurable = True
    api_key_env = "OPENAI_API_KEY"

    def request_headers(self, options=None) -> Dict[str, HeaderValue]:
        headers = {"content-type": "application/json"}
        if self.config.get("organization_id"):
            headers["openai-organization"] = self.config["organization_id"]
        if self.config.get("project_id"):
            headers["openai-project"] = self.config["project_id"]
        if self.api_key:
            headers["authorization"] = f"Bearer {self.api_key}"
        return headers

    def resolve_endpoint(self, options: Dict[str, Any]) -> Endpoint:
        return "/chat/completions", {}

    def resolve_stream_endpoint(self, options: Dict[str, Any]) -> Endpoint:
        return "/chat/completions", {"stream": True}

    def schema(self):
        return OpenAIChatRequest

    def parse_chunk(self, data: str) -> ParsedChunk:
        lines, remainder = split_lines(data)
        events = []
        for line in lines:
            if not line.startswith("data:"):
                continue
            payload = line[len("data:"):].strip()
            if payload == DONE_SENTINEL:
                return ParsedChunk(StreamSignal.HALT, events, "")
            if payload.startswith("{"):
                events.append(decode_frame(payload, self.name))
        return ParsedChunk(StreamSignal.CONTINUE, events, remainder)

    def merge_event(self, accumulator: Any, event: Dict[str, Any]) -> Dict[str, Any]:
        return merge_with(accumulator, event, {"choices": merge_choices})


def merge_choices(stored: List[Dict[str, Any]], incoming: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    # Choices of an n > 1 request arrive interleaved and out of order
    return merge_indexed(stored, incoming, merge_choice)


def merge_choice(stored: Dict[str, Any], choice: Dict[str, Any]) -> Dict[str, Any]:
    choice = dict(choice)
    if "delta" in choice:
        choice["message"] = choice.pop("delta")
    return merge_with(stored, choice, {"message": merge_message})


def merge_message(stored: Dict[str, Any], message: Dict[str, Any]) -> Dict[str, Any]:
    return merge_with(stored, message or {}, {
        "content": concat,
        "tool_calls": merge_tool_calls,
    })


def merge_tool_calls(stored: List[Dict[str, Any]], incoming: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return merge_indexed(stored, incoming, merge_tool_call)


def merge_tool_call(stored: Dict[str, Any], call: Dict[str, Any]) -> Dict[str, Any]:
    return merge_with(stored, call, {
        "function": lambda prev, nxt: merge_with(prev, nxt or {}, {"arguments": concat}),
    })
