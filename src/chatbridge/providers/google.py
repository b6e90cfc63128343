import re
from typing import Any, Dict, List

from pydantic.alias_generators import to_camel

from .base import BaseProvider, Endpoint, HeaderValue
from ..schemas.google import GoogleGenerateRequest
from ..streaming.framing import ParsedChunk, StreamSignal, decode_frame, scan_frames
from ..streaming.merge import merge_with, merge_indexed, merge_keyed_parts

FRAME_PATTERN = re.compile(r"data:\s*(\{.+\})(?:\r\n\r\n|\n\n|\r\r)")

# Option name -> request body key
RENAMED_OPTIONS = {
    "system": "system_instruction",
    "safety": "safety_settings",
    "generation": "generation_config",
}


# Free-form user data; keys below these are sent as given
VERBATIM_KEYS = {"parameters", "args", "response", "response_schema"}


def camelize_keys(value: Any) -> Any:
    """Recursively convert every dict key to camelCase."""
    if isinstance(value, dict):
        return {
            to_camel(str(key)): item if key in VERBATIM_KEYS else camelize_keys(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [camelize_keys(item) for item in value]
    return value


class GoogleProvider(BaseProvider):
    """Google Gemini API."""

    name = "google"
    default_base_url = "https://generativelanguage.googleapis.com/v1beta"
    api_key_env = "GOOGLE_API_KEY"

    def request_headers(self, options=None) -> Dict[str, HeaderValue]:
        headers = {"content-type": "application/json"}
        if self.api_key:
            headers["x-goog-api-key"] = self.api_key
        return headers

    def resolve_endpoint(self, options: Dict[str, Any]) -> Endpoint:
        return f"/models/{options['model']}:generateContent", {}

    def resolve_stream_endpoint(self, options: Dict[str, Any]) -> Endpoint:
        return f"/models/{options['model']}:streamGenerateContent?alt=sse", {}

    def schema(self):
        return GoogleGenerateRequest

    def build_body(self, options: Dict[str, Any]) -> Dict[str, Any]:
        body = {key: options[key] for key in ("contents", "tools", "tool_config") if key in options}
        for option, key in RENAMED_OPTIONS.items():
            if options.get(option):
                body[key] = options[option]
        return camelize_keys(body)

    def parse_chunk(self, data: str) -> ParsedChunk:
        matches, remainder = scan_frames(FRAME_PATTERN, data, "data:")
        events = [decode_frame(match.group(1), self.name) for match in matches]
        return ParsedChunk(StreamSignal.CONTINUE, events, remainder)

    def merge_event(self, accumulator: Any, event: Dict[str, Any]) -> Dict[str, Any]:
        return merge_with(accumulator, event, {"candidates": merge_candidates})


def merge_candidates(stored: List[Dict[str, Any]], incoming: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    # Candidates arrive out of order when candidateCount > 1
    return merge_indexed(stored, incoming, merge_candidate)


def merge_candidate(stored: Dict[str, Any], candidate: Dict[str, Any]) -> Dict[str, Any]:
    return merge_with(stored, candidate, {
        "content": lambda prev, nxt: merge_with(prev, nxt or {}, {
            "parts": lambda old, new: merge_keyed_parts((old or []) + (new or [])),
        }),
    })
