import re
from typing import Any, Dict

from .base import BaseProvider, Endpoint, HeaderValue
from ..core.logging import logger
from ..schemas.anthropic import AnthropicMessagesRequest
from ..streaming.framing import ParsedChunk, StreamSignal, decode_frame, scan_frames
from ..streaming.merge import concat, merge_with

API_VERSION = "2023-06-01"

SSE_EVENTS = frozenset([
    "message_start",
    "content_block_start",
    "content_block_delta",
    "content_block_stop",
    "message_delta",
    "message_stop",
])

FRAME_PATTERN = re.compile(r"event:\s*(\w+)\r?\ndata:\s*(\{.+\})\r?\n")

# Partial tool input JSON is collected here until content_block_stop
PARTIAL_JSON_KEY = "_partial_json"


class AnthropicProvider(BaseProvider):
    """Anthropic Messages API (Claude models)."""

    name = "anthropic"
    default_base_url = "https://api.anthropic.com/v1"
    api_key_env = "ANTHROPIC_API_KEY"

    def request_headers(self, options=None) -> Dict[str, HeaderValue]:
        headers = {
            "content-type": "application/json",
            "anthropic-version": API_VERSION,
        }
        if self.api_key:
            headers["x-api-key"] = self.api_key
        return headers

    def resolve_endpoint(self, options: Dict[str, Any]) -> Endpoint:
        return "/messages", {}

    def resolve_stream_endpoint(self, options: Dict[str, Any]) -> Endpoint:
        return "/messages", {"stream": True}

    def schema(self):
        return AnthropicMessagesRequest

    def parse_chunk(self, data: str) -> ParsedChunk:
        matches, remainder = scan_frames(FRAME_PATTERN, data, "event:")
        events = []
        signal = StreamSignal.CONTINUE
        for match in matches:
            event_name, payload = match.group(1), match.group(2)
            if event_name not in SSE_EVENTS:
                logger.debug(f"Dropping Anthropic '{event_name}' event", component="anthropic_provider")
                continue
            events.append(decode_frame(payload, self.name))
            if event_name == "message_stop":
                signal = StreamSignal.HALT
        return ParsedChunk(signal, events, remainder)

    def merge_event(self, accumulator: Any, event: Dict[str, Any]) -> Any:
        event_type = event.get("type")

        if event_type == "message_start":
            return merge_with(None, event["message"])

        if accumulator is None:
            return accumulator

        if event_type == "content_block_start":
            content = list(accumulator.get("content") or [])
            content.insert(event["index"], merge_with(None, event["content_block"]))
            return {**accumulator, "content": content}

        if event_type == "content_block_delta":
            return _update_block(accumulator, event["index"], lambda block: _apply_delta(block, event["delta"]))

        if event_type == "content_block_stop":
            return _update_block(accumulator, event["index"], _finish_block)

        if event_type == "message_delta":
            merged = merge_with(accumulator, event.get("delta") or {})
            if "usage" in event:
                merged["usage"] = merge_with(accumulator.get("usage"), event["usage"])
            return merged

        return accumulator

    def finish_stream(self, accumulator: Any) -> Any:
        """Drops tool input left pending by a stream that ended before ``content_block_stop``."""
        if not accumulator or not accumulator.get("content"):
            return accumulator
        content = []
        for block in accumulator["content"]:
            if PARTIAL_JSON_KEY in block:
                logger.debug(
                    "Discarding unfinished tool input",
                    component="anthropic_provider",
                    block_type=block.get("type")
                )
                block = {key: value for key, value in block.items() if key != PARTIAL_JSON_KEY}
            content.append(block)
        return {**accumulator, "content": content}


def _update_block(accumulator: Dict[str, Any], index: int, update) -> Dict[str, Any]:
    content = list(accumulator.get("content") or [])
    if not 0 <= index < len(content):
        logger.warning(f"Anthropic delta for unknown content block {index}", component="anthropic_provider")
        return accumulator
    content[index] = update(content[index])
    return {**accumulator, "content": content}


def _apply_delta(block: Dict[str, Any], delta: Dict[str, Any]) -> Dict[str, Any]:
    delta_type = delta.get("type")
    if delta_type == "input_json_delta":
        return {**block, PARTIAL_JSON_KEY: concat(block.get(PARTIAL_JSON_KEY), delta.get("partial_json"))}
    if delta_type == "thinking_delta":
        return {**block, "thinking": concat(block.get("thinking"), delta.get("thinking"))}
    if delta_type == "signature_delta":
        return {**block, "signature": delta.get("signature")}
    return {**block, "text": concat(block.get("text"), delta.get("text"))}


def _finish_block(block: Dict[str, Any]) -> Dict[str, Any]:
    if PARTIAL_JSON_KEY not in block:
        return block
    block = dict(block)
    partial = block.pop(PARTIAL_JSON_KEY)
    if partial:
        block["input"] = decode_frame(partial, AnthropicProvider.name)
    return block
