"""
Chunk framing primitives shared by the provider chunk parsers.

A parser receives the decoded text of one network read (plus whatever was
left over from the previous read) and returns a :class:`ParsedChunk`.
Complete frames become events; the unconsumed tail is handed back as
``remainder`` so the caller can prepend it to the next read.
"""

import json
import re
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Pattern, Tuple

from ..core.error_handling import ErrorHandler, ErrorContext


class StreamSignal(Enum):
    """Tells the transport whether to keep reading."""
    CONTINUE = "cont"
    HALT = "halt"


class ParsedChunk(NamedTuple):
    signal: StreamSignal
    events: List[Dict[str, Any]]
    remainder: str = ""


def decode_frame(data: str, provider_name: Optional[str] = None) -> Dict[str, Any]:
    """Decode one JSON frame payload."""
    try:
        return json.loads(data)
    except json.JSONDecodeError as e:
        raise ErrorHandler.handle_provider_stream_error(
            error_details=f"Malformed stream frame: {data[:200]!r}",
            context=ErrorContext(provider_name=provider_name),
            original_exception=e
        ) from e


def split_lines(text: str) -> Tuple[List[str], str]:
    """Split text into complete lines and the trailing partial line."""
    *lines, remainder = text.split("\n")
    return [line.rstrip("\r") for line in lines], remainder


def scan_frames(pattern: Pattern, text: str, frame_start: str) -> Tuple[List[re.Match], str]:
    """
    Find every complete frame matching ``pattern``.

    Text after the last complete frame is kept as the remainder only from
    the first ``frame_start`` marker onwards (or from a marker cut off at the
    end of the read); anything before it can never become part of a frame.
    """
    matches = list(pattern.finditer(text))
    tail = text[matches[-1].end():] if matches else text
    start = tail.find(frame_start)
    if start < 0:
        start = _cut_marker_start(tail, frame_start)
    return matches, tail[start:]


def _cut_marker_start(tail: str, marker: str) -> int:
    """Position of a ``marker`` prefix cut off at the very end of ``tail``, else len(tail)."""
    for size in range(min(len(marker) - 1, len(tail)), 0, -1):
        if marker.startswith(tail[-size:]):
            return len(tail) - size
    return len(tail)


_decoder = json.JSONDecoder()


def split_json_objects(text: str, provider_name: Optional[str] = None) -> Tuple[List[Dict[str, Any]], str]:
    """
    Decode back-to-back JSON objects, with or without separators between them.

    An object cut off at the end of ``text`` is returned as the remainder.
    Objects never span a line break, so an undecodable object followed by a
    newline is malformed and raises ``ProviderStreamError``.
    """
    objects = []
    idx = 0
    length = len(text)
    while idx < length:
        while idx < length and text[idx].isspace():
            idx += 1
        if idx >= length:
            break
        try:
            obj, idx = _decoder.raw_decode(text, idx)
        except json.JSONDecodeError as e:
            tail = text[idx:]
            if "\n" not in tail:
                return objects, tail
            frame = tail.split("\n", 1)[0]
            raise ErrorHandler.handle_provider_stream_error(
                error_details=f"Malformed stream frame: {frame[:200]!r}",
                context=ErrorContext(provider_name=provider_name),
                original_exception=e
            ) from e
        objects.append(obj)
    return objects, ""
