"""
Streaming reconstruction: chunk framing, per-request buffering, the merge
engine and event delivery.
"""

from .framing import StreamSignal, ParsedChunk, decode_frame, split_lines, scan_frames, split_json_objects
from .buffer import StreamBuffer
from .merge import concat, replace, merge_with, merge_indexed, merge_keyed_parts
from .delivery import (
    PULL_TIMEOUT,
    StreamMessage,
    ChunkMessage,
    CompletedMessage,
    FailedMessage,
    DownMessage,
    StreamTask,
    EventStream,
    monitor,
)

__all__ = [
    'StreamSignal',
    'ParsedChunk',
    'decode_frame',
    'split_lines',
    'scan_frames',
    'split_json_objects',
    'StreamBuffer',
    'concat',
    'replace',
    'merge_with',
    'merge_indexed',
    'merge_keyed_parts',
    'PULL_TIMEOUT',
    'StreamMessage',
    'ChunkMessage',
    'CompletedMessage',
    'FailedMessage',
    'DownMessage',
    'StreamTask',
    'EventStream',
    'monitor',
]
