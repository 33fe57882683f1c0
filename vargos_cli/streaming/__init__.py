"""Stream decoding, response accumulation and live output."""

from vargos_cli.streaming.accumulator import ResponseAccumulator, StreamStatus, extract_text
from vargos_cli.streaming.events import decode_stream_event, iter_stream_events
from vargos_cli.streaming.executor import execute_task
from vargos_cli.streaming.state import StreamingState

__all__ = [
    "ResponseAccumulator",
    "StreamStatus",
    "StreamingState",
    "decode_stream_event",
    "execute_task",
    "extract_text",
    "iter_stream_events",
]
