"""Strict decoding of stream frames into typed events."""

from collections.abc import AsyncIterator

from pydantic import ValidationError

from vargos_cli.api.models import StreamEvent, StreamEventData
from vargos_cli.api.sse import SSEError, SSEMessage, StreamSignal
from vargos_cli.core.errors import StreamDecodeError, StreamError


def decode_stream_event(message: SSEMessage) -> StreamEvent:
    """Decode one frame, raising ``StreamDecodeError`` if it violates the schema."""
    try:
        data = StreamEventData.model_validate_json(message.data)
    except ValidationError as e:
        raise StreamDecodeError(
            f"Invalid stream event payload for event {message.event!r}: {e}",
            raw_data=message.data,
        ) from e
    return StreamEvent(event=message.event, data=data)


async def iter_stream_events(signals: AsyncIterator[StreamSignal]) -> AsyncIterator[StreamEvent]:
    """Yield typed events until the stream ends.

    The first undecodable frame or transport error ends iteration by raising.
    """
    async for signal in signals:
        if isinstance(signal, SSEMessage):
            yield decode_stream_event(signal)
        elif isinstance(signal, SSEError):
            raise StreamError(f"SSE stream error: {signal.cause}", cause=signal.cause) from signal.cause
