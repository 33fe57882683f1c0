"""Tests for strict stream event decoding."""

import httpx
import pytest

from vargos_cli.api.sse import SSEError, SSEMessage, SSEOpen
from vargos_cli.core.errors import StreamDecodeError, StreamError
from vargos_cli.streaming.events import decode_stream_event, iter_stream_events


async def signals_from(items):
    for item in items:
        yield item


class TestDecodeStreamEvent:
    def test_decodes_text_event(self):
        event = decode_stream_event(SSEMessage(event="message", data='{"type": "text", "content": "Hi"}'))

        assert event.event == "message"
        assert event.data.event_type == "text"
        assert event.data.content == "Hi"
        assert event.is_done is False

    def test_done_event(self):
        event = decode_stream_event(SSEMessage(event="message", data='{"type": "done"}'))
        assert event.is_done is True

    def test_tool_event_fields(self):
        event = decode_stream_event(
            SSEMessage(event="tool", data='{"type": "tool", "tool": "search", "status": "running"}')
        )
        assert event.data.tool == "search"
        assert event.data.status == "running"

    def test_missing_type_raises(self):
        with pytest.raises(StreamDecodeError) as exc_info:
            decode_stream_event(SSEMessage(event="message", data='{"content": "Hi"}'))
        assert exc_info.value.raw_data == '{"content": "Hi"}'

    def test_invalid_json_raises(self):
        with pytest.raises(StreamDecodeError):
            decode_stream_event(SSEMessage(event="message", data="not json"))


class TestIterStreamEvents:
    @pytest.mark.asyncio
    async def test_yields_events_in_order(self):
        signals = signals_from(
            [
                SSEOpen(),
                SSEMessage(event="message", data='{"type": "text", "content": "a"}'),
                SSEMessage(event="message", data='{"type": "done"}'),
            ]
        )

        events = [event async for event in iter_stream_events(signals)]

        assert [e.data.event_type for e in events] == ["text", "done"]

    @pytest.mark.asyncio
    async def test_first_bad_frame_ends_stream(self):
        signals = signals_from(
            [
                SSEMessage(event="message", data='{"type": "text", "content": "a"}'),
                SSEMessage(event="message", data="garbage"),
                SSEMessage(event="message", data='{"type": "text", "content": "b"}'),
            ]
        )

        seen = []
        with pytest.raises(StreamDecodeError):
            async for event in iter_stream_events(signals):
                seen.append(event.data.content)

        assert seen == ["a"]

    @pytest.mark.asyncio
    async def test_transport_error_raises_stream_error(self):
        cause = httpx.ReadError("reset")
        signals = signals_from([SSEError(cause)])

        with pytest.raises(StreamError) as exc_info:
            async for _ in iter_stream_events(signals):
                pass

        assert exc_info.value.cause is cause
