"""Tests for the event-stream transport in vargos_cli.api.sse."""

import httpx
import pytest

from vargos_cli.api.sse import (
    InvalidContentType,
    InvalidStatusCode,
    SSEDecoder,
    SSEError,
    SSEMessage,
    SSEOpen,
    open_event_stream,
)
from vargos_cli.core.errors import StreamSetupError


def decode_all(lines):
    decoder = SSEDecoder()
    return [m for m in (decoder.decode(line) for line in lines) if m is not None]


class TestSSEDecoder:
    def test_single_frame(self):
        messages = decode_all(["data: hello", ""])
        assert messages == [SSEMessage(event="message", data="hello")]

    def test_event_name_and_id(self):
        messages = decode_all(["event: chunk", "id: 7", "data: x", ""])
        assert messages == [SSEMessage(event="chunk", data="x", id="7")]

    def test_multiline_data_joined_with_newline(self):
        messages = decode_all(["data: one", "data: two", ""])
        assert messages[0].data == "one\ntwo"

    def test_comments_ignored(self):
        messages = decode_all([": keep-alive", "data: x", ""])
        assert [m.data for m in messages] == ["x"]

    def test_frame_without_data_dropped(self):
        assert decode_all(["event: ping", ""]) == []

    def test_event_name_resets_between_frames(self):
        messages = decode_all(["event: chunk", "data: a", "", "data: b", ""])
        assert [m.event for m in messages] == ["chunk", "message"]

    def test_only_one_leading_space_stripped(self):
        messages = decode_all(["data:  padded", ""])
        assert messages[0].data == " padded"

    def test_retry_parsed(self):
        decoder = SSEDecoder()
        decoder.decode("retry: 3000")
        decoder.decode("retry: soon")
        assert decoder.retry == 3000

    def test_non_ascii_retry_ignored(self):
        decoder = SSEDecoder()

        assert decoder.decode("retry: ²") is None
        assert decoder.retry is None
        assert decode_all(["retry: ٣", "data: x", ""]) == [SSEMessage(event="message", data="x")]


async def collect(client, url="http://agents.test/stream"):
    async with open_event_stream(client, "POST", url, json={"q": 1}) as signals:
        return [signal async for signal in signals]


class TestOpenEventStream:
    @pytest.mark.asyncio
    async def test_open_then_messages(self):
        def handler(request):
            assert request.headers["accept"] == "text/event-stream"
            return httpx.Response(
                200,
                headers={"content-type": "text/event-stream; charset=utf-8"},
                content=b"data: a\n\n: ping\n\nevent: x\ndata: b\n\n",
            )

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            signals = await collect(client)

        assert signals == [
            SSEOpen(),
            SSEMessage(event="message", data="a"),
            SSEMessage(event="x", data="b"),
        ]

    @pytest.mark.asyncio
    async def test_bad_status_yields_error(self):
        def handler(request):
            return httpx.Response(500, headers={"content-type": "text/event-stream"})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            signals = await collect(client)

        assert len(signals) == 1
        assert isinstance(signals[0], SSEError)
        assert isinstance(signals[0].cause, InvalidStatusCode)
        assert signals[0].cause.status_code == 500

    @pytest.mark.asyncio
    async def test_wrong_content_type_yields_error(self):
        def handler(request):
            return httpx.Response(200, json={"ok": True})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            signals = await collect(client)

        assert len(signals) == 1
        assert isinstance(signals[0].cause, InvalidContentType)

    @pytest.mark.asyncio
    async def test_connection_failure_yields_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            signals = await collect(client)

        assert len(signals) == 1
        assert isinstance(signals[0].cause, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_interrupted_stream_yields_error_after_messages(self):
        class BrokenStream(httpx.AsyncByteStream):
            async def __aiter__(self):
                yield b"data: a\n\n"
                raise httpx.ReadError("connection reset")

        def handler(request):
            return httpx.Response(
                200,
                headers={"content-type": "text/event-stream"},
                stream=BrokenStream(),
            )

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            signals = await collect(client)

        assert signals[:2] == [SSEOpen(), SSEMessage(event="message", data="a")]
        assert isinstance(signals[2], SSEError)
        assert isinstance(signals[2].cause, httpx.ReadError)

    @pytest.mark.asyncio
    async def test_unsupported_scheme_raises_setup_error(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(StreamSetupError):
                await collect(client, url="ftp://agents.test/stream")

        assert calls == []
