"""
Server-Sent Events transport for vargos-cli
============================================

Opens a streaming HTTP request and turns the response body into a sequence
of stream lifecycle signals:

- ``SSEOpen``: the server accepted the request as an event stream
- ``SSEMessage``: one dispatched frame (event name + raw data)
- ``SSEError``: the stream failed; no further signals follow

The signal iterator is not restartable. The underlying response is closed
when the ``open_event_stream`` context exits, whatever the exit path.
"""

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import httpx
import structlog

from vargos_cli.api.constants import EVENT_STREAM_CONTENT_TYPE
from vargos_cli.core.errors import StreamSetupError

logger = structlog.get_logger(__name__)

DEFAULT_EVENT_NAME = "message"


class InvalidStatusCode(Exception):
    """The stream endpoint answered with a non-success status."""

    def __init__(self, response: httpx.Response) -> None:
        super().__init__(f"Invalid status code: {response.status_code} {response.reason_phrase}")
        self.status_code = response.status_code


class InvalidContentType(Exception):
    """The stream endpoint did not answer with ``text/event-stream``."""

    def __init__(self, content_type: str) -> None:
        super().__init__(f"Invalid content type: {content_type or '<missing>'}")
        self.content_type = content_type


@dataclass(frozen=True)
class SSEOpen:
    """Connection established."""


@dataclass(frozen=True)
class SSEMessage:
    """A dispatched SSE frame."""

    event: str
    data: str
    id: Optional[str] = None


@dataclass(frozen=True)
class SSEError:
    """Stream-level failure carrying the underlying cause."""

    cause: BaseException


StreamSignal = Union[SSEOpen, SSEMessage, SSEError]


class SSEDecoder:
    """Incremental line decoder for the ``text/event-stream`` format.

    Feed it one line at a time (without the line terminator). A blank line
    dispatches the buffered frame. Frames without any ``data`` field are
    dropped, as are lines starting with ``:`` (comments).
    """

    def __init__(self) -> None:
        self.last_event_id: Optional[str] = None
        self.retry: Optional[int] = None
        self._event = ""
        self._data: list[str] = []

    def decode(self, line: str) -> Optional[SSEMessage]:
        """Process one line and return a message when a frame is complete."""
        if not line:
            return self._dispatch()

        if line.startswith(":"):
            return None

        field, _, value = line.partition(":")
        if value.startswith(" "):
            value = value[1:]

        if field == "event":
            self._event = value
        elif field == "data":
            self._data.append(value)
        elif field == "id":
            if "\0" not in value:
                self.last_event_id = value
        elif field == "retry":
            if value.isascii() and value.isdigit():
                self.retry = int(value)

        return None

    def _dispatch(self) -> Optional[SSEMessage]:
        if not self._data:
            self._event = ""
            return None

        message = SSEMessage(
            event=self._event or DEFAULT_EVENT_NAME,
            data="\n".join(self._data),
            id=self.last_event_id,
        )
        self._event = ""
        self._data = []
        return message


def _is_event_stream(response: httpx.Response) -> bool:
    content_type = response.headers.get("content-type", "")
    return content_type.split(";", 1)[0].strip().lower() == EVENT_STREAM_CONTENT_TYPE


async def _iter_signals(
    client: httpx.AsyncClient,
    request: httpx.Request,
) -> AsyncGenerator[StreamSignal, None]:
    """Send the request and yield signals until the stream ends or fails."""
    try:
        response = await client.send(request, stream=True)
    except httpx.HTTPError as e:
        logger.warning("sse_connect_failed", url=str(request.url), error=str(e))
        yield SSEError(e)
        return

    try:
        if not response.is_success:
            logger.warning("sse_bad_status", url=str(request.url), status=response.status_code)
            yield SSEError(InvalidStatusCode(response))
            return

        if not _is_event_stream(response):
            content_type = response.headers.get("content-type", "")
            logger.warning("sse_bad_content_type", url=str(request.url), content_type=content_type)
            yield SSEError(InvalidContentType(content_type))
            return

        yield SSEOpen()

        decoder = SSEDecoder()
        try:
            async for line in response.aiter_lines():
                if (message := decoder.decode(line)) is not None:
                    yield message
        except httpx.HTTPError as e:
            logger.warning("sse_stream_interrupted", url=str(request.url), error=str(e))
            yield SSEError(e)
    finally:
        await response.aclose()


@asynccontextmanager
async def open_event_stream(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    json: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> AsyncIterator[AsyncIterator[StreamSignal]]:
    """Open an event-stream request and yield its signal iterator.

    Args:
        client: HTTP client used to send the request
        method: HTTP method (usually "POST")
        url: Absolute stream URL
        json: Optional JSON request body
        headers: Extra request headers

    Raises:
        StreamSetupError: If the request cannot be built (e.g. malformed URL).
            Nothing is sent and no signal is yielded in that case.
    """
    request_headers = {"Accept": EVENT_STREAM_CONTENT_TYPE, "Cache-Control": "no-store"}
    if headers:
        request_headers.update(headers)

    try:
        request = client.build_request(method, url, json=json, headers=request_headers)
    except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
        raise StreamSetupError(f"Failed to create eventsource: {e}") from e

    if request.url.scheme not in ("http", "https"):
        raise StreamSetupError(f"Failed to create eventsource: unsupported URL scheme {request.url.scheme!r}")

    signals = _iter_signals(client, request)
    try:
        yield signals
    finally:
        await signals.aclose()
