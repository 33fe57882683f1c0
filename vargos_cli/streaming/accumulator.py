"""Response accumulation for chat streams (best-effort decoding)."""

import json
from collections.abc import Callable
from enum import Enum
from typing import Any, Dict, Optional

import structlog

from vargos_cli.api.constants import DONE_EVENT_TYPE, TEXT_EVENT_TYPES
from vargos_cli.api.sse import SSEError, SSEMessage, SSEOpen, StreamSignal
from vargos_cli.core.errors import StreamError

logger = structlog.get_logger(__name__)


class StreamStatus(Enum):
    """Lifecycle of a single chat stream."""

    STREAMING = "streaming"
    DONE = "done"  # terminated by a "done" marker
    ENDED = "ended"  # producer closed the stream
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not StreamStatus.STREAMING


def extract_text(payload: Dict[str, Any]) -> Optional[str]:
    """Return the text fragment of a text payload.

    ``content`` wins over ``delta`` when both are strings.
    """
    content = payload.get("content")
    if isinstance(content, str):
        return content
    delta = payload.get("delta")
    if isinstance(delta, str):
        return delta
    return None


class ResponseAccumulator:
    """Folds stream signals into one response string.

    Malformed or unknown frames are skipped so that a partially understood
    stream still yields the text it carried. A stream error discards any
    accumulated text.
    """

    def __init__(self, on_text: Optional[Callable[[str], None]] = None) -> None:
        """Initialize the accumulator.

        Args:
            on_text: Optional callback invoked with each appended fragment
        """
        self.status = StreamStatus.STREAMING
        self.error: Optional[BaseException] = None
        self._chunks: list[str] = []
        self._on_text = on_text

    @property
    def text(self) -> str:
        return "".join(self._chunks)

    def feed(self, signal: StreamSignal) -> StreamStatus:
        """Apply one signal and return the resulting status.

        Signals received after a terminal status are ignored.
        """
        if self.status.is_terminal:
            return self.status

        if isinstance(signal, SSEMessage):
            self._handle_message(signal)
        elif isinstance(signal, SSEError):
            self._handle_error(signal)
        elif isinstance(signal, SSEOpen):
            logger.debug("chat_stream_opened")

        return self.status

    def finish(self) -> StreamStatus:
        """Mark natural end-of-stream if no terminal status was reached."""
        if self.status is StreamStatus.STREAMING:
            self.status = StreamStatus.ENDED
        return self.status

    def result(self) -> str:
        """Return the accumulated text, or raise if the stream failed."""
        if self.status is StreamStatus.FAILED:
            raise StreamError(f"SSE stream error: {self.error}", cause=self.error) from self.error
        return self.text

    def _handle_message(self, message: SSEMessage) -> None:
        try:
            payload = json.loads(message.data)
        except ValueError:
            logger.debug("chat_frame_not_json", sse_event=message.event)
            return

        if not isinstance(payload, dict):
            return

        event_type = payload.get("type")
        if not isinstance(event_type, str):
            return

        if event_type in TEXT_EVENT_TYPES:
            self._handle_text(payload)
        elif event_type == DONE_EVENT_TYPE:
            self._handle_done(payload)

    def _handle_text(self, payload: Dict[str, Any]) -> None:
        fragment = extract_text(payload)
        if fragment is None:
            return
        self._chunks.append(fragment)
        if self._on_text and fragment:
            self._on_text(fragment)

    def _handle_done(self, _payload: Dict[str, Any]) -> None:
        self.status = StreamStatus.DONE

    def _handle_error(self, signal: SSEError) -> None:
        self.status = StreamStatus.FAILED
        self.error = signal.cause
        self._chunks.clear()
