"""
Agent Client for vargos-cli
============================

HTTP/SSE client for the agent server API:

- Agent directory (list, get)
- Chat streaming via SSE, either folded into a single response string or
  exposed as a typed event stream
"""

from collections.abc import AsyncIterator, Callable
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
import structlog
from pydantic import ValidationError

from vargos_cli.api.constants import (
    AGENT_PATH,
    AGENT_STREAM_PATH,
    AGENTS_PATH,
    DEFAULT_BASE_URL,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_TIMEOUT,
)
from vargos_cli.api.models import Agent, ChatRequest, StreamEvent
from vargos_cli.api.sse import open_event_stream
from vargos_cli.core.errors import DecodeError, DirectoryError, InputError, NetworkError
from vargos_cli.streaming.accumulator import ResponseAccumulator
from vargos_cli.streaming.events import iter_stream_events

logger = structlog.get_logger(__name__)


def _status_text(response: httpx.Response) -> str:
    return f"{response.status_code} {response.reason_phrase}".strip()


def _require_message(message: str) -> None:
    if not message or not message.strip():
        raise InputError("Message cannot be empty. Please provide a message to send.")


class AgentClient:
    """
    Client for the agent server.

    One ``httpx.AsyncClient`` is shared by every call made through this
    instance. Each chat call opens its own stream, which is closed before the
    call returns.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        *,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the agent client.

        Args:
            base_url: Server base URL
            timeout: Timeout for directory requests in seconds
            client: Optional preconfigured HTTP client (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout, connect=DEFAULT_CONNECT_TIMEOUT)
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> "AgentClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _url(self, path: str, **params: str) -> str:
        """Build an absolute URL, escaping path parameters."""
        escaped = {key: quote(value, safe="") for key, value in params.items()}
        return self.base_url + path.format(**escaped)

    async def _get(self, url: str) -> httpx.Response:
        try:
            return await self.client.get(url, timeout=self.timeout)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("agent_request_failed", url=url, error=str(e))
            raise NetworkError(f"Request to {url} failed: {e}", cause=e) from e

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Invalid JSON from {response.request.url}: {e}") from e

    # =========================================================================
    # Agent Directory
    # =========================================================================

    async def list_agents(self) -> List[Agent]:
        """
        List agents available on the server.

        Returns:
            Agents in the order the server reported them

        Raises:
            DirectoryError: If the server answers with a non-success status
            NetworkError: If the server cannot be reached
        """
        url = self._url(AGENTS_PATH)
        response = await self._get(url)

        if not response.is_success:
            logger.warning("agent_list_failed", status=response.status_code)
            raise DirectoryError(
                f"Failed to list agents: {_status_text(response)}",
                status_code=response.status_code,
            )

        body = self._json(response)
        try:
            if isinstance(body, dict):
                # Mastra keys agents by id; the key doubles as the name
                return [
                    Agent.model_validate({"name": key, **value} if isinstance(value, dict) else value)
                    for key, value in body.items()
                ]
            if isinstance(body, list):
                return [Agent.model_validate(item) for item in body]
        except ValidationError as e:
            raise DecodeError(f"Invalid agent list: {e}") from e

        raise DecodeError(f"Invalid agent list: expected an array, got {type(body).__name__}")

    async def get_agent(self, name: str) -> Agent:
        """
        Get metadata for a single agent.

        Args:
            name: Agent name

        Raises:
            DirectoryError: If the agent is unknown or the server answers with
                a non-success status
            NetworkError: If the server cannot be reached
        """
        url = self._url(AGENT_PATH, name=name)
        response = await self._get(url)

        if not response.is_success:
            logger.info("agent_lookup_failed", agent=name, status=response.status_code)
            raise DirectoryError(
                f"Agent '{name}' not found: {_status_text(response)}",
                status_code=response.status_code,
                agent_name=name,
            )

        body = self._json(response)
        if isinstance(body, dict):
            body = {"name": name, **body}
        try:
            return Agent.model_validate(body)
        except ValidationError as e:
            raise DecodeError(f"Invalid agent '{name}': {e}") from e

    # =========================================================================
    # Chat Streaming
    # =========================================================================

    async def chat(
        self,
        agent_name: str,
        message: str,
        thread_id: Optional[str] = None,
        *,
        on_text: Optional[Callable[[str], None]] = None,
        model_settings: Optional[Dict[str, Any]] = None,
        runtime_context: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Send a message and return the full response text.

        Text frames are concatenated in arrival order. Frames that are not
        JSON or have an unknown type are skipped. A ``done`` frame ends the
        call early; a stream that simply closes is also a success.

        Args:
            agent_name: Target agent
            message: User message (must not be blank)
            thread_id: Conversation thread for continuity
            on_text: Optional callback receiving each text fragment as it arrives
            model_settings: Opaque model settings forwarded to the server
            runtime_context: Opaque runtime context forwarded to the server

        Raises:
            InputError: If the message is blank (no request is made)
            StreamSetupError: If the stream request cannot be created
            StreamError: If the stream fails; partial text is discarded
        """
        _require_message(message)

        url = self._url(AGENT_STREAM_PATH, name=agent_name)
        request = ChatRequest.for_message(
            agent_name,
            message,
            thread_id,
            model_settings=model_settings,
            runtime_context=runtime_context,
        )
        accumulator = ResponseAccumulator(on_text=on_text)

        logger.info("chat_stream_start", agent=agent_name, thread_id=thread_id)
        async with open_event_stream(self.client, "POST", url, json=request.to_payload()) as signals:
            async for signal in signals:
                if accumulator.feed(signal).is_terminal:
                    break

        status = accumulator.finish()
        logger.info("chat_stream_end", agent=agent_name, status=status.value)
        return accumulator.result()

    async def stream_chat(
        self,
        agent_name: str,
        message: str,
        thread_id: Optional[str] = None,
    ) -> AsyncIterator[StreamEvent]:
        """
        Stream typed events for a message.

        Every frame must decode as a stream event; the first one that does
        not ends the stream with ``StreamDecodeError``. ``done`` frames are
        yielded like any other event.

        Args:
            agent_name: Target agent
            message: User message (must not be blank)
            thread_id: Conversation thread for continuity

        Yields:
            StreamEvent instances in arrival order
        """
        _require_message(message)

        url = self._url(AGENT_STREAM_PATH, name=agent_name)
        request = ChatRequest.for_message(agent_name, message, thread_id)

        logger.info("event_stream_start", agent=agent_name, thread_id=thread_id)
        async with open_event_stream(self.client, "POST", url, json=request.to_payload()) as signals:
            async for event in iter_stream_events(signals):
                yield event
