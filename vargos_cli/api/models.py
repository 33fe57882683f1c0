"""
Data Models for API Client Module
===================================

Pydantic models for the agent directory responses, the chat request body
sent to the stream endpoint, and the typed stream events produced by the
strict decoder.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from vargos_cli.api.constants import DONE_EVENT_TYPE


class Agent(BaseModel):
    """Agent metadata as reported by the server."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    description: str = ""
    tools: Optional[List[str]] = None


class ChatMessageContent(BaseModel):
    """One content block of a chat message."""

    model_config = ConfigDict(populate_by_name=True)

    content_type: str = Field("text", alias="type")
    text: str


class ChatMessage(BaseModel):
    """A single message in the conversation sent to the agent."""

    role: str
    content: List[ChatMessageContent]


class ChatRequest(BaseModel):
    """Request body for ``POST /api/agents/{name}/stream``."""

    model_config = ConfigDict(protected_namespaces=())

    messages: List[ChatMessage]
    run_id: str
    resource_id: str
    thread_id: Optional[str] = None
    model_settings: Optional[Dict[str, Any]] = None
    runtime_context: Optional[Dict[str, Any]] = None

    @classmethod
    def for_message(
        cls,
        agent_name: str,
        message: str,
        thread_id: Optional[str] = None,
        *,
        model_settings: Optional[Dict[str, Any]] = None,
        runtime_context: Optional[Dict[str, Any]] = None,
    ) -> "ChatRequest":
        """Build a single-turn user request addressed to ``agent_name``.

        The server expects ``run_id`` and ``resource_id`` to carry the agent name.
        """
        return cls(
            messages=[
                ChatMessage(
                    role="user",
                    content=[ChatMessageContent(content_type="text", text=message)],
                )
            ],
            run_id=agent_name,
            resource_id=agent_name,
            thread_id=thread_id,
            model_settings=model_settings,
            runtime_context=runtime_context,
        )

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the JSON body, omitting unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class StreamEventData(BaseModel):
    """Payload of a stream frame (the decoded ``data`` field)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    event_type: str = Field(alias="type")
    content: Optional[str] = None
    tool: Optional[str] = None
    status: Optional[str] = None


class StreamEvent(BaseModel):
    """A fully typed SSE frame: event name plus decoded payload."""

    event: str
    data: StreamEventData

    @property
    def is_done(self) -> bool:
        return self.data.event_type == DONE_EVENT_TYPE
