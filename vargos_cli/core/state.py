"""Session state management for the Vargos CLI."""

from __future__ import annotations

import uuid


class SessionState:
    """Holds mutable session state (current agent and conversation thread)."""

    def __init__(
        self,
        base_url: str,
        *,
        agent_name: str | None = None,
        thread_id: str | None = None,
        no_splash: bool = False,
    ) -> None:
        """Initialize session state.

        Args:
            base_url: Agent server base URL
            agent_name: Agent that receives chat messages
            thread_id: Conversation thread; a new one is generated if omitted
            no_splash: Whether to skip the splash screen
        """
        self.base_url = base_url
        self.agent_name = agent_name
        self.thread_id = thread_id or str(uuid.uuid4())
        self.no_splash = no_splash
        self.log_file_path: str | None = None
        self.last_exit_reason: str | None = None

    def switch_agent(self, agent_name: str) -> None:
        """Select a new agent and start a fresh thread for it."""
        self.agent_name = agent_name
        self.reset_thread()

    def reset_thread(self) -> str:
        """Reset conversation by generating new thread_id.

        Returns:
            New thread_id
        """
        self.thread_id = str(uuid.uuid4())
        return self.thread_id
