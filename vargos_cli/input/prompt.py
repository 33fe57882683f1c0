"""Prompt session creation and configuration."""

import html
from pathlib import Path

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import FileHistory, InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.key_binding.key_processor import KeyPressEvent

from vargos_cli.core import COLORS, SessionState

HISTORY_FILE = Path.home() / ".vargos-cli" / "history"


def _create_history(history_file: Path | None):
    if history_file is None:
        return InMemoryHistory()
    try:
        history_file.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        return InMemoryHistory()
    return FileHistory(str(history_file))


def create_prompt_session(
    session_state: SessionState,
    *,
    history_file: Path | None = HISTORY_FILE,
) -> PromptSession[str]:
    """Create a configured PromptSession.

    Enter submits, Alt+Enter inserts a newline, Ctrl+C clears the current
    input (or interrupts when the input is empty).

    Args:
        session_state: Session state; the current agent is shown in the prompt
        history_file: Persistent history file, or None for in-memory history

    Returns:
        Configured PromptSession
    """
    kb = KeyBindings()

    @kb.add("c-c")
    def _(event: KeyPressEvent) -> None:
        buffer = event.current_buffer
        if buffer.text:
            buffer.reset()
            return
        event.app.exit(exception=KeyboardInterrupt())

    @kb.add("escape", "enter")
    def _(event: KeyPressEvent) -> None:
        event.current_buffer.insert_text("\n")

    def prompt_message() -> HTML:
        agent = html.escape(session_state.agent_name or "no agent")
        return HTML(f'<style fg="{COLORS["primary"]}">{agent}</style> <b>&gt;</b> ')

    return PromptSession(
        message=prompt_message,
        history=_create_history(history_file),
        key_bindings=kb,
        multiline=False,
    )
