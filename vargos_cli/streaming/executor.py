"""Chat execution with live output for the interactive CLI."""

import asyncio
import signal
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

import structlog

from vargos_cli.core import COLORS, console
from vargos_cli.core.errors import InputError
from vargos_cli.streaming.state import StreamingState

if TYPE_CHECKING:
    from vargos_cli.api.client import AgentClient
    from vargos_cli.core.state import SessionState

logger = structlog.get_logger(__name__)


@contextmanager
def _cancel_on_interrupt() -> Iterator[None]:
    """Make Ctrl+C cancel the current task instead of the whole program."""
    loop = asyncio.get_running_loop()
    task = asyncio.current_task()
    previous = signal.getsignal(signal.SIGINT)
    try:
        loop.add_signal_handler(signal.SIGINT, task.cancel)
    except (NotImplementedError, RuntimeError):
        # No loop signal support (Windows or a non-main thread)
        installed = False
    else:
        installed = True

    try:
        yield
    finally:
        if installed:
            loop.remove_signal_handler(signal.SIGINT)
            if previous is not None:
                signal.signal(signal.SIGINT, previous)


async def execute_task(
    user_input: str,
    client: "AgentClient",
    session_state: "SessionState",
) -> str:
    """Send ``user_input`` to the current agent and stream the reply.

    Args:
        user_input: Message typed by the user
        client: Agent client used for the chat stream
        session_state: Session state holding the agent and thread

    Returns:
        The complete response text, or an empty string if the turn was
        interrupted
    """
    if not session_state.agent_name:
        raise InputError("No agent selected. Use /agent <name> or set default_agent in config")

    state = StreamingState(console, f"[bold {COLORS['primary']}]Waiting for {session_state.agent_name}...", COLORS)
    try:
        with _cancel_on_interrupt():
            response = await client.chat(
                session_state.agent_name,
                user_input,
                session_state.thread_id,
                on_text=state.append_text,
            )
    except (KeyboardInterrupt, asyncio.CancelledError) as e:
        if isinstance(e, asyncio.CancelledError) and (task := asyncio.current_task()) is not None:
            task.uncancel()
        state.finish()
        console.print("[yellow]Interrupted[/yellow]")
        console.print()
        logger.info("task_interrupted", agent=session_state.agent_name, thread_id=session_state.thread_id)
        return ""
    finally:
        state.finish()

    if not state.has_responded:
        console.print("[dim](empty response)[/dim]")
    console.print()

    logger.info(
        "task_complete",
        agent=session_state.agent_name,
        thread_id=session_state.thread_id,
        response_chars=len(response),
    )
    return response
