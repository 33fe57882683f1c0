"""Slash command handlers for the interactive CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from vargos_cli.core import console
from vargos_cli.core.errors import VargosError
from vargos_cli.display import render_agent_info, render_agent_list, report_error, show_help

if TYPE_CHECKING:
    from vargos_cli.agent.discovery import AgentDiscovery
    from vargos_cli.core.state import SessionState


async def _switch_agent(name: str, discovery: AgentDiscovery, session_state: SessionState) -> None:
    if not await discovery.validate_agent(name):
        console.print(f"[red]Agent '{escape(name)}' not found or server unreachable[/red]")
        return

    session_state.switch_agent(name)
    console.print(f"[green]Switched to agent:[/green] {escape(name)}")
    console.print(f"[dim]Thread: {session_state.thread_id}[/dim]")


async def handle_command(
    command: str,
    discovery: AgentDiscovery,
    session_state: SessionState,
) -> str | None:
    """Handle slash commands.

    Args:
        command: The command string (e.g., "/help")
        discovery: Agent directory client
        session_state: Session state for conversation management

    Returns:
        "exit" if should exit, "handled" if command was processed, None otherwise
    """
    cmd = command.strip()
    cmd_lower = cmd.lower()

    if cmd_lower in ("/exit", "/q"):
        return "exit"

    if cmd_lower == "/help":
        show_help()

    elif cmd_lower == "/new":
        session_state.reset_thread()
        console.print("[green]Started new conversation.[/green]")
        console.print(f"[dim]Thread: {session_state.thread_id}[/dim]")
        console.print()

    elif cmd_lower == "/agents":
        try:
            agents = await discovery.list_agents()
        except VargosError as e:
            report_error(e, console)
        else:
            render_agent_list(agents, console, current=session_state.agent_name)
        console.print()

    elif cmd_lower == "/agent" or cmd_lower.startswith("/agent "):
        # Agent names are case-sensitive; take the argument from the raw input
        name = cmd[len("/agent"):].strip()
        if not name:
            if not session_state.agent_name:
                console.print("[yellow]No agent selected. Use /agent <name>[/yellow]")
            else:
                try:
                    agent = await discovery.get_agent(session_state.agent_name)
                except VargosError as e:
                    report_error(e, console)
                else:
                    render_agent_info(agent, console)
        else:
            await _switch_agent(name, discovery, session_state)
        console.print()

    else:
        console.print(f"[yellow]Unknown command: {escape(cmd)}[/yellow]")
        console.print("[dim]Type /help for available commands[/dim]")
        console.print()

    return "handled"
