"""Display formatting and rendering utilities for the CLI."""

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape

from vargos_cli.api.models import Agent

MAX_DESCRIPTION_LENGTH = 150


def truncate(text: str, max_length: int = MAX_DESCRIPTION_LENGTH) -> str:
    """Truncate text for single-line display.

    Args:
        text: The text to truncate
        max_length: Maximum length before truncation

    Returns:
        Truncated string with '...' if exceeded max_length
    """
    text = " ".join(text.split())
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def render_agent_list(agents: Sequence[Agent], console: Console, *, current: str | None = None) -> None:
    """Print the agent directory, one agent per line.

    Args:
        agents: Agents to list
        console: Rich console for output
        current: Name of the selected agent, marked with '*'
    """
    if not agents:
        console.print("[yellow]No agents available[/yellow]")
        return

    console.print("Available agents:")
    for agent in agents:
        marker = "*" if agent.name == current else "-"
        description = escape(truncate(agent.description))
        console.print(f"  {marker} [bold]{escape(agent.name)}[/bold]: {description}")


def render_agent_info(agent: Agent, console: Console) -> None:
    """Print name, description and tools of an agent."""
    console.print(f"Agent: [bold]{escape(agent.name)}[/bold]")
    console.print(f"Description: {escape(agent.description)}")
    if agent.tools is not None:
        console.print(f"Tools: {escape(', '.join(agent.tools))}")
