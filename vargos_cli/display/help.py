"""Help display utilities for the CLI."""

from rich.panel import Panel

from vargos_cli.core import COLORS, COMMANDS, console


def show_help() -> None:
    """Show help information."""
    commands = "\n".join(f"  /{name:<28}{description}" for name, description in COMMANDS.items())

    help_text = f"""
[bold]Vargos CLI[/bold] - Terminal interface for Mastra agents

[bold]Usage:[/bold]
  vargos-cli                     Start interactive session
  vargos-cli MESSAGE...          Send one message and print the reply
  echo MESSAGE | vargos-cli      Send piped stdin as the message
  vargos-cli --agent NAME        Use a specific agent
  vargos-cli --list-agents       List available agents
  vargos-cli --agent-info NAME   Show agent details
  vargos-cli version             Show version

[bold]Interactive Commands:[/bold]
{commands}

[bold]Configuration:[/bold]
  ~/.config/vargos-cli/config.yaml   mastra_url, default_agent, default_session, theme
  VARGOS_CLI_MASTRA_URL              Override the server URL
  VARGOS_CLI_AGENT                   Override the default agent
"""

    console.print(Panel(help_text.strip(), title="Help", border_style=COLORS["primary"]))
    console.print()
