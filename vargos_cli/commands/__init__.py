"""Interactive command handling for the CLI."""

from vargos_cli.commands.slash import handle_command

__all__ = [
    "handle_command",
]
