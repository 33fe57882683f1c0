"""Display formatting, error reporting and help for the CLI."""

from vargos_cli.display.errors import format_error, report_error
from vargos_cli.display.help import show_help
from vargos_cli.display.rendering import render_agent_info, render_agent_list, truncate

__all__ = [
    "format_error",
    "render_agent_info",
    "render_agent_list",
    "report_error",
    "show_help",
    "truncate",
]
