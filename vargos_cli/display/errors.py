"""Error formatting and reporting for graceful CLI failure."""

import os
import re

import structlog
from rich.console import Console

from vargos_cli.core.errors import VargosError

logger = structlog.get_logger(__name__)

# Titles by error kind
ERROR_TITLES = {
    "network": "Connection failed",
    "stream": "Stream error",
    "serialization": "Invalid server response",
    "agent": "Agent error",
    "input": "Invalid input",
    "config": "Configuration error",
}

EXIT_FAILURE = 1


def get_error_title(e: BaseException) -> str:
    """Get the display title for an error."""
    if isinstance(e, VargosError):
        return ERROR_TITLES.get(e.kind, "Error")
    return "Unexpected error"


def format_error(e: BaseException) -> str:
    """Format a clean, user-friendly error message.

    Args:
        e: The exception to report.

    Returns:
        Formatted error message with Rich markup.
    """
    logger.error("cli_error", error=str(e), error_type=type(e).__name__)

    title = get_error_title(e)
    message = _extract_error_message(str(e))

    lines = [
        f"[red]{title}[/red]",
        f"  {message}",
    ]

    # Caller mistakes don't need the log hint
    if not (isinstance(e, VargosError) and e.kind == "input"):
        lines.extend(
            [
                "",
                f"[dim]Check {os.environ.get('VARGOS_CLI_LOG_FILE', '~/.vargos-cli/logs')} for full details.[/dim]",
            ]
        )

    return "\n".join(lines)


def report_error(e: BaseException, console: Console) -> int:
    """Print ``e`` and return the process exit code to use."""
    console.print(format_error(e))
    return EXIT_FAILURE


def _extract_error_message(error_str: str) -> str:
    """Extract the human-readable message from an error string.

    Args:
        error_str: The full error string, sometimes containing JSON.

    Returns:
        A cleaner, more readable error message.
    """
    # Server errors are often relayed as "... {'error': {'message': '...'}}"
    if "'message':" in error_str:
        match = re.search(r"'message':\s*'([^']+)'", error_str)
        if match:
            return match.group(1)

    if '"message":' in error_str:
        match = re.search(r'"message":\s*"([^"]+)"', error_str)
        if match:
            return match.group(1)

    # Truncate long error strings
    max_len = 200
    if len(error_str) > max_len:
        return error_str[:max_len] + "..."

    return error_str
