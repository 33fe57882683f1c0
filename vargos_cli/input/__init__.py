"""Input handling for the interactive CLI."""

from vargos_cli.input.prompt import create_prompt_session

__all__ = [
    "create_prompt_session",
]
