"""Main entry point and CLI loop for vargos-cli.

This module provides the command-line interface for Mastra agents, including:
- Command-line argument parsing
- Agent directory commands (--list-agents, --agent-info)
- Command mode (one message from arguments or piped stdin)
- Interactive CLI loop with prompt handling
- Logging setup
"""

import argparse
import asyncio
import os
import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from vargos_cli import __version__

logger = structlog.get_logger(__name__)

if TYPE_CHECKING:
    from vargos_cli.api.client import AgentClient
    from vargos_cli.core.config import Config
    from vargos_cli.core.state import SessionState

LOG_DIR = Path.home() / ".vargos-cli" / "logs"

# Lone positional words that run a command instead of sending a message
COMMAND_WORDS = ("version", "help")


def _cleanup_old_logs(log_dir: Path, *, keep_days: int = 7) -> None:
    """Remove log files older than keep_days."""
    cutoff = time.time() - (keep_days * 24 * 60 * 60)
    try:
        for path in log_dir.glob("*.log"):
            try:
                if path.stat().st_mtime < cutoff:
                    path.unlink(missing_ok=True)
            except OSError as e:
                logger.debug("cli_log_cleanup_file_failed", path=str(path), error=str(e))
                continue
    except OSError as e:
        logger.debug("cli_log_cleanup_failed", log_dir=str(log_dir), error=str(e))


def setup_logging(*, log_dir: Path = LOG_DIR) -> Path:
    """Redirect logging to a per-run log file.

    Returns:
        Path to the log file.
    """
    import logging

    log_dir.mkdir(parents=True, exist_ok=True)
    _cleanup_old_logs(log_dir, keep_days=7)

    timestamp = time.strftime("%Y%m%d-%H%M%S")
    log_file = log_dir / f"vargos-cli-{timestamp}-{os.getpid()}.log"
    os.environ["VARGOS_CLI_LOG_FILE"] = str(log_file)

    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))

    # Remove all existing handlers from root logger
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    root.addHandler(file_handler)
    root.setLevel(logging.INFO)

    # Suppress specific noisy loggers
    for logger_name in ["httpx", "httpcore", "asyncio", "anyio"]:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    return log_file


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="vargos-cli",
        description="Vargos CLI - Interactive terminal interface for Mastra agents",
    )

    parser.add_argument(
        "message",
        nargs="*",
        metavar="MESSAGE",
        help="Message to send (command mode). \"version\" and \"help\" are commands.",
    )
    parser.add_argument(
        "-a",
        "--agent",
        help="Agent name to use (default: default_agent from config)",
    )
    parser.add_argument(
        "--config-path",
        type=Path,
        help="Config file path (default: ~/.config/vargos-cli/config.yaml)",
    )
    parser.add_argument(
        "--server",
        help="Agent server URL (overrides mastra_url from config)",
    )
    parser.add_argument(
        "--list-agents",
        action="store_true",
        help="List available agents",
    )
    parser.add_argument(
        "--agent-info",
        metavar="NAME",
        help="Show agent info",
    )
    parser.add_argument(
        "--no-splash",
        action="store_true",
        help="Disable the startup banner in interactive mode",
    )

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    A lone ``version`` or ``help`` word is a command; any other words form
    the message.
    """
    args = build_parser().parse_intermixed_args(argv)
    args.command = None
    if len(args.message) == 1 and args.message[0] in COMMAND_WORDS:
        args.command = args.message.pop()
    return args


def read_message(message_parts: list[str]) -> str | None:
    """Resolve the command-mode message.

    Arguments are joined with spaces. Without arguments, piped stdin is read
    and trimmed; empty piped input yields an empty message. Returns None
    when stdin is a terminal and no words were given.
    """
    if message_parts:
        return " ".join(message_parts)

    if not sys.stdin.isatty():
        return sys.stdin.read().strip()

    return None


async def handle_list_agents(client: "AgentClient") -> None:
    from vargos_cli.agent import AgentDiscovery
    from vargos_cli.core import console
    from vargos_cli.display import render_agent_list

    discovery = AgentDiscovery(client.base_url, client=client)
    agents = await discovery.list_agents()
    render_agent_list(agents, console)


async def handle_agent_info(client: "AgentClient", agent_name: str) -> None:
    from vargos_cli.agent import AgentDiscovery
    from vargos_cli.core import console
    from vargos_cli.display import render_agent_info

    discovery = AgentDiscovery(client.base_url, client=client)
    agent = await discovery.get_agent(agent_name)
    render_agent_info(agent, console)


async def handle_command_mode(
    client: "AgentClient",
    config: "Config",
    message: str,
    agent_name: str | None,
) -> str:
    """Send one message and print the reply.

    Raises:
        InputError: If the message is blank or no agent is configured
    """
    from vargos_cli.core import console
    from vargos_cli.core.errors import InputError

    if not message.strip():
        raise InputError("Message cannot be empty. Please provide a message to send.")

    agent = agent_name or config.default_agent
    if not agent:
        raise InputError("No agent specified. Use --agent or set default_agent in config")

    with console.status(f"Waiting for {agent}...", spinner="dots"):
        response = await client.chat(agent, message, config.default_session)

    if response:
        console.print(response, markup=False, highlight=False)

    return response


async def chat_loop(client: "AgentClient", session_state: "SessionState") -> None:
    """Interactive chat loop.

    Args:
        client: Agent client for API communication
        session_state: Session state with the current agent and thread
    """
    from vargos_cli.agent import AgentDiscovery
    from vargos_cli.commands import handle_command
    from vargos_cli.core import COLORS, VARGOS_ASCII, console
    from vargos_cli.core.errors import VargosError
    from vargos_cli.display import report_error
    from vargos_cli.input import create_prompt_session
    from vargos_cli.streaming import execute_task

    discovery = AgentDiscovery(client.base_url, client=client)

    if not session_state.no_splash:
        console.print(VARGOS_ASCII, style=f"bold {COLORS['primary']}")

    console.print(f"[dim]Server: {client.base_url}[/dim]")
    if session_state.agent_name:
        if await discovery.validate_agent(session_state.agent_name):
            console.print(f"[dim]Agent: {session_state.agent_name}[/dim]")
        else:
            console.print(f"[yellow]Agent '{session_state.agent_name}' is not available on the server[/yellow]")
    else:
        console.print("[yellow]No agent selected. Use /agents and /agent <name>[/yellow]")
    console.print("  Tips: Enter to submit, Alt+Enter for newline, /help for commands", style=f"dim {COLORS['dim']}")
    console.print()

    prompt_session = create_prompt_session(session_state)

    logger.info("cli_loop_start", agent=session_state.agent_name, server_url=client.base_url)

    while True:
        try:
            user_input = await prompt_session.prompt_async()
            user_input = user_input.strip()
        except EOFError:
            session_state.last_exit_reason = "prompt_eoferror"
            break
        except KeyboardInterrupt:
            continue

        if not user_input:
            continue

        if user_input.startswith("/"):
            result = await handle_command(user_input, discovery, session_state)
            if result == "exit":
                session_state.last_exit_reason = "exit_command"
                console.print("\nGoodbye!", style=COLORS["primary"])
                break
            continue

        if user_input.lower() in ["quit", "exit", "q"]:
            session_state.last_exit_reason = "exit_keyword"
            console.print("\nGoodbye!", style=COLORS["primary"])
            break

        try:
            await execute_task(user_input, client, session_state)
        except VargosError as e:
            report_error(e, console)
            console.print()

    logger.info("cli_loop_end", reason=session_state.last_exit_reason)


async def main(args: argparse.Namespace) -> int:
    """Run the selected CLI mode and return the process exit code."""
    from vargos_cli.api.client import AgentClient
    from vargos_cli.core import ConfigManager, SessionState, apply_theme, console
    from vargos_cli.core.errors import VargosError
    from vargos_cli.display import report_error

    try:
        config = ConfigManager(args.config_path).load()
    except VargosError as e:
        return report_error(e, console)

    apply_theme(config.theme)
    base_url = args.server or config.mastra_url

    async with AgentClient(base_url=base_url) as client:
        try:
            if args.list_agents:
                await handle_list_agents(client)
                return 0

            if args.agent_info:
                await handle_agent_info(client, args.agent_info)
                return 0

            message = read_message(args.message)
            if message is not None:
                await handle_command_mode(client, config, message, args.agent)
                return 0

            session_state = SessionState(
                base_url,
                agent_name=args.agent or config.default_agent,
                thread_id=config.default_session,
                no_splash=args.no_splash,
            )
            session_state.log_file_path = os.environ.get("VARGOS_CLI_LOG_FILE")
            await chat_loop(client, session_state)
            return 0
        except VargosError as e:
            return report_error(e, console)


def run_cli(argv: list[str] | None = None) -> None:
    """Entry point for console script."""
    args = parse_args(argv)

    if args.command == "version":
        print(f"vargos-cli {__version__}")
        sys.exit(0)

    if args.command == "help":
        from vargos_cli.display import show_help

        show_help()
        sys.exit(0)

    setup_logging()

    from vargos_cli.core import console

    try:
        exit_code = asyncio.run(main(args))
    except KeyboardInterrupt:
        console.print("\n\n[yellow]Interrupted[/yellow]")
        exit_code = 130
    sys.exit(exit_code)


if __name__ == "__main__":
    run_cli()
