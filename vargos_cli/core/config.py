"""Configuration, constants, and settings for the Vargos CLI."""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import dotenv
import structlog
import yaml
from rich.console import Console

from vargos_cli.api.constants import DEFAULT_BASE_URL
from vargos_cli.core.errors import ConfigError
from vargos_cli.core.theme import build_palette, colors_disabled, palette_to_dict

dotenv.load_dotenv()

logger = structlog.get_logger(__name__)

APP_NAME = "vargos-cli"
CONFIG_FILE = "config.yaml"

# Environment variables that override config file values
ENV_MASTRA_URL = "VARGOS_CLI_MASTRA_URL"
ENV_AGENT = "VARGOS_CLI_AGENT"

# Color scheme, updated in place by apply_theme()
COLORS: dict[str, str] = palette_to_dict(build_palette())

VARGOS_ASCII = r"""
 __   ____ _ _ __ __ _  ___  ___
 \ \ / / _` | '__/ _` |/ _ \/ __|
  \ V / (_| | | | (_| | (_) \__ \
   \_/ \__,_|_|  \__, |\___/|___/
                 |___/
"""

# Interactive commands (for /help)
COMMANDS = {
    "help": "Show help information",
    "agents": "List available agents",
    "agent": "Show or switch the current agent: /agent [name]",
    "new": "Start a new conversation thread",
    "exit": "Exit the CLI",
}

# Rich console instance (respects NO_COLOR environment variable)
console = Console(highlight=False, no_color=colors_disabled())


def apply_theme(overrides: dict[str, str] | None) -> dict[str, str]:
    """Replace the shared COLORS with the palette built from ``overrides``."""
    COLORS.update(palette_to_dict(build_palette(overrides)))
    return COLORS


def default_config_dir() -> Path:
    """Get the per-user configuration directory for the CLI.

    Returns:
        ``$XDG_CONFIG_HOME/vargos-cli`` when set, otherwise the platform's
        user config directory joined with ``vargos-cli``.
    """
    if xdg := os.environ.get("XDG_CONFIG_HOME"):
        base = Path(xdg)
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    elif sys.platform == "win32" and os.environ.get("APPDATA"):
        base = Path(os.environ["APPDATA"])
    else:
        base = Path.home() / ".config"
    return base / APP_NAME


@dataclass
class Config:
    """User configuration for the CLI.

    Attributes:
        mastra_url: Agent server base URL
        default_agent: Agent used when none is given on the command line
        default_session: Thread id sent with command-mode chats
        theme: Color overrides keyed by palette entry (primary, agent, ...)
    """

    mastra_url: str = DEFAULT_BASE_URL
    default_agent: str | None = None
    default_session: str | None = None
    theme: dict[str, str] | None = field(default=None)

    @staticmethod
    def _optional_str(data: dict[str, Any], key: str) -> str | None:
        value = data.get(key)
        if value is None:
            return None
        if isinstance(value, (dict, list)):
            raise ConfigError(f"Invalid config: '{key}' must be a string")
        return str(value)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        theme = data.get("theme")
        if theme is not None and not isinstance(theme, dict):
            raise ConfigError("Invalid config: 'theme' must be a mapping")
        return cls(
            mastra_url=str(data.get("mastra_url") or DEFAULT_BASE_URL),
            default_agent=cls._optional_str(data, "default_agent"),
            default_session=cls._optional_str(data, "default_session"),
            theme={str(k): str(v) for k, v in theme.items()} if theme else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "mastra_url": self.mastra_url,
            "default_agent": self.default_agent,
            "default_session": self.default_session,
            "theme": self.theme,
        }

    def apply_env_overrides(self) -> "Config":
        """Apply environment variable overrides in place."""
        if url := os.environ.get(ENV_MASTRA_URL):
            self.mastra_url = url
        if agent := os.environ.get(ENV_AGENT):
            self.default_agent = agent
        return self


class ConfigManager:
    """Loads and saves the YAML config file."""

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize the manager.

        Args:
            config_path: Explicit config file. Defaults to
                ``default_config_dir() / "config.yaml"``; that directory is
                created if missing.
        """
        if config_path is None:
            config_dir = default_config_dir()
            try:
                config_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ConfigError(f"Failed to create config directory {config_dir}: {e}") from e
            config_path = config_dir / CONFIG_FILE
        self._config_path = Path(config_path)

    @property
    def config_path(self) -> Path:
        return self._config_path

    def load(self) -> Config:
        """Load config, writing the defaults first if the file does not exist.

        Environment overrides are applied to the returned config but never
        written back.
        """
        if not self._config_path.exists():
            config = Config()
            self.save(config)
            logger.info("config_created", path=str(self._config_path))
            return config.apply_env_overrides()

        try:
            content = self._config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Failed to read config file {self._config_path}: {e}") from e

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse config file {self._config_path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Failed to parse config file {self._config_path}: expected a mapping")

        return Config.from_dict(data).apply_env_overrides()

    def save(self, config: Config) -> None:
        """Write ``config`` as YAML."""
        content = yaml.safe_dump(config.to_dict(), sort_keys=False)
        try:
            self._config_path.parent.mkdir(parents=True, exist_ok=True)
            self._config_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Failed to write config file {self._config_path}: {e}") from e
