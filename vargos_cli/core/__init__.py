"""Core configuration, state and errors for the Vargos CLI."""

from vargos_cli.core.config import (
    COLORS,
    COMMANDS,
    VARGOS_ASCII,
    Config,
    ConfigManager,
    apply_theme,
    console,
    default_config_dir,
)
from vargos_cli.core.errors import (
    ConfigError,
    DecodeError,
    DirectoryError,
    InputError,
    NetworkError,
    StreamDecodeError,
    StreamError,
    StreamSetupError,
    VargosError,
)
from vargos_cli.core.state import SessionState

__all__ = [
    "COLORS",
    "COMMANDS",
    "VARGOS_ASCII",
    "Config",
    "ConfigError",
    "ConfigManager",
    "DecodeError",
    "DirectoryError",
    "InputError",
    "NetworkError",
    "SessionState",
    "StreamDecodeError",
    "StreamError",
    "StreamSetupError",
    "VargosError",
    "apply_theme",
    "console",
    "default_config_dir",
]
