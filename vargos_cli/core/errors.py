"""Error types raised by the Vargos CLI."""

from __future__ import annotations


class VargosError(Exception):
    """Base class for all CLI failures."""

    kind = "error"


class NetworkError(VargosError):
    """HTTP transport failed before a response was received."""

    kind = "network"

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class DirectoryError(VargosError):
    """The agent directory answered with a non-success status."""

    kind = "agent"

    def __init__(self, message: str, *, status_code: int, agent_name: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.agent_name = agent_name


class DecodeError(VargosError):
    """A response body did not match the expected schema."""

    kind = "serialization"


class StreamDecodeError(DecodeError):
    """An SSE frame failed strict decoding."""

    def __init__(self, message: str, *, raw_data: str) -> None:
        super().__init__(message)
        self.raw_data = raw_data


class StreamSetupError(VargosError):
    """The event-stream request could not be created."""

    kind = "stream"


class StreamError(VargosError):
    """The event stream failed after it was requested."""

    kind = "stream"

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class InputError(VargosError):
    """Caller input was rejected before any request was made."""

    kind = "input"


class ConfigError(VargosError):
    """Configuration file could not be read or parsed."""

    kind = "config"
