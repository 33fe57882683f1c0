"""Streaming state management for CLI output."""

from collections.abc import Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rich.console import Console


class StreamingState:
    """Manages streaming output state (spinner, live text, response tracking)."""

    def __init__(self, console: "Console", status_message: str, colors: Mapping[str, str]) -> None:
        """Initialize streaming state.

        Args:
            console: Rich console instance for output
            status_message: Initial status message for spinner
            colors: Color configuration dictionary
        """
        self.has_responded = False
        self.pending_text = ""
        self._console = console
        self._colors = colors
        self._status = console.status(status_message, spinner="dots")
        self._status.start()
        self._spinner_active = True

    @property
    def spinner_active(self) -> bool:
        """Check if spinner is currently active."""
        return self._spinner_active

    def stop_spinner(self) -> None:
        """Stop the spinner if it's currently active."""
        if self._spinner_active:
            self._status.stop()
            self._spinner_active = False

    def append_text(self, text: str) -> None:
        """Stream a text fragment directly to output.

        Args:
            text: Text to stream
        """
        if self._spinner_active:
            self.stop_spinner()

        # Show response marker on first text
        if not self.has_responded:
            self._console.print("●", style=self._colors["agent"], markup=False, end=" ")
            self.has_responded = True

        self._console.print(text, end="", style=self._colors["agent"], markup=False)
        if hasattr(self._console.file, "flush"):
            self._console.file.flush()

        self.pending_text += text

    def finish(self) -> None:
        """Stop the spinner and terminate the streamed line."""
        self.stop_spinner()

        if self.pending_text.strip():
            self._console.print()

        self.pending_text = ""
