"""Tests for StreamingState from vargos_cli.streaming.state."""

from unittest.mock import Mock

import pytest

from vargos_cli.streaming.state import StreamingState


@pytest.fixture
def colors():
    """Color configuration for testing."""
    return {
        "agent": "#10b981",
        "user": "#ffffff",
        "tool": "#fbbf24",
    }


class TestStreamingState:
    """Tests for StreamingState class."""

    def test_initial_state_values(self, mock_console, colors):
        state = StreamingState(mock_console, "Waiting...", colors)

        assert state.has_responded is False
        assert state.pending_text == ""
        assert state.spinner_active is True

        mock_console.status.assert_called_once_with("Waiting...", spinner="dots")
        state._status.start.assert_called_once()

    def test_stop_spinner_is_idempotent(self, mock_console, colors):
        state = StreamingState(mock_console, "Waiting...", colors)

        state.stop_spinner()
        state.stop_spinner()

        assert state.spinner_active is False
        state._status.stop.assert_called_once()

    def test_append_text_stops_spinner_and_prints_marker_once(self, mock_console, colors):
        state = StreamingState(mock_console, "Waiting...", colors)

        state.append_text("Hel")
        state.append_text("lo")

        assert state.spinner_active is False
        assert state.has_responded is True
        assert state.pending_text == "Hello"
        markers = [c for c in mock_console.print.call_args_list if c.args and c.args[0] == "●"]
        assert len(markers) == 1

    def test_finish_ends_line_and_clears_pending(self, mock_console, colors):
        state = StreamingState(mock_console, "Waiting...", colors)
        state.append_text("Hi")
        mock_console.print.reset_mock()

        state.finish()

        assert state.pending_text == ""
        mock_console.print.assert_called_once_with()

    def test_finish_without_text_prints_nothing(self, mock_console, colors):
        state = StreamingState(mock_console, "Waiting...", colors)

        state.finish()

        mock_console.print.assert_not_called()
        assert state.spinner_active is False

    def test_flushes_console_file(self, mock_console, colors):
        mock_console.file = Mock()
        state = StreamingState(mock_console, "Waiting...", colors)

        state.append_text("x")

        mock_console.file.flush.assert_called_once()
