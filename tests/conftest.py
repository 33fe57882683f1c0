"""Pytest configuration and shared fixtures for vargos-cli tests."""

import json
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, Mock

import httpx
import pytest

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

BASE_URL = "http://agents.test"


# ============================================================================
# Console & Display Fixtures
# ============================================================================


@pytest.fixture
def mock_console():
    """Mock Rich console for testing display functions."""
    console = Mock()
    console.print = Mock()
    console.status.return_value = MagicMock()
    return console


@pytest.fixture
def printed(mock_console):
    """Return a callable that joins everything printed to ``mock_console``."""

    def _printed() -> str:
        return "\n".join(str(c.args[0]) for c in mock_console.print.call_args_list if c.args)

    return _printed


# ============================================================================
# SessionState Fixtures
# ============================================================================


@pytest.fixture
def session_state():
    """Create a SessionState bound to the test server with an agent selected."""
    from vargos_cli.core.state import SessionState

    return SessionState(BASE_URL, agent_name="weather", thread_id="thread-1")


@pytest.fixture
def mock_discovery():
    """Create a mock AgentDiscovery."""
    discovery = AsyncMock()
    discovery.list_agents = AsyncMock(return_value=[])
    discovery.get_agent = AsyncMock()
    discovery.validate_agent = AsyncMock(return_value=True)
    return discovery


# ============================================================================
# Temporary Directory Fixtures
# ============================================================================


@pytest.fixture
def temp_home(tmp_path, monkeypatch):
    """Create a temporary home directory for testing."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home_dir)
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    return home_dir


@pytest.fixture
def clean_env(monkeypatch):
    """Remove environment overrides that would leak into config tests."""
    for name in ("VARGOS_CLI_MASTRA_URL", "VARGOS_CLI_AGENT", "VARGOS_CLI_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)


# ============================================================================
# HTTP Fixtures
# ============================================================================


def sse_body(*frames) -> bytes:
    """Encode frames as an event-stream body.

    Dicts are JSON-encoded into a ``data:`` line; strings are used verbatim
    as the data field.
    """
    chunks = []
    for frame in frames:
        data = json.dumps(frame) if isinstance(frame, dict) else frame
        chunks.append(f"data: {data}\n\n")
    return "".join(chunks).encode()


def sse_response(*frames, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code,
        headers={"content-type": "text/event-stream"},
        content=sse_body(*frames),
    )


@pytest.fixture
def make_client():
    """Build an AgentClient whose HTTP traffic goes to ``handler``."""
    from vargos_cli.api.client import AgentClient

    def _make(handler, base_url: str = BASE_URL):
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return AgentClient(base_url=base_url, client=http)

    return _make


@pytest.fixture
def stream_response():
    """Factory for ``text/event-stream`` responses (see ``sse_response``)."""
    return sse_response
