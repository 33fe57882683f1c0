"""
Constants for API Client Module
================================

Server defaults, endpoint paths and timeouts used by the agent client.
"""

# Default configuration
DEFAULT_BASE_URL = "http://localhost:4862"
DEFAULT_TIMEOUT = 30.0
DEFAULT_CONNECT_TIMEOUT = 10.0

# Endpoint paths (relative to the server base URL)
AGENTS_PATH = "/api/agents"
AGENT_PATH = "/api/agents/{name}"
AGENT_STREAM_PATH = "/api/agents/{name}/stream"

EVENT_STREAM_CONTENT_TYPE = "text/event-stream"

# Discriminator values carried in the "type" field of stream payloads
TEXT_EVENT_TYPES = frozenset({"text", "text-delta"})
DONE_EVENT_TYPE = "done"
