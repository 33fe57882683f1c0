"""
API Client Module for vargos-cli
=================================

HTTP/SSE client for communicating with the agent server.

Components:
- client: AgentClient for directory calls and chat streaming
- sse: event-stream transport and frame decoder
- models: Agent, ChatRequest and StreamEvent models
- constants: Default URL, timeouts and endpoint paths

Submodules are imported directly (``vargos_cli.api.client``); the streaming
package depends on ``sse`` and ``models`` while ``client`` depends on the
streaming package.
"""
